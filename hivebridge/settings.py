"""
Django settings for the hive schema bridge.

All runtime knobs are read from the environment once at import time and kept
in SCHEMA_BRIDGE_CONFIG.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_float(name, default=None):
    value = os.environ.get(name)
    if value in (None, ''):
        return default
    return float(value)


def _env_int(name, default=None):
    value = os.environ.get(name)
    if value in (None, ''):
        return default
    return int(value)


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'hivebridge-insecure-development-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'schema_sync.apps.SchemaSyncConfig',
]

# The bridge owns no relational state of its own.
DATABASES = {}

USE_TZ = True
TIME_ZONE = 'UTC'

# ====================================
# SCHEMA BRIDGE
# ====================================
SCHEMA_BRIDGE_CONFIG = {
    # Kafka
    'KAFKA_BOOTSTRAP_SERVERS': os.environ.get('SCHEMA_BRIDGE_KAFKA_BOOTSTRAP_SERVERS', 'localhost:9092'),
    'SCHEMA_TOPIC': os.environ.get('SCHEMA_BRIDGE_TOPIC', 'variant'),
    'CONSUMER_GROUP': os.environ.get('SCHEMA_BRIDGE_CONSUMER_GROUP', '0'),
    'POLL_TIMEOUT': _env_float('SCHEMA_BRIDGE_POLL_TIMEOUT', 1.0),

    # Execution engine: 'hive_cli' or 'sqlalchemy'
    'EXECUTOR': os.environ.get('SCHEMA_BRIDGE_EXECUTOR', 'hive_cli'),
    'HIVE_BINARY': os.environ.get('SCHEMA_BRIDGE_HIVE_BINARY', '/usr/local/hive/bin/hive'),
    'HADOOP_HOME': os.environ.get('SCHEMA_BRIDGE_HADOOP_HOME', '/usr/local/hadoop'),
    'HADOOP_BIN': os.environ.get('SCHEMA_BRIDGE_HADOOP_BIN', '/usr/local/hadoop/bin'),
    'EXECUTION_TIMEOUT': _env_float('SCHEMA_BRIDGE_EXECUTION_TIMEOUT'),
    'ENGINE_URL': os.environ.get('SCHEMA_BRIDGE_ENGINE_URL') or None,

    # Checked once at startup when set
    'METASTORE_URL': os.environ.get('SCHEMA_BRIDGE_METASTORE_URL') or None,

    # 'fail_fast', 'skip' or 'dead_letter'
    'ERROR_POLICY': os.environ.get('SCHEMA_BRIDGE_ERROR_POLICY', 'fail_fast'),
    'DEAD_LETTER_TOPIC': os.environ.get('SCHEMA_BRIDGE_DEAD_LETTER_TOPIC', 'variant.dlq'),

    'METRICS_PORT': _env_int('SCHEMA_BRIDGE_METRICS_PORT'),
}

# ====================================
# LOGGING
# ====================================
LOG_LEVEL = os.environ.get('SCHEMA_BRIDGE_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'schema_sync': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'hivebridge': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
