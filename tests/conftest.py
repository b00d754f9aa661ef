"""Pytest configuration: Django settings and Kafka/engine doubles."""

import json
import os
from unittest.mock import MagicMock

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hivebridge.settings')

import django

django.setup()

import pytest

from schema_sync.utils.ddl.adapters import BaseStatementExecutor


ORDERS_SCHEMA = {
    "database_name": "sales",
    "tables": [
        {
            "name": "orders",
            "columns": [
                {"name": "id", "data_type": "int", "is_nullable": False, "is_primary": True},
                {"name": "note", "data_type": "varchar", "is_nullable": True, "is_primary": False},
            ],
        }
    ],
}


def make_message(payload, topic='variant', partition=0, offset=0, key=None):
    """Build a stand-in for confluent_kafka.Message."""
    if isinstance(payload, dict):
        payload = json.dumps(payload).encode('utf-8')
    msg = MagicMock(name=f'Message@{offset}')
    msg.value.return_value = payload
    msg.key.return_value = key
    msg.topic.return_value = topic
    msg.partition.return_value = partition
    msg.offset.return_value = offset
    msg.error.return_value = None
    return msg


class FakeReader:
    """Serves queued messages, then behaves like a stopped reader."""

    group_id = '0'

    def __init__(self, messages):
        self.messages = list(messages)
        self.committed = []
        self.stopped = False

    def read_message(self):
        if self.stopped or not self.messages:
            return None
        item = self.messages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def commit(self, msg):
        self.committed.append(msg)

    def stop(self):
        self.stopped = True


class RecordingExecutor(BaseStatementExecutor):
    """Records statements; fails on any statement containing a fail_on marker."""

    def __init__(self, fail_on=None, error='failed to execute Hive query: exit status 1'):
        self.fail_on = fail_on
        self.error = error
        self.statements = []
        self.closed = False

    @property
    def engine_type(self):
        return 'recording'

    def execute(self, sql):
        self.statements.append(sql)
        if self.fail_on and self.fail_on in sql:
            return False, self.error
        return True, None

    def close(self):
        self.closed = True


@pytest.fixture
def orders_schema():
    return json.loads(json.dumps(ORDERS_SCHEMA))


@pytest.fixture
def recording_executor():
    return RecordingExecutor()
