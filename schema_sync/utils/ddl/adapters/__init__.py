"""
Execution engine adapters for DDL statements.
"""

from typing import Any, Dict

from .base_adapter import BaseStatementExecutor
from .hive_cli_adapter import HiveCLIExecutor
from .sqlalchemy_adapter import SQLAlchemyExecutor

__all__ = [
    'BaseStatementExecutor',
    'HiveCLIExecutor',
    'SQLAlchemyExecutor',
    'build_executor',
]


def build_executor(config: Dict[str, Any], executor_type: str = None) -> BaseStatementExecutor:
    """
    Build the executor selected by SCHEMA_BRIDGE_CONFIG.

    Args:
        config: SCHEMA_BRIDGE_CONFIG mapping
        executor_type: Overrides config['EXECUTOR'] when given

    Raises:
        ValueError: unknown executor type, or 'sqlalchemy' without ENGINE_URL
    """
    executor_type = (executor_type or config.get('EXECUTOR') or 'hive_cli').lower()

    if executor_type == 'hive_cli':
        return HiveCLIExecutor(
            hive_binary=config.get('HIVE_BINARY', '/usr/local/hive/bin/hive'),
            hadoop_home=config.get('HADOOP_HOME', '/usr/local/hadoop'),
            hadoop_bin=config.get('HADOOP_BIN', '/usr/local/hadoop/bin'),
            timeout=config.get('EXECUTION_TIMEOUT'),
        )
    elif executor_type == 'sqlalchemy':
        url = config.get('ENGINE_URL')
        if not url:
            raise ValueError("ENGINE_URL must be set to use the sqlalchemy executor")
        return SQLAlchemyExecutor.from_url(url)
    else:
        raise ValueError(f"Unsupported executor type: {executor_type}")
