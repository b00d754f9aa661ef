"""
Hive DDL handling for schema messages.

- type_maps: MySQL source type -> Hive type
- synthesizer: CREATE DATABASE / CREATE TABLE generation
- adapters: execution backends (Hive CLI, SQLAlchemy)
"""

from .type_maps import map_type, MYSQL_TO_HIVE_TYPE_MAP, DEFAULT_HIVE_TYPE
from .synthesizer import (
    DDLStatement,
    DDLStatementKind,
    database_ddl,
    table_ddl,
    schema_statements,
    validate_identifier,
)
from .adapters import BaseStatementExecutor, HiveCLIExecutor, SQLAlchemyExecutor, build_executor

__all__ = [
    'map_type',
    'MYSQL_TO_HIVE_TYPE_MAP',
    'DEFAULT_HIVE_TYPE',
    'DDLStatement',
    'DDLStatementKind',
    'database_ddl',
    'table_ddl',
    'schema_statements',
    'validate_identifier',
    'BaseStatementExecutor',
    'HiveCLIExecutor',
    'SQLAlchemyExecutor',
    'build_executor',
]
