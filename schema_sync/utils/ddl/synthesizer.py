"""
Hive DDL generation for schema messages.

Builds CREATE DATABASE / CREATE TABLE statements with IF NOT EXISTS so that
re-applying a redelivered message is a no-op on the engine side.
"""

import logging
import re
from dataclasses import dataclass
from typing import List

from schema_sync.exceptions import EmptyTableError, InvalidIdentifierError
from schema_sync.models.schema import Schema, Table
from .type_maps import map_type

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


class DDLStatementKind:
    DATABASE = 'database'
    TABLE = 'table'


@dataclass
class DDLStatement:
    """
    A generated statement together with what it creates.

    Attributes:
        kind: DDLStatementKind.DATABASE or DDLStatementKind.TABLE
        target: Human readable target, e.g. 'table sales.orders'
        sql: Statement text
    """
    kind: str
    target: str
    sql: str

    def __str__(self) -> str:
        return f"DDLStatement({self.target})"


def validate_identifier(identifier: str, role: str) -> str:
    """
    Ensure an identifier can be spliced into DDL text unquoted.

    Raises:
        InvalidIdentifierError: identifier is empty or contains characters
            outside [A-Za-z0-9_], or starts with a digit
    """
    if not isinstance(identifier, str) or not IDENTIFIER_PATTERN.match(identifier):
        raise InvalidIdentifierError(identifier, role)
    return identifier


def database_ddl(database_name: str) -> str:
    """Generate the Hive database creation statement."""
    validate_identifier(database_name, 'database')
    return f"CREATE DATABASE IF NOT EXISTS {database_name};"


def table_ddl(database_name: str, table: Table) -> str:
    """
    Generate the Hive table creation statement.

    Columns are rendered in input order, non-nullable columns get NOT NULL.

    Raises:
        InvalidIdentifierError: database, table or column name is not a plain identifier
        EmptyTableError: table has no columns
    """
    validate_identifier(database_name, 'database')
    validate_identifier(table.name, 'table')
    if not table.columns:
        raise EmptyTableError(database_name, table.name)

    column_lines = []
    for col in table.columns:
        validate_identifier(col.name, 'column')
        line = f"  {col.name} {map_type(col.data_type)}"
        if not col.is_nullable:
            line += " NOT NULL"
        column_lines.append(line)

    return (
        f"CREATE TABLE IF NOT EXISTS {database_name}.{table.name} (\n"
        + ",\n".join(column_lines)
        + "\n);"
    )


def schema_statements(schema: Schema) -> List[DDLStatement]:
    """
    Generate every statement for a schema: the database first, then one per
    table in input order.

    All statements are built before any is returned, so a validation error
    in the last table stops the message before anything is executed.
    """
    statements = [
        DDLStatement(
            kind=DDLStatementKind.DATABASE,
            target=f"database {schema.database_name}",
            sql=database_ddl(schema.database_name),
        )
    ]
    for table in schema.tables:
        statements.append(
            DDLStatement(
                kind=DDLStatementKind.TABLE,
                target=f"table {schema.database_name}.{table.name}",
                sql=table_ddl(schema.database_name, table),
            )
        )
    logger.debug(f"Generated {len(statements)} statements for database {schema.database_name}")
    return statements
