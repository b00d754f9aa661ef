"""
Exceptions raised by the schema bridge.

MessageProcessingError and its subclasses describe a problem with a single
schema message; the ingestion loop hands them to the configured error policy.
Everything else is fatal to the process.
"""


class SchemaBridgeError(Exception):
    """Base exception for schema bridge errors."""
    pass


class EngineConnectionError(SchemaBridgeError):
    """The execution engine's backing store could not be reached at startup."""
    pass


class MessageReadError(SchemaBridgeError):
    """Reading from the schema topic failed."""
    pass


class DeadLetterError(SchemaBridgeError):
    """A failed message could not be forwarded to the dead-letter topic."""
    pass


class MessageProcessingError(SchemaBridgeError):
    """A single schema message could not be applied."""
    pass


class SchemaDecodeError(MessageProcessingError):
    """Message payload is not a valid schema document."""
    pass


class SchemaValidationError(MessageProcessingError):
    """Schema decoded but cannot be turned into valid DDL."""
    pass


class InvalidIdentifierError(SchemaValidationError):

    def __init__(self, identifier, role):
        self.identifier = identifier
        self.role = role
        super().__init__(f"Invalid {role} identifier: {identifier!r}")


class EmptyTableError(SchemaValidationError):

    def __init__(self, database_name, table_name):
        self.database_name = database_name
        self.table_name = table_name
        super().__init__(f"Table {database_name}.{table_name} has no columns")


class StatementExecutionError(MessageProcessingError):
    """
    The execution engine rejected a DDL statement.

    Attributes:
        target: What the statement creates ('database sales', 'table sales.orders')
        sql: The statement text
        detail: Error reported by the executor
    """

    def __init__(self, target, sql, detail):
        self.target = target
        self.sql = sql
        self.detail = detail
        super().__init__(f"Error creating {target} in Hive: {detail}")
