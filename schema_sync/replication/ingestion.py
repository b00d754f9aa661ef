"""
Schema ingestion loop.

Reads one schema message at a time from Kafka, turns it into Hive DDL and
applies every statement before the next message is read:

    Reading -> decode -> CREATE DATABASE -> CREATE TABLE x N -> commit -> Reading

What happens when a message cannot be applied is decided by the error policy:
- fail_fast: the error propagates and the process stops (offset not committed)
- skip: the error is logged and the message is committed
- dead_letter: the payload is forwarded to a dead-letter topic, then committed

Broker errors always stop the loop.
"""

import logging
import time
from enum import Enum
from typing import Any, Dict, Optional

from confluent_kafka import KafkaException
from django.utils import timezone

from schema_sync.exceptions import (
    DeadLetterError,
    MessageProcessingError,
    MessageReadError,
    StatementExecutionError,
)
from schema_sync.logging_utils import (
    app_logger,
    log_ddl_statement,
    log_message_failure,
    log_operation,
    log_schema_message,
)
from schema_sync.metrics import ddl_execution_duration, ddl_statements_total, schema_messages_total
from schema_sync.models.schema import Schema
from schema_sync.utils.ddl.adapters import BaseStatementExecutor
from schema_sync.utils.ddl.synthesizer import DDLStatement, schema_statements

logger = logging.getLogger(__name__)


class ErrorPolicy(str, Enum):
    """What to do with a message that cannot be applied."""
    FAIL_FAST = 'fail_fast'
    SKIP = 'skip'
    DEAD_LETTER = 'dead_letter'


class SchemaIngestionLoop:
    """
    Drives schema messages from a reader through the DDL synthesizer into an
    executor, strictly one statement at a time.
    """

    def __init__(
        self,
        reader,
        executor: BaseStatementExecutor,
        error_policy: str = ErrorPolicy.FAIL_FAST,
        dead_letter=None,
    ):
        """
        Args:
            reader: SchemaTopicReader (read_message/commit/stop)
            executor: Backend that runs each DDL statement
            error_policy: ErrorPolicy value
            dead_letter: DeadLetterPublisher, required for the dead_letter policy
        """
        self.reader = reader
        self.executor = executor
        self.error_policy = ErrorPolicy(error_policy)
        self.dead_letter = dead_letter

        if self.error_policy is ErrorPolicy.DEAD_LETTER and dead_letter is None:
            raise ValueError("dead_letter policy requires a dead-letter publisher")

        self.should_stop = False
        self.stats = {
            'started_at': timezone.now(),
            'messages_processed': 0,
            'messages_failed': 0,
            'statements_executed': 0,
            'last_message_at': None,
        }

    def start(self, max_messages: Optional[int] = None) -> Dict[str, Any]:
        """
        Run until stopped, or until max_messages messages have been handled.

        Raises:
            MessageReadError: reading or committing failed
            DeadLetterError: a failed message could not be dead-lettered
            MessageProcessingError: a message failed under the fail_fast policy
        """
        logger.info(f"Starting schema ingestion (policy={self.error_policy.value})")
        self.should_stop = False
        handled = 0

        while not self.should_stop:
            if max_messages is not None and handled >= max_messages:
                break

            try:
                msg = self.reader.read_message()
            except KafkaException as e:
                raise MessageReadError(f"Error reading schema message: {e}") from e

            if msg is None:
                break

            self.handle_message(msg)
            handled += 1

        logger.info(f"Schema ingestion stopped after {handled} message(s)")
        return self.get_stats()

    def stop(self):
        """Finish the current message, then leave the loop."""
        logger.info("Stop signal received")
        self.should_stop = True
        self.reader.stop()

    def handle_message(self, msg):
        """Apply one Kafka message and commit it according to the error policy."""
        self.stats['last_message_at'] = timezone.now()
        try:
            self.apply_payload(msg.value(), msg=msg)
        except MessageProcessingError as e:
            self._handle_failure(msg, e)
        else:
            self.stats['messages_processed'] += 1
            schema_messages_total.labels(status='applied').inc()

        self._commit(msg)

    def apply_payload(self, payload, msg=None) -> Schema:
        """
        Decode a payload and apply its schema.

        Raises:
            SchemaDecodeError: payload is not a schema document
            SchemaValidationError: identifiers or tables cannot be rendered
            StatementExecutionError: the engine rejected a statement
        """
        schema = Schema.from_json(payload)
        if msg is not None:
            log_schema_message(
                msg.topic(), msg.partition(), msg.offset(),
                getattr(self.reader, 'group_id', None),
                database_name=schema.database_name,
                tables_count=len(schema.tables),
            )
        self.apply_schema(schema)
        return schema

    def apply_schema(self, schema: Schema):
        """Execute the database statement, then each table statement, stopping at the first failure."""
        with log_operation(app_logger, 'apply_schema', database_name=schema.database_name,
                           tables_count=len(schema.tables)):
            for statement in schema_statements(schema):
                self.execute_statement(statement)

    def execute_statement(self, statement: DDLStatement):
        log_ddl_statement(statement.target, statement.sql)

        start_time = time.time()
        success, error = self.executor.execute(statement.sql)
        ddl_execution_duration.labels(kind=statement.kind).observe(time.time() - start_time)

        if not success:
            ddl_statements_total.labels(kind=statement.kind, status='failed').inc()
            raise StatementExecutionError(statement.target, statement.sql, error)

        ddl_statements_total.labels(kind=statement.kind, status='success').inc()
        self.stats['statements_executed'] += 1

    def _handle_failure(self, msg, error: MessageProcessingError):
        self.stats['messages_failed'] += 1
        log_message_failure(
            error, self.error_policy.value,
            topic=msg.topic(), partition=msg.partition(), offset=msg.offset(),
        )
        if isinstance(error, StatementExecutionError):
            logger.error(f"Failing statement:\n{error.sql}")

        if self.error_policy is ErrorPolicy.FAIL_FAST:
            schema_messages_total.labels(status='failed').inc()
            raise error

        if self.error_policy is ErrorPolicy.DEAD_LETTER:
            try:
                self.dead_letter.publish(msg, error)
            except KafkaException as e:
                raise DeadLetterError(f"Failed to dead-letter schema message: {e}") from e
            schema_messages_total.labels(status='dead_lettered').inc()
        else:
            schema_messages_total.labels(status='skipped').inc()

    def _commit(self, msg):
        try:
            self.reader.commit(msg)
        except KafkaException as e:
            raise MessageReadError(f"Error committing schema message offset: {e}") from e

    def get_stats(self) -> Dict[str, Any]:
        return dict(self.stats)
