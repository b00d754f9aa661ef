"""
Logging utility functions for structured logging
"""
import logging
import time
from contextlib import contextmanager

# Get loggers for different parts of the application
app_logger = logging.getLogger('schema_sync')
kafka_logger = logging.getLogger('schema_sync.kafka')
ddl_logger = logging.getLogger('schema_sync.ddl')


def log_with_context(logger, level, message, **context):
    """
    Log a message with additional context fields

    Args:
        logger: The logger instance to use
        level: Log level (INFO, ERROR, WARNING, etc.)
        message: The log message
        **context: Additional context fields (database_name, target, etc.)

    Example:
        log_with_context(
            ddl_logger,
            'INFO',
            'Table created',
            database_name='sales',
            table_name='orders',
            duration=0.8
        )
    """
    extra = {k: v for k, v in context.items() if v is not None}
    logger.log(getattr(logging, level.upper()), message, extra=extra)


@contextmanager
def log_operation(logger, operation_name, **context):
    """
    Context manager to log the start, end, and duration of an operation

    Example:
        with log_operation(app_logger, 'apply_schema', database_name='sales'):
            apply(schema)
    """
    start_time = time.time()

    log_with_context(
        logger,
        'INFO',
        f'{operation_name} started',
        operation=operation_name,
        **context
    )

    try:
        yield

        duration = time.time() - start_time
        log_with_context(
            logger,
            'INFO',
            f'{operation_name} completed successfully',
            operation=operation_name,
            duration=duration,
            status='success',
            **context
        )

    except Exception as e:
        duration = time.time() - start_time
        log_with_context(
            logger,
            'ERROR',
            f'{operation_name} failed: {str(e)}',
            operation=operation_name,
            duration=duration,
            status='failed',
            error_type=type(e).__name__,
            error_message=str(e),
            **context
        )
        raise


# ====================================
# SCHEMA BRIDGE LOGGING FUNCTIONS
# ====================================

def log_schema_message(topic, partition, offset, consumer_group, database_name=None, tables_count=None):
    """Log a schema message read from Kafka"""
    log_with_context(
        kafka_logger,
        'INFO',
        'Schema message received',
        topic=topic,
        partition=partition,
        offset=offset,
        consumer_group=consumer_group,
        database_name=database_name,
        tables_count=tables_count,
        operation='message_consume'
    )


def log_ddl_statement(target, sql):
    """Log a DDL statement right before it is sent to the engine"""
    log_with_context(
        ddl_logger,
        'INFO',
        f'Applying DDL for {target}:\n{sql}',
        target=target,
        operation='ddl_execute'
    )


def log_message_failure(error, policy, topic=None, partition=None, offset=None):
    """Log a schema message that could not be applied"""
    log_with_context(
        app_logger,
        'ERROR',
        f'Schema message failed ({policy}): {str(error)}',
        topic=topic,
        partition=partition,
        offset=offset,
        policy=policy,
        operation='message_failed',
        error_type=type(error).__name__,
        error_message=str(error)
    )
