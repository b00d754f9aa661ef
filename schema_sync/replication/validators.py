"""
Validation logic for the schema bridge.

Provides pre-flight checks run before the ingestion loop starts.
"""

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from schema_sync.exceptions import EngineConnectionError
from .ingestion import ErrorPolicy

logger = logging.getLogger(__name__)


class BridgeValidator:
    """
    Validates prerequisites for running the bridge.
    Configuration checks return (bool, str) - (is_valid, error_message).
    """

    def __init__(self, bridge_config: Dict[str, Any]):
        self.config = bridge_config

    def validate_all(self) -> Tuple[bool, List[str]]:
        """
        Run all configuration validations and return consolidated result.

        Returns:
            (is_valid, [error_messages])
        """
        logger.info("Running pre-flight validation...")

        validations = [
            self._validate_kafka_config(),
            self._validate_error_policy(),
            self._validate_executor_config(),
        ]

        errors = [error_msg for is_valid, error_msg in validations if not is_valid]

        if errors:
            logger.error(f"Validation failed: {errors}")
            return False, errors

        logger.info("✓ All validations passed")
        return True, []

    def _validate_kafka_config(self) -> Tuple[bool, str]:
        if not self.config.get('KAFKA_BOOTSTRAP_SERVERS'):
            return False, "KAFKA_BOOTSTRAP_SERVERS is not configured"
        if not self.config.get('SCHEMA_TOPIC'):
            return False, "SCHEMA_TOPIC is not configured"
        if self.config.get('CONSUMER_GROUP') in (None, ''):
            return False, "CONSUMER_GROUP is not configured"
        return True, ""

    def _validate_error_policy(self) -> Tuple[bool, str]:
        policy = self.config.get('ERROR_POLICY', ErrorPolicy.FAIL_FAST.value)
        try:
            policy = ErrorPolicy(policy)
        except ValueError:
            allowed = ', '.join(p.value for p in ErrorPolicy)
            return False, f"Unknown ERROR_POLICY {policy!r} (expected one of: {allowed})"

        if policy is ErrorPolicy.DEAD_LETTER and not self.config.get('DEAD_LETTER_TOPIC'):
            return False, "DEAD_LETTER_TOPIC is required when ERROR_POLICY is dead_letter"
        return True, ""

    def _validate_executor_config(self) -> Tuple[bool, str]:
        executor = (self.config.get('EXECUTOR') or 'hive_cli').lower()
        if executor == 'hive_cli':
            if not self.config.get('HIVE_BINARY'):
                return False, "HIVE_BINARY is not configured"
            return True, ""
        if executor == 'sqlalchemy':
            if not self.config.get('ENGINE_URL'):
                return False, "ENGINE_URL is required for the sqlalchemy executor"
            return True, ""
        return False, f"Unsupported executor type: {executor}"

    def check_engine_connection(self):
        """
        Open a session against METASTORE_URL, when configured.

        Raises:
            EngineConnectionError: the backing store cannot be reached
        """
        url = self.config.get('METASTORE_URL')
        if not url:
            logger.info("⚠️ METASTORE_URL not set, skipping engine connection check")
            return
        check_engine_connection(url)


def check_engine_connection(url: str):
    """
    Run SELECT 1 against url.

    Raises:
        EngineConnectionError: the engine could not be created or queried
    """
    engine = None
    try:
        display_url = make_url(url).render_as_string(hide_password=True)
        engine = create_engine(url, pool_pre_ping=True, echo=False)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
    except (SQLAlchemyError, ImportError) as e:
        # ImportError: the dialect is known but its DBAPI driver is not installed
        raise EngineConnectionError(f"Cannot connect to execution engine store: {e}") from e
    finally:
        if engine is not None:
            engine.dispose()
    logger.info(f"✓ Connected to {display_url}")
