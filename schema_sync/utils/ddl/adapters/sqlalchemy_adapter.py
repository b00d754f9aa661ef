"""
SQLAlchemy adapter.

Sends DDL straight to the engine over a SQLAlchemy connection (for example a
HiveServer2 dialect URL) instead of spawning the Hive CLI.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .base_adapter import BaseStatementExecutor

logger = logging.getLogger(__name__)


class SQLAlchemyExecutor(BaseStatementExecutor):
    """Execute DDL through a SQLAlchemy engine."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str) -> 'SQLAlchemyExecutor':
        """
        Raises:
            ValueError: the URL is malformed or its DBAPI driver is not installed
        """
        try:
            return cls(create_engine(url, pool_pre_ping=True, echo=False))
        except (SQLAlchemyError, ImportError) as e:
            raise ValueError(f"Cannot create SQLAlchemy engine: {e}") from e

    @property
    def engine_type(self) -> str:
        return 'sqlalchemy'

    def execute(self, sql: str) -> Tuple[bool, Optional[str]]:
        try:
            with self.engine.begin() as conn:
                conn.execute(text(sql))
            logger.info(f"   Executed: {sql[:100]}{'...' if len(sql) > 100 else ''}")
            return True, None
        except SQLAlchemyError as e:
            error_msg = str(e)
            logger.error(f"   Failed to execute SQL: {error_msg}")
            return False, error_msg

    def close(self):
        self.engine.dispose()
