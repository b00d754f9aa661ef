"""
Base adapter for DDL statement execution.

Provides the abstract interface every execution backend implements.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class BaseStatementExecutor(ABC):
    """
    Abstract base class for execution engine backends.

    Implementations run one DDL statement at a time and block until the
    engine has finished with it.
    """

    @property
    @abstractmethod
    def engine_type(self) -> str:
        """Return backend identifier."""
        pass

    @abstractmethod
    def execute(self, sql: str) -> Tuple[bool, Optional[str]]:
        """
        Execute a DDL statement.

        Args:
            sql: Statement to execute

        Returns:
            Tuple[bool, Optional[str]]: (success, error_message)
        """
        pass

    def close(self):
        """Release backend resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
