"""
Replication module - schema message ingestion.

- SchemaIngestionLoop: reads schema messages and applies their DDL
- ErrorPolicy: fail_fast / skip / dead_letter handling of failed messages
- BridgeValidator: pre-flight checks before the loop starts
"""

from .ingestion import ErrorPolicy, SchemaIngestionLoop
from .validators import BridgeValidator, check_engine_connection

__all__ = [
    'ErrorPolicy',
    'SchemaIngestionLoop',
    'BridgeValidator',
    'check_engine_connection',
]
