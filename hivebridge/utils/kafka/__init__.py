"""
Kafka helpers for the schema bridge: topic reader and dead-letter publisher.
"""

from .consumer import SchemaTopicReader
from .dead_letter import DeadLetterPublisher

__all__ = [
    'SchemaTopicReader',
    'DeadLetterPublisher',
]
