"""
Dead-letter publishing for schema messages that could not be applied.

The original payload is forwarded untouched; the failure is described in
message headers so the topic can be replayed after a fix.
"""

import logging
from typing import List, Tuple

from confluent_kafka import KafkaException, Message, Producer

logger = logging.getLogger(__name__)


class DeadLetterPublisher:

    def __init__(self, bootstrap_servers: str, topic: str, flush_timeout: float = 10.0):
        """
        Args:
            bootstrap_servers: Kafka bootstrap servers
            topic: Dead-letter topic name
            flush_timeout: Seconds to wait for the broker to acknowledge a publish
        """
        self.topic = topic
        self.flush_timeout = flush_timeout
        self.producer_config = {
            'bootstrap.servers': bootstrap_servers,
        }
        self.producer = Producer(self.producer_config)
        logger.info(f"Dead-letter publisher ready for topic {self.topic}")

    @staticmethod
    def build_headers(msg: Message, error: Exception) -> List[Tuple[str, bytes]]:
        return [
            ('error', str(error).encode('utf-8')),
            ('error_type', type(error).__name__.encode('utf-8')),
            ('source_topic', str(msg.topic()).encode('utf-8')),
            ('source_partition', str(msg.partition()).encode('utf-8')),
            ('source_offset', str(msg.offset()).encode('utf-8')),
        ]

    def publish(self, msg: Message, error: Exception):
        """
        Forward msg to the dead-letter topic and wait for delivery.

        Raises:
            KafkaException: the broker rejected the message or did not
                acknowledge it within flush_timeout
        """
        delivery_errors = []

        def _delivery_callback(err, delivered):
            if err:
                logger.error(f"❌ Dead-letter delivery failed: {err}")
                delivery_errors.append(err)
            else:
                logger.debug(
                    f"✅ Dead-letter delivered to {delivered.topic()} "
                    f"[{delivered.partition()}] @ offset {delivered.offset()}"
                )

        self.producer.produce(
            self.topic,
            key=msg.key(),
            value=msg.value(),
            headers=self.build_headers(msg, error),
            callback=_delivery_callback,
        )
        remaining = self.producer.flush(timeout=self.flush_timeout)
        if remaining:
            raise KafkaException(
                f"{remaining} dead-letter message(s) not delivered to {self.topic}"
            )
        # flush() returns 0 once the delivery report is served, even when the broker rejected it
        if delivery_errors:
            raise KafkaException(delivery_errors[0])
        logger.warning(
            f"Forwarded message {msg.topic()}[{msg.partition()}]@{msg.offset()} "
            f"to dead-letter topic {self.topic}"
        )

    def close(self):
        self.producer.flush(timeout=self.flush_timeout)
