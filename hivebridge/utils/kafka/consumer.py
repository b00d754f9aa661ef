import logging
from typing import Optional

from confluent_kafka import Consumer, KafkaError, KafkaException, Message

logger = logging.getLogger(__name__)


class SchemaTopicReader:
    """
    Blocking, one-message-at-a-time reader for the schema topic.

    Offsets are committed explicitly by the caller after a message has been
    fully processed, which gives at-least-once delivery.
    """
    def __init__(
        self,
        bootstrap_servers: str,
        group_id: str,
        topic: str,
        poll_timeout: float = 1.0,
    ):
        self.config = {
            'bootstrap.servers': bootstrap_servers,
            'group.id': group_id,
            'auto.offset.reset': 'earliest',
            # Commit only after the message's DDL has been applied
            'enable.auto.commit': False,
            'heartbeat.interval.ms': 3000,
            'session.timeout.ms': 10000,
        }
        self.topic = topic
        self.group_id = group_id
        self.poll_timeout = poll_timeout
        self.consumer = Consumer(self.config)
        self.running = True
        self.consumer.subscribe([self.topic])
        logger.info(f"Subscribed to topic {self.topic} as group {self.group_id}")

    def read_message(self) -> Optional[Message]:
        """
        Block until the next message arrives.

        Returns:
            The message, or None if stop() was called while waiting.

        Raises:
            KafkaException: the broker reported an error
        """
        while self.running:
            msg = self.consumer.poll(timeout=self.poll_timeout)

            if msg is None:
                continue
            if msg.error():
                if msg.error().code() == KafkaError._PARTITION_EOF:
                    continue
                raise KafkaException(msg.error())
            return msg
        return None

    def commit(self, msg: Message):
        """Synchronously commit the offset following msg."""
        self.consumer.commit(message=msg, asynchronous=False)

    def stop(self, signum=None, frame=None):
        """Stop waiting for messages. Usable as a signal handler."""
        logger.info("Shutdown signal received. Stopping reader...")
        self.running = False

    def close(self):
        try:
            self.consumer.close()
            logger.info("Consumer closed successfully.")
        except KafkaException as e:
            logger.error(f"Error while closing consumer: {e}")
