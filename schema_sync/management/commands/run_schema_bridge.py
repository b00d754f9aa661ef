"""
Management command running the schema bridge: Kafka schema topic -> Hive DDL.
"""

import signal

from confluent_kafka import KafkaException
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from hivebridge.utils.kafka import DeadLetterPublisher, SchemaTopicReader
from schema_sync.exceptions import SchemaBridgeError
from schema_sync.metrics import start_metrics_server
from schema_sync.replication import BridgeValidator, ErrorPolicy, SchemaIngestionLoop
from schema_sync.utils.ddl.adapters import build_executor


class Command(BaseCommand):
    help = 'Consume schema messages from Kafka and create the matching Hive databases and tables'

    def add_arguments(self, parser):
        parser.add_argument(
            '--error-policy',
            choices=[p.value for p in ErrorPolicy],
            help='What to do with a message that cannot be applied (default: ERROR_POLICY setting)',
        )
        parser.add_argument(
            '--executor',
            choices=['hive_cli', 'sqlalchemy'],
            help='Execution backend (default: EXECUTOR setting)',
        )
        parser.add_argument(
            '--max-messages',
            type=int,
            default=None,
            help='Stop after this many messages (default: run forever)',
        )
        parser.add_argument(
            '--skip-connection-check',
            action='store_true',
            help='Do not check METASTORE_URL before consuming',
        )

    def handle(self, *args, **options):
        config = dict(settings.SCHEMA_BRIDGE_CONFIG)
        if options['error_policy']:
            config['ERROR_POLICY'] = options['error_policy']
        if options['executor']:
            config['EXECUTOR'] = options['executor']

        validator = BridgeValidator(config)
        is_valid, errors = validator.validate_all()
        if not is_valid:
            raise CommandError(f"Invalid schema bridge configuration: {'; '.join(errors)}")

        if not options['skip_connection_check']:
            try:
                validator.check_engine_connection()
            except SchemaBridgeError as e:
                raise CommandError(str(e)) from e

        if start_metrics_server(config.get('METRICS_PORT')):
            self.stdout.write(f"Metrics exported on port {config['METRICS_PORT']}")

        policy = ErrorPolicy(config['ERROR_POLICY'])
        self.stdout.write(f"Topic: {config['SCHEMA_TOPIC']}")
        self.stdout.write(f"Consumer Group: {config['CONSUMER_GROUP']}")
        self.stdout.write(f"Executor: {config.get('EXECUTOR') or 'hive_cli'}")
        self.stdout.write(f"Error Policy: {policy.value}\n")

        executor = reader = dead_letter = None
        previous_handlers = {}
        try:
            executor = build_executor(config)
            reader = SchemaTopicReader(
                bootstrap_servers=config['KAFKA_BOOTSTRAP_SERVERS'],
                group_id=config['CONSUMER_GROUP'],
                topic=config['SCHEMA_TOPIC'],
                poll_timeout=config.get('POLL_TIMEOUT') or 1.0,
            )
            if policy is ErrorPolicy.DEAD_LETTER:
                dead_letter = DeadLetterPublisher(
                    bootstrap_servers=config['KAFKA_BOOTSTRAP_SERVERS'],
                    topic=config['DEAD_LETTER_TOPIC'],
                )

            loop = SchemaIngestionLoop(reader, executor, error_policy=policy, dead_letter=dead_letter)

            def _stop(signum, frame):
                loop.stop()

            for signum in (signal.SIGINT, signal.SIGTERM):
                previous_handlers[signum] = signal.signal(signum, _stop)

            self.stdout.write(self.style.SUCCESS('✅ Schema bridge started'))
            stats = loop.start(max_messages=options['max_messages'])

        except (SchemaBridgeError, KafkaException, ValueError) as e:
            raise CommandError(str(e)) from e

        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)
            if reader:
                reader.close()
            if dead_letter:
                dead_letter.close()
            if executor:
                executor.close()

        self.stdout.write(f'\nStatistics:')
        self.stdout.write(f'  Messages Applied: {self.style.SUCCESS(str(stats["messages_processed"]))}')
        self.stdout.write(f'  Messages Failed: {stats["messages_failed"]}')
        self.stdout.write(f'  Statements Executed: {stats["statements_executed"]}')
