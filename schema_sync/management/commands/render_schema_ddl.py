"""
Management command printing the Hive DDL for a schema document without
executing it.
"""

import sys

from django.core.management.base import BaseCommand, CommandError

from schema_sync.exceptions import MessageProcessingError
from schema_sync.models.schema import Schema
from schema_sync.utils.ddl.synthesizer import schema_statements


class Command(BaseCommand):
    help = 'Print the DDL the bridge would run for a schema message (JSON file, or - for stdin)'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            nargs='?',
            default='-',
            help='Path to a schema message JSON document (default: stdin)',
        )

    def handle(self, *args, **options):
        path = options['path']
        try:
            if path == '-':
                payload = sys.stdin.buffer.read()
            else:
                with open(path, 'rb') as f:
                    payload = f.read()
        except OSError as e:
            raise CommandError(f"Cannot read {path}: {e}") from e

        try:
            statements = schema_statements(Schema.from_json(payload))
        except MessageProcessingError as e:
            raise CommandError(str(e)) from e

        self.stdout.write('\n\n'.join(statement.sql for statement in statements))
