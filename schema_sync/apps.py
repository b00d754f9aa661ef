from django.apps import AppConfig


class SchemaSyncConfig(AppConfig):
    name = 'schema_sync'
    verbose_name = 'Hive schema sync'
