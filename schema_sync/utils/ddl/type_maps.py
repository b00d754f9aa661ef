"""
Type mappings from MySQL source types to Hive types.

Unknown source types never fail; they fall back to STRING so that ingestion
is not blocked by a column the map does not know about.
"""

from typing import Dict


DEFAULT_HIVE_TYPE = 'STRING'


# MySQL source types -> Hive types
MYSQL_TO_HIVE_TYPE_MAP: Dict[str, str] = {
    # Integer types
    'int': 'INT',
    'smallint': 'INT',
    'mediumint': 'INT',
    'bigint': 'INT',

    # String types
    'varchar': 'STRING',
    'char': 'STRING',
    'text': 'STRING',

    # Floating point / fixed-point types
    'float': 'DOUBLE',
    'double': 'DOUBLE',
    'decimal': 'DOUBLE',

    # Date/Time types
    'date': 'TIMESTAMP',
    'datetime': 'TIMESTAMP',
    'timestamp': 'TIMESTAMP',
}


def map_type(source_type: str) -> str:
    """
    Map a source column type name to a Hive type name.

    Args:
        source_type: Source column type (e.g. 'varchar', 'BIGINT')

    Returns:
        Hive type name

    Examples:
        >>> map_type('bigint')
        'INT'
        >>> map_type('json')
        'STRING'
    """
    if not source_type:
        return DEFAULT_HIVE_TYPE
    return MYSQL_TO_HIVE_TYPE_MAP.get(source_type.strip().lower(), DEFAULT_HIVE_TYPE)
