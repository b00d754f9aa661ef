"""
Schema message model.

One Schema is decoded per Kafka message and lives only until the DDL for
that message has been executed.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from schema_sync.exceptions import SchemaDecodeError


def _field(data: Dict[str, Any], key: str, expected: type, default: Any, where: str) -> Any:
    """Read an optional JSON field, treating absent and null as the zero value."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, expected):
        raise SchemaDecodeError(
            f"Field '{key}' of {where} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaDecodeError(f"{where} must be a JSON object, got {type(value).__name__}")
    return value


@dataclass
class Column:
    """
    A column of a source table.

    Attributes:
        name: Column name
        data_type: Source engine type name (e.g. 'varchar')
        is_nullable: Whether the column accepts NULL
        is_primary: Part of the source primary key. Carried for forward
            compatibility, not rendered in DDL.
    """
    name: str
    data_type: str
    is_nullable: bool = False
    is_primary: bool = False

    @classmethod
    def from_dict(cls, data: Any, where: str = 'column') -> 'Column':
        data = _object(data, where)
        return cls(
            name=_field(data, 'name', str, '', where),
            data_type=_field(data, 'data_type', str, '', where),
            is_nullable=_field(data, 'is_nullable', bool, False, where),
            is_primary=_field(data, 'is_primary', bool, False, where),
        )


@dataclass
class Table:
    name: str
    columns: List[Column] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str = 'table') -> 'Table':
        data = _object(data, where)
        name = _field(data, 'name', str, '', where)
        raw_columns = _field(data, 'columns', list, [], where)
        columns = [
            Column.from_dict(raw, where=f"column {index} of table '{name}'")
            for index, raw in enumerate(raw_columns)
        ]
        return cls(name=name, columns=columns)


@dataclass
class Schema:
    database_name: str
    tables: List[Table] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'Schema':
        data = _object(data, 'schema document')
        raw_tables = _field(data, 'tables', list, [], 'schema document')
        tables = [
            Table.from_dict(raw, where=f"table {index}")
            for index, raw in enumerate(raw_tables)
        ]
        return cls(
            database_name=_field(data, 'database_name', str, '', 'schema document'),
            tables=tables,
        )

    @classmethod
    def from_json(cls, payload: Union[bytes, str]) -> 'Schema':
        """
        Decode a schema message value.

        Raises:
            SchemaDecodeError: payload is not UTF-8 JSON or does not have the
                schema document shape
        """
        if payload is None:
            raise SchemaDecodeError("Message has no value")
        try:
            if isinstance(payload, bytes):
                payload = payload.decode('utf-8')
            data = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SchemaDecodeError(f"Error unmarshalling schema: {e}") from e
        return cls.from_dict(data)
