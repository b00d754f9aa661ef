from .schema import Column, Table, Schema

__all__ = [
    'Column',
    'Table',
    'Schema',
]
