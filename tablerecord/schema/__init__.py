"""
tablerecord.schema

Runtime table reflection:
    - classify():  declared SQL type -> Primitive (NUMERIC / TEXT)
    - describe():  live table -> TableSchema
    - ColumnSpec / TableSchema: immutable schema records
"""

from .classifier import classify
from .introspector import describe
from .models import ColumnSpec, TableSchema

__all__ = [
    "classify",
    "describe",
    "ColumnSpec",
    "TableSchema",
]
