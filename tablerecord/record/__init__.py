"""
tablerecord.record

Single-record state, statement builders and operations.
"""

from .operations import (
    DeleteRecord,
    NewRecord,
    ReadUpdateRecord,
    RecordStatus,
    SingleRecord,
    UpsertRecord,
)
from .state import MODE_INSERT, MODE_UPDATE, ColumnDescriptor, RecordState
from .statements import build_delete, build_insert, build_select, build_update

__all__ = [
    "DeleteRecord",
    "NewRecord",
    "ReadUpdateRecord",
    "RecordStatus",
    "SingleRecord",
    "UpsertRecord",
    "MODE_INSERT",
    "MODE_UPDATE",
    "ColumnDescriptor",
    "RecordState",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
]
