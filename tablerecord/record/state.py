"""
Record state: the live, per-instance copy of a table schema.

Each column carries its schema metadata, a current value and a
`changed` flag. `changed` is only raised by set(); values copied in by a
read leave it down, which is how upsert tells "loaded but untouched"
from "intentionally modified".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from ..dialects import Primitive
from ..errors import ImmutableField, TypeMismatch, UnknownColumn
from ..escaping import is_numeric
from ..schema.models import ColumnSpec, TableSchema


# Record modes: decide whether the primary key may be written
MODE_INSERT = "insert"
MODE_UPDATE = "update"


@dataclass
class ColumnDescriptor:
    spec: ColumnSpec
    value: Any = None
    changed: bool = False

    @property
    def name(self) -> str:
        return self.spec.name


class RecordState:
    """
    Mutable column -> (metadata, value, changed) structure for one record.

    Parameters
    ----------
    schema : TableSchema
        Shadow schema the state is built from, and reset to.
    mode : str
        MODE_INSERT or MODE_UPDATE. In update mode the primary key can
        no longer be set.
    filters : Callable[[], Mapping[str, Any]]
        Returns the owner's current where-filter set. Without a primary
        key, filter columns identify the record and cannot be set.
    """

    def __init__(
        self,
        schema: TableSchema,
        mode: str = MODE_INSERT,
        filters: Optional[Callable[[], Mapping[str, Any]]] = None,
    ):
        self.schema = schema
        self.mode = mode
        self._filters = filters or dict
        self._columns: Dict[str, ColumnDescriptor] = {}
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Rebuild every column from the shadow schema, values cleared."""
        self._columns = {spec.name: ColumnDescriptor(spec) for spec in self.schema}

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._columns.values())

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def descriptor(self, name: str) -> ColumnDescriptor:
        try:
            return self._columns[name]
        except KeyError:
            raise UnknownColumn(name, self.schema.table) from None

    def get(self, name: str) -> Any:
        """
        Value of a column, as loaded or set; returned unescaped.

        Column names are case-sensitive and must match the database.
        """
        return self.descriptor(name).value

    def set(self, name: str, value: Any) -> None:
        """
        Set a column value and mark it changed.

        Raises
        ------
        UnknownColumn
            Column not in the table (case-sensitive).
        TypeMismatch
            NUMERIC column and a value that is neither numeric nor None.
        ImmutableField
            Primary key in update mode, or, on a table without primary
            key, a column used in the where-filter set.
        """
        col = self.descriptor(name)
        spec = col.spec

        if spec.primitive is Primitive.NUMERIC and value is not None and not is_numeric(value):
            raise TypeMismatch(
                f"Value {value!r} does not match the numeric data type of column {name!r}",
                column=name,
                value=value,
            )

        if self.schema.primary_key is not None:
            if spec.is_primary_key and self.mode == MODE_UPDATE:
                raise ImmutableField(f"Attempting to update the primary key {name!r}", name)
        elif name in self._filters():
            raise ImmutableField(
                f"Attempting to update {name!r}, which identifies the record in the "
                "WHERE condition of a table without primary key",
                name,
            )

        col.value = value
        col.changed = True

    def load(self, row: Mapping[str, Any]) -> None:
        """Copy a fetched row into the state; changed flags are cleared."""
        for name, value in row.items():
            col = self._columns.get(name)
            if col is None:
                continue
            col.value = value
            col.changed = False

    def assign_identity(self, value: Any) -> None:
        """Record the primary-key value without marking it changed."""
        pk = self.schema.primary_key
        if pk is not None:
            self._columns[pk.name].value = value

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def changed_columns(self) -> List[ColumnDescriptor]:
        return [c for c in self._columns.values() if c.changed]

    def values(self) -> Dict[str, Any]:
        return {name: c.value for name, c in self._columns.items()}

    def is_clean(self) -> bool:
        """True when no value is held and nothing is marked changed."""
        return all(c.value is None and not c.changed for c in self._columns.values())


__all__ = [
    "MODE_INSERT",
    "MODE_UPDATE",
    "ColumnDescriptor",
    "RecordState",
]
