from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from ..dialects import Dialect, Primitive
from ..errors import SchemaError, UnknownColumn


# ----------------------------------------------------------------------
# Column
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class ColumnSpec:
    name: str
    primitive: Primitive
    nullable: bool
    is_primary_key: bool = False
    is_auto_increment: bool = False
    declared_type: str = ""


# ----------------------------------------------------------------------
# Table (the shadow schema)
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class TableSchema:
    """
    Immutable description of one table, free of any record values.

    Built once by the introspector and kept by each record instance as
    its shadow copy; every reset() rebuilds the live record state from
    it without touching the database again.

    Invariants (checked on construction):
        - column names are unique
        - at most one primary-key column
        - an auto-increment column is the primary key
    """

    table: str
    dialect: Dialect
    columns: Tuple[ColumnSpec, ...]

    _by_name: Dict[str, ColumnSpec] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_name: Dict[str, ColumnSpec] = {}
        for col in self.columns:
            if col.name in by_name:
                raise SchemaError(f"Duplicate column {col.name!r}", self.table)
            if col.is_auto_increment and not col.is_primary_key:
                raise SchemaError(
                    f"Auto increment column {col.name!r} is not the primary key", self.table
                )
            by_name[col.name] = col

        keys = [c.name for c in self.columns if c.is_primary_key]
        if len(keys) > 1:
            raise SchemaError(
                f"Composite primary keys are not supported: {keys}", self.table
            )

        object.__setattr__(self, "_by_name", by_name)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def column(self, name: str) -> ColumnSpec:
        """Case-sensitive lookup; raises UnknownColumn."""
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownColumn(name, self.table) from None

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def primary_key(self) -> Optional[ColumnSpec]:
        for col in self.columns:
            if col.is_primary_key:
                return col
        return None


__all__ = [
    "ColumnSpec",
    "TableSchema",
]
