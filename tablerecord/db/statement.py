"""
Statement container passed from the builders to the connection.

A Statement keeps the SQL text as fragments interleaved with typed
values, so the same statement can be sent either with driver-side
parameter binding or rendered to a literal string through the escaper:

    fragments = ("UPDATE t SET a = ", " WHERE id = ", "")
    values    = (BoundValue("x", TEXT), BoundValue(4, NUMERIC))

    .sql(Dialect.SQLITE)  -> 'UPDATE t SET a = ? WHERE id = ?'
    .literal()            -> "UPDATE t SET a = 'x' WHERE id = 4"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from ..dialects import Dialect, Primitive
from ..escaping import escape


@dataclass(frozen=True)
class BoundValue:
    value: Any
    primitive: Primitive = Primitive.TEXT


@dataclass(frozen=True)
class Statement:
    fragments: Tuple[str, ...]
    values: Tuple[BoundValue, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.fragments) != len(self.values) + 1:
            raise ValueError("Statement needs exactly one more fragment than values")

    @classmethod
    def text(cls, sql: str) -> "Statement":
        """Wrap SQL that carries no values."""
        return cls((sql,))

    @property
    def params(self) -> Tuple[Any, ...]:
        # sqlite3 cannot bind Decimal; the database coerces numeric text
        return tuple(
            str(v.value) if isinstance(v.value, Decimal) else v.value for v in self.values
        )

    def sql(self, dialect: Dialect) -> str:
        """SQL text with the dialect's bind placeholders."""
        if not self.values:
            return self.fragments[0]

        ph = dialect.placeholder
        frags = self.fragments
        if ph == "%s":
            # pymysql interpolates with %, so literal percents must be doubled
            frags = tuple(f.replace("%", "%%") for f in frags)
        return ph.join(frags)

    def literal(self, dialect: Optional[Dialect] = None) -> str:
        """SQL text with every value escaped inline."""
        out: List[str] = [self.fragments[0]]
        for bound, frag in zip(self.values, self.fragments[1:]):
            out.append(escape(bound.value, bound.primitive, dialect))
            out.append(frag)
        return "".join(out)

    def __str__(self) -> str:
        return self.literal()


class StatementWriter:
    """
    Incremental builder for Statement.

        w = StatementWriter()
        w.write("DELETE FROM t WHERE id = ")
        w.bind(5, Primitive.NUMERIC)
        stmt = w.build()
    """

    def __init__(self) -> None:
        self._fragments: List[str] = [""]
        self._values: List[BoundValue] = []

    def write(self, sql: str) -> "StatementWriter":
        self._fragments[-1] += sql
        return self

    def bind(self, value: Any, primitive: Primitive) -> "StatementWriter":
        self._values.append(BoundValue(value, primitive))
        self._fragments.append("")
        return self

    def build(self) -> Statement:
        return Statement(tuple(self._fragments), tuple(self._values))


__all__ = [
    "BoundValue",
    "Statement",
    "StatementWriter",
]
