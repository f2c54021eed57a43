"""
Value escaper.

Renders a scalar as a literal SQL fragment according to the primitive
class of the column it is destined for. Statements are normally sent
with driver-side parameter binding; literal rendering is used when
binding is turned off in configuration, and for logging.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .dialects import Dialect, Primitive
from .errors import TypeMismatch

# ASCII digits only: Decimal() would also take "1_000" and non-Latin digits
_NUMERIC_TEXT = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)


def is_numeric(value: Any) -> bool:
    """
    True for int, float, Decimal and bool, and for strings holding a
    finite decimal number (" 42", "-3.5", "1e3").
    """
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        if not _NUMERIC_TEXT.fullmatch(value):
            return False
        try:
            return Decimal(value.strip()).is_finite()
        except InvalidOperation:
            return False
    return False


def render_numeric(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return value.strip()
    return str(value)


def escape_text(value: Any, dialect: Optional[Dialect] = None) -> str:
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TypeMismatch(f"Bytes value is not valid UTF-8: {exc}", value=value) from exc
    text = str(value)
    # MySQL also treats backslash as an escape character in literals
    if dialect is Dialect.MARIADB:
        text = text.replace("\\", "\\\\")
    return "'" + text.replace("'", "''") + "'"


def escape(value: Any, primitive: Primitive, dialect: Optional[Dialect] = None) -> str:
    """
    Escape and quote a value for a column of the given primitive class.

    Parameters
    ----------
    value:
        Scalar to render. None always renders as NULL.
    primitive:
        Primitive.NUMERIC renders unquoted; Primitive.TEXT renders as a
        single-quoted literal with embedded quotes doubled.
    dialect:
        Optional dialect for family-specific extras (backslashes are
        doubled for MariaDB).

    Raises
    ------
    TypeMismatch
        A non-numeric, non-null value for a NUMERIC column.
    """
    if value is None:
        return "NULL"

    if primitive is Primitive.NUMERIC:
        if not is_numeric(value):
            raise TypeMismatch(
                f"Value {value!r} does not match numeric data type", value=value
            )
        return render_numeric(value)

    return escape_text(value, dialect)


__all__ = [
    "is_numeric",
    "escape",
]
