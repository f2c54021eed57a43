"""
Type classifier.

Maps the declared type reported by the database to one of two primitive
classes. The classification only decides how a value is validated and
escaped; it does not try to model the full SQL type system. Dates,
times and BLOBs fall through to TEXT.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..dialects import Dialect, Primitive


# ----------------------------------------------------------------------
# Keyword tables (case-insensitive substring match)
# ----------------------------------------------------------------------

# MariaDB data types as documented for 10.3+
NUMERIC_KEYWORDS: Dict[Dialect, Tuple[str, ...]] = {
    Dialect.MARIADB: ("int", "decimal", "double", "bit", "float", "numeric", "real"),
    # SQLite affinity rules: INT -> INTEGER, REAL/FLOA/DOUB -> REAL
    Dialect.SQLITE: ("int", "real", "floa", "doub", "numeric", "decimal"),
}

# Checked first: spatial types would otherwise match "int" via "point".
TEXT_OVERRIDES: Dict[Dialect, Tuple[str, ...]] = {
    Dialect.MARIADB: ("point", "polygon", "geometry", "linestring"),
    Dialect.SQLITE: (),
}


def classify(declared_type: str, dialect: Dialect) -> Primitive:
    """
    Return the primitive class for a declared column type.

    Parameters
    ----------
    declared_type : str
        Type string as reported by introspection, e.g. "int(11) unsigned"
        or "VARCHAR(40)". May be empty (SQLite allows untyped columns).
    dialect : Dialect
        Family whose keyword table applies.

    Returns
    -------
    Primitive
        NUMERIC on a keyword match, TEXT otherwise.
    """
    dialect = Dialect.parse(dialect)
    lowered = (declared_type or "").lower()

    if any(k in lowered for k in TEXT_OVERRIDES[dialect]):
        return Primitive.TEXT

    if any(k in lowered for k in NUMERIC_KEYWORDS[dialect]):
        return Primitive.NUMERIC

    return Primitive.TEXT


__all__ = [
    "NUMERIC_KEYWORDS",
    "TEXT_OVERRIDES",
    "classify",
]
