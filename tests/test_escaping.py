"""Tests for the value escaper and numeric validation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tablerecord.dialects import Dialect, Primitive, quote_identifier
from tablerecord.errors import TypeMismatch
from tablerecord.escaping import escape, is_numeric


class TestIsNumeric:
    @pytest.mark.parametrize("value", [0, 42, -7, 3.5, Decimal("1.25"), True, "42", " -3.5 ", "1e3"])
    def test_accepts(self, value):
        assert is_numeric(value)

    @pytest.mark.parametrize(
        "value",
        ["abc", "", "12abc", float("nan"), float("inf"), "NaN", None, b"1", [1], "1_000", "\u0661\u0662", "\uff11\uff12"],
    )
    def test_rejects(self, value):
        assert not is_numeric(value)


class TestEscape:
    def test_none_is_null_for_both_primitives(self):
        assert escape(None, Primitive.NUMERIC) == "NULL"
        assert escape(None, Primitive.TEXT) == "NULL"

    def test_numeric_unquoted(self):
        assert escape(42, Primitive.NUMERIC) == "42"
        assert escape(" 3.5 ", Primitive.NUMERIC) == "3.5"
        assert escape(Decimal("10.00"), Primitive.NUMERIC) == "10.00"
        assert escape(True, Primitive.NUMERIC) == "1"

    def test_numeric_rejects_text(self):
        with pytest.raises(TypeMismatch):
            escape("Robert'); DROP TABLE contacts;--", Primitive.NUMERIC)

    def test_text_quoted_and_doubled(self):
        assert escape("O'Brien", Primitive.TEXT) == "'O''Brien'"
        assert escape(12, Primitive.TEXT) == "'12'"
        assert escape("", Primitive.TEXT) == "''"

    def test_mariadb_doubles_backslashes(self):
        assert escape("a\\b", Primitive.TEXT, Dialect.MARIADB) == "'a\\\\b'"
        assert escape("a\\b", Primitive.TEXT, Dialect.SQLITE) == "'a\\b'"

    def test_bytes_decoded(self):
        assert escape(b"caf\xc3\xa9", Primitive.TEXT) == "'café'"

    def test_undecodable_bytes_rejected(self):
        with pytest.raises(TypeMismatch):
            escape(b"\xff\xfe", Primitive.TEXT)

    def test_non_ascii_digits_never_reach_sql(self):
        with pytest.raises(TypeMismatch):
            escape("\u0661\u0662", Primitive.NUMERIC)


class TestQuoteIdentifier:
    def test_per_dialect(self):
        assert quote_identifier("contacts", Dialect.MARIADB) == "`contacts`"
        assert quote_identifier("contacts", Dialect.SQLITE) == '"contacts"'

    def test_dotted_and_embedded_quotes(self):
        assert quote_identifier("crm.contacts", Dialect.MARIADB) == "`crm`.`contacts`"
        assert quote_identifier('we"ird', Dialect.SQLITE) == '"we""ird"'
