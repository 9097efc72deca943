"""
app/normalizers/locale_normalizer.py

Canonicalizes raw numeric and date strings written in international or
Brazilian notation.

Numbers
-------
Everything except digits, ``.``, ``,`` and a leading ``-`` is dropped first, so
currency symbols and spaces never matter (``"R$ 1.234,56"`` -> ``"1.234,56"``)
and a stray ``-`` later in the text is ignored (``"12-3"`` -> ``"123"``).

    both "." and ","   ->  "." is a thousands separator, "," the decimal one
    only ","           ->  "," is the decimal separator
    only "." / neither ->  used as-is

Dates
-----
Only ``YYYY-MM-DD`` is accepted, and it must be a real calendar date.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.errors import InvalidDateError, InvalidIntegerError, InvalidNumberError

_NON_NUMERIC_CHARS = re.compile(r"[^0-9.,\-]")
_DECIMAL_LITERAL = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_ZERO = Decimal("0")


def strip_diacritics(text: str) -> str:
    """
    Reduce accented characters to their base letter (``"ç"`` -> ``"c"``).
    """

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def is_blank(value: Any) -> bool:
    """
    Return True for None or whitespace-only text.
    """

    return value is None or str(value).strip() == ""


def clean_numeric_string(value: Any) -> str:
    """
    Strip formatting noise and rewrite Brazilian separators as a plain literal.

    Blank input yields ``"0"``.
    """

    if is_blank(value):
        return "0"

    cleaned = _NON_NUMERIC_CHARS.sub("", str(value).strip())
    # Only a minus at the very front is a sign.
    sign = "-" if cleaned.startswith("-") else ""
    cleaned = sign + cleaned.replace("-", "")
    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")
    return cleaned


def parse_decimal(value: Any) -> Decimal:
    """
    Parse a locale-variant amount into a Decimal.

    Blank input is zero.

    Raises
    ------
    InvalidNumberError
        When the cleaned text is not a decimal literal.
    """

    if is_blank(value):
        return _ZERO

    cleaned = clean_numeric_string(value)
    if not _DECIMAL_LITERAL.fullmatch(cleaned):
        raise InvalidNumberError(f"{value!r} is not a valid number.")
    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise InvalidNumberError(f"{value!r} is not a valid number.") from exc


def parse_integer(value: Any) -> int:
    """
    Parse a locale-variant count that must have no fractional remainder.

    ``"1.500"`` is fifteen hundred only when a ``,`` is also present; on its
    own the ``.`` is a decimal point and ``"1.500"`` is 1.5, which fails.

    Raises
    ------
    InvalidNumberError
        When the cleaned text is not numeric.
    InvalidIntegerError
        When the value is numeric but not whole.
    """

    number = parse_decimal(value)
    if number != number.to_integral_value():
        raise InvalidIntegerError(f"{value!r} is not a whole number.")
    return int(number)


def parse_date(value: Any) -> date:
    """
    Parse a ``YYYY-MM-DD`` date.

    Raises
    ------
    InvalidDateError
        When the text has another shape or names a day that does not exist.
    """

    if is_blank(value):
        raise InvalidDateError("A date is required.")

    raw = str(value).strip()
    if not _ISO_DATE.fullmatch(raw):
        raise InvalidDateError(f"{raw!r} is not in YYYY-MM-DD format.")
    year, month, day = (int(part) for part in raw.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"{raw!r} is not a real calendar date.") from exc


def parse_decimal_with_fallback(value: Any) -> tuple[Decimal, bool]:
    """
    Return ``(amount, was_valid)``; the amount is zero when parsing failed.
    """

    try:
        return parse_decimal(value), True
    except InvalidNumberError:
        return _ZERO, False


def parse_integer_with_fallback(value: Any) -> tuple[int, bool]:
    """
    Return ``(count, was_valid)``; the count is zero when parsing failed.
    """

    try:
        return parse_integer(value), True
    except InvalidNumberError:
        return 0, False


def parse_date_with_fallback(value: Any) -> tuple[date | None, bool]:
    """
    Return ``(day, was_valid)``; the day is None when parsing failed.
    """

    try:
        return parse_date(value), True
    except InvalidDateError:
        return None, False
