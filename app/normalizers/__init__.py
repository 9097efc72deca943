"""
app/normalizers package marker.
"""

from app.normalizers.locale_normalizer import (
    clean_numeric_string,
    is_blank,
    parse_date,
    parse_date_with_fallback,
    parse_decimal,
    parse_decimal_with_fallback,
    parse_integer,
    parse_integer_with_fallback,
    strip_diacritics,
)

__all__ = [
    "clean_numeric_string",
    "is_blank",
    "parse_date",
    "parse_date_with_fallback",
    "parse_decimal",
    "parse_decimal_with_fallback",
    "parse_integer",
    "parse_integer_with_fallback",
    "strip_diacritics",
]
