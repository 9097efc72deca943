"""
app/mappers/header_mapper.py

Canonicalizes column header spellings into the fixed campaign field set.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from app.normalizers.locale_normalizer import strip_diacritics

CANONICAL_FIELDS: tuple[str, ...] = (
    "name",
    "status",
    "start_date",
    "end_date",
    "spend",
    "leads_generated",
    "conversions",
    "revenue",
)

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("nome_campanha", "campanha", "nome", "campaign", "campaign_name"),
    "status": ("situacao",),
    "start_date": ("data_inicio", "inicio", "data", "start"),
    "end_date": ("data_fim", "fim", "end"),
    "spend": ("gasto_total", "gasto", "investimento", "cost", "custo"),
    "leads_generated": ("leads_gerados", "leads"),
    "conversions": ("conversoes",),
    "revenue": ("receita_gerada", "receita", "faturamento"),
}

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """
    Lowercase, trim, drop accents and join words with underscores.
    """

    lowered = strip_diacritics(header.strip().lower())
    return _WHITESPACE_RUN.sub("_", lowered)


def build_synonym_table(aliases: Mapping[str, Sequence[str]]) -> dict[str, str]:
    """
    Flatten ``canonical -> aliases`` into ``normalized spelling -> canonical``.

    Canonical names always map to themselves.
    """

    table: dict[str, str] = {field: field for field in aliases}
    for canonical, spellings in aliases.items():
        for spelling in spellings:
            table[normalize_header(spelling)] = canonical
    return table


HEADER_SYNONYMS: dict[str, str] = build_synonym_table(DEFAULT_COLUMN_ALIASES)


class HeaderMapper:
    """
    Resolves raw header cells into canonical field names.

    Unrecognized headers pass through in normalized form so the validator can
    ignore them.
    """

    def __init__(self, *, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        self._synonyms = (
            HEADER_SYNONYMS if aliases is None else build_synonym_table(aliases)
        )

    def map_header(self, header: str) -> str:
        normalized = normalize_header(header)
        return self._synonyms.get(normalized, normalized)

    def map_headers(self, headers: Sequence[str]) -> list[str]:
        """
        Map every cell of one header line.

        A canonical name already taken by an earlier column is suffixed
        (``name_2``, ``name_3``) so the first column keeps the field.
        """

        mapped: list[str] = []
        seen: dict[str, int] = {}
        for header in headers:
            name = self.map_header(header)
            count = seen.get(name, 0) + 1
            seen[name] = count
            mapped.append(name if count == 1 else f"{name}_{count}")
        return mapped

    def is_canonical(self, name: str) -> bool:
        return name in CANONICAL_FIELDS
