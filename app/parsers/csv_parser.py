"""
app/parsers/csv_parser.py

Tokenizes uploaded delimited text into raw campaign rows.

The first non-blank line is the header. Blank lines are skipped everywhere
before numbering, so data row ``i`` (1-indexed) is always row ``i + 1`` in
error reports.
"""

from __future__ import annotations

import csv
import io
import logging

from app.domain.campaign import ParseDiagnostics, ParsedFile, RawRow
from app.domain.errors import UnparseableFileError
from app.mappers.header_mapper import CANONICAL_FIELDS, HeaderMapper

logger = logging.getLogger(__name__)

# Order doubles as the tie-break when two candidates appear equally often.
CANDIDATE_DELIMITERS: tuple[str, ...] = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","
FILE_ENCODING = "utf-8"


def detect_delimiter(header_line: str) -> str:
    """
    Pick the candidate delimiter that occurs most often outside quotes.
    """

    counts = dict.fromkeys(CANDIDATE_DELIMITERS, 0)
    in_quotes = False
    for ch in header_line:
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and ch in counts:
            counts[ch] += 1

    best = max(CANDIDATE_DELIMITERS, key=lambda candidate: counts[candidate])
    return best if counts[best] > 0 else DEFAULT_DELIMITER


def decode_content(content: bytes | str) -> str:
    """
    Decode UTF-8 bytes, dropping a leading byte-order mark.
    """

    if isinstance(content, str):
        return content.lstrip("\ufeff")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnparseableFileError("File must be UTF-8 encoded.") from exc


def _is_blank_cells(cells: list[str]) -> bool:
    return all(cell.strip() == "" for cell in cells)


def _first_non_blank_line(text: str) -> str | None:
    # A line holding only delimiters, quotes and spaces has no cell content.
    noise = "".join(CANDIDATE_DELIMITERS) + ' "\r\n'
    for line in text.splitlines():
        if line.strip(noise):
            return line
    return None


class CampaignCSVParser:
    """
    Produces ordered raw rows keyed by canonical header names.
    """

    def __init__(self, *, header_mapper: HeaderMapper | None = None) -> None:
        self._header_mapper = header_mapper or HeaderMapper()

    def parse(self, content: bytes | str) -> ParsedFile:
        """
        Parse a whole file.

        Raises
        ------
        UnparseableFileError
            On undecodable bytes, malformed quoting, or a file with no header.
        """

        text = decode_content(content)
        if "\x00" in text:
            raise UnparseableFileError("File contains NUL bytes; it does not look like text.")

        header_line = _first_non_blank_line(text)
        if header_line is None:
            raise UnparseableFileError("File is empty; a header row is required.")
        delimiter = detect_delimiter(header_line)

        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)

        raw_headers: list[str] | None = None
        headers: list[str] = []
        rows: list[RawRow] = []
        blank_lines_skipped = 0
        rows_with_extra_cells = 0

        try:
            for cells in reader:
                if _is_blank_cells(cells):
                    if raw_headers is not None:
                        blank_lines_skipped += 1
                    continue

                if raw_headers is None:
                    raw_headers = cells
                    headers = self._header_mapper.map_headers(cells)
                    continue

                if len(cells) > len(headers):
                    rows_with_extra_cells += 1
                padded = cells + [""] * (len(headers) - len(cells))
                rows.append(dict(zip(headers, padded)))
        except csv.Error as exc:
            raise UnparseableFileError(
                f"Invalid delimited text near line {reader.line_num}: {exc}"
            ) from exc

        if raw_headers is None:
            raise UnparseableFileError("File is empty; a header row is required.")

        diagnostics = ParseDiagnostics(
            delimiter=delimiter,
            encoding=FILE_ENCODING,
            raw_headers=tuple(raw_headers),
            headers=tuple(headers),
            unrecognized_columns=tuple(
                header for header in headers if not self._header_mapper.is_canonical(header)
            ),
            missing_fields=tuple(field for field in CANONICAL_FIELDS if field not in headers),
            blank_lines_skipped=blank_lines_skipped,
            rows_with_extra_cells=rows_with_extra_cells,
        )
        logger.debug(
            "Parsed campaign file delimiter=%r rows=%s blank_lines_skipped=%s "
            "unrecognized_columns=%s",
            delimiter,
            len(rows),
            blank_lines_skipped,
            diagnostics.unrecognized_columns,
        )
        return ParsedFile(rows=rows, diagnostics=diagnostics)
