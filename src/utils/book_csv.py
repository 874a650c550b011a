"""Checks and parsing for the book CSV contract.

The scan pipeline never touches the CSV; these helpers exist for tooling and
tests that need to assert the model kept to the format its prompt describes.
"""

from __future__ import annotations

import csv
import re

from schemas.books import CSV_HEADER, BookRecord, BookTable

_HEADER_LINE = ",".join(CSV_HEADER)
_QUOTED_FIELD = r'"(?:[^"]|"")*"'
_QUOTED_ROW_RE = re.compile(rf"^{_QUOTED_FIELD},{_QUOTED_FIELD},{_QUOTED_FIELD}$")
_CODE_BLOCK_RE = re.compile(r"```(?:csv)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def check_book_csv(text: str) -> list[str]:
    """Return contract violations; an empty list means the text conforms."""
    lines = _content_lines(text)
    if not lines:
        return ["CSV is empty"]

    problems: list[str] = []
    if lines[0].strip() != _HEADER_LINE:
        problems.append(f"header must be exactly {_HEADER_LINE!r}, got {lines[0].strip()!r}")

    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        fields = next(csv.reader([line]))
        if len(fields) != len(CSV_HEADER):
            problems.append(f"line {lineno}: expected 3 fields, got {len(fields)}")
            continue
        if not _QUOTED_ROW_RE.match(line.strip()):
            problems.append(f"line {lineno}: every field must be double-quoted")
        problem = _check_coordinates(fields[2])
        if problem:
            problems.append(f"line {lineno}: {problem}")
    return problems


def parse_book_csv(text: str) -> BookTable:
    """Parse contract CSV into records, tolerating a surrounding code fence."""
    lines = _content_lines(strip_code_fence(text))
    if not lines or lines[0].strip() != _HEADER_LINE:
        raise ValueError(f"CSV must start with header {_HEADER_LINE!r}")

    records: list[BookRecord] = []
    for lineno, fields in enumerate(csv.reader(lines[1:]), start=2):
        if not fields:
            continue
        if len(fields) != len(CSV_HEADER):
            raise ValueError(f"line {lineno}: expected 3 fields, got {len(fields)}")
        title, author, coordinates = (field.strip() for field in fields)
        records.append(BookRecord(title=title, author=author, coordinates=coordinates))
    return BookTable(records=records)


def strip_code_fence(text: str) -> str:
    match = _CODE_BLOCK_RE.search(text or "")
    if match:
        return match.group(1)
    return text or ""


def _content_lines(text: str) -> list[str]:
    lines = (text or "").strip().splitlines()
    return [line.rstrip() for line in lines]


def _check_coordinates(value: str) -> str | None:
    value = value.strip()
    if not (value.startswith("[") and value.endswith("]")):
        return f"coordinates must be a bracketed list, got {value!r}"
    inner = value[1:-1].strip()
    if not inner:
        return None
    for part in inner.split(","):
        try:
            float(part)
        except ValueError:
            return f"coordinates contain a non-numeric value {part.strip()!r}"
    return None


__all__ = ["check_book_csv", "parse_book_csv", "strip_code_fence"]
