from __future__ import annotations

import pytest

from schemas.books import BookRecord, BookTable
from utils.book_csv import check_book_csv, parse_book_csv, strip_code_fence


def test_valid_csv_has_no_problems(verified_csv: str) -> None:
    assert check_book_csv(verified_csv) == []


def test_header_only_is_valid() -> None:
    assert check_book_csv("title,author,coordinates\n") == []


def test_crlf_line_endings_accepted() -> None:
    text = 'title,author,coordinates\r\n"A","B","[0.1, 0.2, 0.3, 0.4]"\r\n'
    assert check_book_csv(text) == []


def test_empty_text_reported() -> None:
    assert check_book_csv("") == ["CSV is empty"]


def test_wrong_header_reported() -> None:
    problems = check_book_csv('Title,Author,Coordinates\n"A","B","[]"')
    assert len(problems) == 1
    assert "header" in problems[0]


def test_unquoted_fields_reported() -> None:
    problems = check_book_csv('title,author,coordinates\nA,"B","[0.1]"')
    assert problems == ["line 2: every field must be double-quoted"]


def test_field_count_reported() -> None:
    problems = check_book_csv('title,author,coordinates\n"A","B"')
    assert problems == ["line 2: expected 3 fields, got 2"]


def test_coordinates_must_be_bracketed_numbers() -> None:
    problems = check_book_csv(
        'title,author,coordinates\n"A","B","0.1, 0.2"\n"C","D","[0.1, top]"'
    )
    assert len(problems) == 2
    assert problems[0].startswith("line 2: coordinates must be a bracketed list")
    assert problems[1].startswith("line 3: coordinates contain a non-numeric value")


def test_empty_coordinate_list_allowed() -> None:
    assert check_book_csv('title,author,coordinates\n"Unknown","Unknown","[]"') == []


def test_quoted_commas_and_escaped_quotes() -> None:
    text = 'title,author,coordinates\n"Eats, Shoots ""and"" Leaves","Lynne Truss","[1, 2, 3, 4]"'
    assert check_book_csv(text) == []
    (record,) = parse_book_csv(text).records
    assert record.title == 'Eats, Shoots "and" Leaves'


def test_parse_book_csv(raw_csv: str) -> None:
    table = parse_book_csv(raw_csv)
    assert table.records == [
        BookRecord(
            title="The Crtcher in the Tye",
            author="J.D. Salnger",
            coordinates="[0.25,0.1,0.45,0.15]",
        )
    ]


def test_parse_tolerates_code_fence(raw_csv: str) -> None:
    fenced = f"```csv\n{raw_csv}\n```"
    assert strip_code_fence(fenced).strip() == raw_csv
    assert len(parse_book_csv(fenced).records) == 1


def test_parse_requires_header() -> None:
    with pytest.raises(ValueError, match="header"):
        parse_book_csv('"A","B","[]"')


def test_parse_rejects_wrong_field_count() -> None:
    with pytest.raises(ValueError, match="line 2"):
        parse_book_csv('title,author,coordinates\n"A","B","[]","extra"')


def test_book_table_to_csv_matches_wire_format(verified_csv: str) -> None:
    table = BookTable(
        records=[
            BookRecord(
                title="The Catcher in the Rye",
                author="J.D. Salinger",
                coordinates="[0.25,0.1,0.45,0.15]",
            )
        ]
    )
    assert table.to_csv() == verified_csv
    assert BookTable().to_csv() == "title,author,coordinates"


def test_unknown_record_is_not_identified() -> None:
    assert not BookRecord(title="Unknown", author="Unknown").is_identified
    assert BookRecord(title="Unknown", author="Stephen King").is_identified
