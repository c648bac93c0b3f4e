from __future__ import annotations

import json

import pytest

from smartpdf.exceptions import ResponseFormatError
from smartpdf.sections import BulletList, Heading, Paragraph, parse_extraction_response


def _parse(*sections: dict):
    return parse_extraction_response(json.dumps({"sections": list(sections)}))


def test_parse_all_section_types() -> None:
    sections = _parse(
        {"type": "heading", "level": 2, "text": "Overview", "fontFamily": "Georgia", "fontSize": 16},
        {"type": "paragraph", "text": "Body text."},
        {"type": "list", "items": ["one", "two"], "fontSize": 10.5},
    )

    assert sections == [
        Heading(text="Overview", level=2, font_family="Georgia", font_size=16.0),
        Paragraph(text="Body text."),
        BulletList(items=("one", "two"), font_size=10.5),
    ]


def test_unknown_type_is_coerced_to_paragraph() -> None:
    (section,) = _parse({"type": "Table", "text": "cell data"})

    assert section == Paragraph(text="cell data")


def test_type_is_case_insensitive() -> None:
    (section,) = _parse({"type": " HEADING ", "text": "Title"})

    assert isinstance(section, Heading)
    assert section.level == 1


def test_out_of_range_heading_level_is_kept() -> None:
    (section,) = _parse({"type": "heading", "level": 5.0, "text": "Deep"})

    assert section.level == 5


def test_lenient_field_coercion() -> None:
    heading, items, paragraph = _parse(
        {"type": "heading", "level": "two", "fontFamily": "  ", "fontSize": 0},
        {"type": "list", "items": "not-a-list"},
        {"type": "paragraph", "text": None, "fontSize": "11", "unexpected": True},
    )

    assert heading == Heading(text="", level=1)
    assert items == BulletList(items=())
    assert paragraph == Paragraph(text="", font_size=11.0)

    huge_level, huge_size, not_a_number = parse_extraction_response(
        '{"sections": ['
        '{"type": "heading", "level": 1e400, "text": "T"},'
        '{"type": "paragraph", "text": "P", "fontSize": 1e400},'
        '{"type": "heading", "level": NaN, "text": "N", "fontSize": -Infinity}'
        "]}"
    )

    assert huge_level == Heading(text="T", level=1)
    assert huge_size == Paragraph(text="P")
    assert not_a_number == Heading(text="N", level=1)


def test_list_items_none_entries_become_empty_strings() -> None:
    (section,) = _parse({"type": "list", "items": ["a", None, 3]})

    assert section.items == ("a", "", "3")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "not json",
        "[1, 2]",
        "{}",
        '{"sections": "nope"}',
        '{"sections": [{"text": "missing type"}]}',
        '{"sections": [42]}',
        '{"sections": [{"type": 7}]}',
    ],
)
def test_malformed_responses_raise(raw: str) -> None:
    with pytest.raises(ResponseFormatError):
        parse_extraction_response(raw)


def test_empty_sections_array_is_valid() -> None:
    assert parse_extraction_response('{"sections": []}') == []
