import pytest

from pdfsift_lib.cleaner import PageCleaner
from pdfsift_lib.normalizer import collapse_dot_leaders, normalize_lines, paragraph_bounds


def test_hyphen_join_with_lowercase_continuation():
    lines = ["the key-", "bag field: uint64_t"]
    assert normalize_lines(lines, "smart") == ["the keybag field: uint64_t"]


def test_hyphen_not_joined_before_uppercase_line():
    lines = ["the key-", "Bag field"]
    assert normalize_lines(lines, "smart") == ["the key-", "Bag field"]


def test_indented_next_line_is_soft_wrap():
    lines = ["first part of", "  the sentence", "next line"]
    assert normalize_lines(lines, "smart") == ["first part of the sentence", "next line"]


def test_blank_lines_stop_merging():
    lines = ["alpha", "", "  beta", "gamma-"]
    assert normalize_lines(lines, "smart") == ["alpha", "", "  beta", "gamma-"]


def test_merges_consume_two_lines_only():
    lines = ["one-", "two", "  three"]
    assert normalize_lines(lines, "smart") == ["onetwo", "  three"]


def test_plain_layout_is_identity():
    lines = ["key-", "bag", "  indented"]
    assert normalize_lines(lines, "plain") == lines


def test_columns_layout_also_merges():
    assert normalize_lines(["inter-", "val"], "columns") == ["interval"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("About Apple File System 7 . . . .", "About Apple File System 7 …"),
        ("Introduction.......5", "Introduction … 5"),
        ("Overview .... .", "Overview …"),
        ("Release 1.2.3 notes", "Release 1.2.3 notes"),
        ("Ends with a sentence.", "Ends with a sentence."),
        ("Stray period .", "Stray period"),
        ("  lots   of    spaces  ", "lots of spaces"),
    ],
)
def test_collapse_dot_leaders(raw, expected):
    assert collapse_dot_leaders(raw) == expected


def test_collapse_dot_leaders_is_idempotent():
    for raw in ["Chapter 1 . . . . . 12", "Index..........99", "Done ."]:
        once = collapse_dot_leaders(raw)
        assert collapse_dot_leaders(once) == once


def test_paragraph_bounds_stop_at_blank_lines():
    lines = ["alpha header", "deep keybag field", "continued line", "", "other section"]
    assert paragraph_bounds(lines, 1) == (["alpha header"], ["continued line"])


def test_paragraph_bounds_at_page_edges():
    lines = ["first", "second"]
    assert paragraph_bounds(lines, 0) == ([], ["second"])
    assert paragraph_bounds(lines, 1) == (["first"], [])
    assert paragraph_bounds(["", "lonely", "  "], 1) == ([], [])


def test_cleaner_drops_copyright_footer():
    cleaner = PageCleaner()
    lines = ["Body text", "Copyright © 2020 Apple Inc. All rights reserved.", "More"]
    assert cleaner.clean(lines, 3, include_header=True) == ["Body text", "More"]


def test_cleaner_keeps_copyright_without_publisher():
    cleaner = PageCleaner()
    lines = ["Copyright notice for this manual"]
    assert cleaner.clean(lines, 1, include_header=False) == lines


def test_cleaner_custom_publishers():
    cleaner = PageCleaner(publishers=["Acme"])
    assert cleaner.clean(["(c) copyright ACME corp"], 1, include_header=True) == []


def test_cleaner_strips_folio_only_without_headers():
    cleaner = PageCleaner()
    lines = ["Body", " 7 ", "8", "1234"]
    assert cleaner.clean(lines, 7, include_header=False) == ["Body", "8", "1234"]
    assert cleaner.clean(lines, 7, include_header=True) == lines
