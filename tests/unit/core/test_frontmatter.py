"""Unit tests for core/frontmatter.py"""

import pytest

from mdpost.core.frontmatter import InvalidFrontmatterStructure, extract_frontmatter, load_frontmatter, parse_block


def test_extract_frontmatter_basic():
    """extract_frontmatter splits key/value pairs from the body."""
    fm, body = extract_frontmatter("---\ntitle: Hello\n---\n# Body\n")
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_extract_frontmatter_no_frontmatter():
    """Without an opening delimiter the text is returned unchanged."""
    text = "# No frontmatter\n"
    fm, body = extract_frontmatter(text)
    assert fm == {}
    assert body == text


def test_extract_frontmatter_must_open_document():
    """A delimiter pair later in the body is not frontmatter."""
    text = "Intro\n---\ntitle: X\n---\n"
    fm, body = extract_frontmatter(text)
    assert fm == {}
    assert body == text


def test_extract_frontmatter_unclosed():
    """An opening delimiter with no closing one leaves the text untouched."""
    text = "---\ntitle: X\nno end"
    assert extract_frontmatter(text) == ({}, text)


def test_extract_frontmatter_closing_at_end_of_input():
    """The closing delimiter may be the last line without a newline."""
    fm, body = extract_frontmatter("---\ntitle: X\n---")
    assert fm == {"title": "X"}
    assert body == ""


def test_extract_frontmatter_empty_block():
    """An empty block yields an empty mapping and strips the delimiters."""
    fm, body = extract_frontmatter("---\n---\nBody")
    assert fm == {}
    assert body == "Body"


@pytest.mark.parametrize("line,expected", [
    ('title: "Quoted"', "Quoted"),
    ("title: 'Single'", "Single"),
    ("title: Colon: inside", "Colon: inside"),
    ('title: "', '"'),
])
def test_parse_block_values(line, expected):
    """Values split at the first colon and lose one pair of surrounding quotes."""
    assert parse_block(line)["title"] == expected


def test_parse_block_bracket_list():
    """Bracket values become string lists with quotes and whitespace stripped."""
    fm = parse_block("tags: [a, 'b',  \"c\" ]")
    assert fm["tags"] == ["a", "b", "c"]


def test_parse_block_empty_bracket_list():
    assert parse_block("categories: []")["categories"] == []


def test_parse_block_empty_tags_default_to_list():
    """`tags:` with nothing after it is an empty list, other keys an empty string."""
    fm = parse_block("tags:\nauthor:")
    assert fm == {"tags": [], "author": ""}


def test_parse_block_ignores_block_list_items():
    """Dash items below `tags:` are skipped, leaving the empty-list default."""
    fm = parse_block("title: T\ntags:\n  - one\n  - 'two'\ncategories:\n  - news\nauthor: Ann")
    assert fm == {"title": "T", "tags": [], "categories": "", "author": "Ann"}


def test_parse_block_ignores_lines_without_colon():
    """Lines with no colon (including stray dash items) are skipped."""
    fm = parse_block("just text\n- orphan\ntitle: Kept")
    assert fm == {"title": "Kept"}


def test_parse_block_empty_key_is_invalid():
    with pytest.raises(InvalidFrontmatterStructure):
        parse_block(": no key")


def test_extract_frontmatter_malformed_degrades():
    """A malformed block yields an empty mapping and the original text as body."""
    text = "---\ntitle: X\n: broken\n---\nBody\n"
    fm, body = extract_frontmatter(text)
    assert fm == {}
    assert body == text


def test_absent_keys_not_present():
    """Keys never written do not appear as None placeholders."""
    fm, _ = extract_frontmatter("---\ntitle: X\n---\n")
    assert "subtitle" not in fm


def test_load_frontmatter_yaml_block_lists():
    """load_frontmatter parses the header as YAML, block lists included."""
    fm, body = load_frontmatter("---\ntitle: T\ntags:\n  - one\n  - two\n---\nBody\n")
    assert fm == {"title": "T", "tags": ["one", "two"]}
    assert body == "Body\n"


def test_load_frontmatter_empty_block():
    fm, body = load_frontmatter("---\n---\nBody")
    assert fm == {}
    assert body == "Body"


@pytest.mark.parametrize("text", [
    "---\ntitle: [unclosed\n---\nBody\n",
    "---\n- just\n- a list\n---\nBody\n",
    "---\nplain scalar\n---\nBody\n",
])
def test_load_frontmatter_falls_back(text):
    """Invalid YAML or a non-mapping header yields ({}, original text)."""
    assert load_frontmatter(text) == ({}, text)


def test_load_frontmatter_no_block():
    assert load_frontmatter("# Title\n") == ({}, "# Title\n")
