"""Unit tests for core/utils/slug.py"""

import pytest

from mdpost.core.utils.slug import slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["", "!!!", "---"])
def test_slugify_empty_uses_default(text):
    """Text with no slug characters falls back to the default name."""
    assert slugify(text) == "note"
    assert slugify(text, default="post") == "post"
