"""Frontmatter extraction.

`extract_frontmatter` is the converter's narrow key/value and bracket-list
scanner. `load_frontmatter` parses the same block as YAML for the richer
publishing metadata.
"""

import logging
import re
from typing import Any

import yaml

from mdpost.core.models import FrontmatterData


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|$)', re.DOTALL)


class InvalidFrontmatterStructure(ValueError):
    """Raised while scanning a frontmatter block; never escapes extract_frontmatter."""


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _coerce(key: str, value: str) -> str | list[str]:
    """Turn a raw value into a string, or a list for `[a, b]` values."""
    value = _unquote(value)
    if value.startswith('[') and value.endswith(']'):
        items = (s.strip().replace('"', '').replace("'", '') for s in value[1:-1].split(','))
        return [s for s in items if s]
    if key == 'tags' and value == '':
        return []
    return value


def parse_block(block: str) -> FrontmatterData:
    """Parse the interior of a frontmatter block into a mapping.

    Lines without a colon, `- item` lines included, are ignored.
    """
    data: FrontmatterData = {}

    for line in block.split('\n'):
        key, sep, value = line.partition(':')
        if not sep:
            continue
        key = key.strip()
        if not key:
            raise InvalidFrontmatterStructure(f"Empty key in line {line!r}")
        data[key] = _coerce(key, value.strip())

    return data


def extract_frontmatter(markdown: str) -> tuple[FrontmatterData, str]:
    """Return (frontmatter, body); ({}, markdown) when no valid block opens the text."""
    m = FRONTMATTER_RE.match(markdown)
    if not m:
        return {}, markdown
    try:
        data = parse_block(m.group(1) or '')
    except InvalidFrontmatterStructure as e:
        logger.debug("Ignoring malformed frontmatter: %s", e)
        return {}, markdown
    return data, markdown[m.end():]


def load_frontmatter(markdown: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter, body) with the header parsed as YAML.

    Invalid YAML, or YAML that is not a mapping, yields ({}, markdown).
    """
    m = FRONTMATTER_RE.match(markdown)
    if not m:
        return {}, markdown
    try:
        fm = yaml.safe_load(m.group(1) or '') or {}
    except yaml.YAMLError as e:
        logger.debug("Ignoring invalid YAML frontmatter: %s", e)
        return {}, markdown
    if not isinstance(fm, dict):
        logger.debug("Ignoring YAML frontmatter: expected a mapping, got %s", type(fm).__name__)
        return {}, markdown
    return fm, markdown[m.end():]
