"""Publishing metadata derived from frontmatter and the parsed body"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from mdpost.core.blocks import first_heading, segment
from mdpost.core.frontmatter import load_frontmatter
from mdpost.core.inline import plain_text
from mdpost.core.models import Block, BlockType, FrontmatterData, PostMetadata


DEFAULT_TITLE = "Untitled"
SUBTITLE_MAX_LENGTH = 300
VISIBILITY_VALUES = ('public', 'private', 'password', 'unlisted')

_DATETIME = TypeAdapter(datetime)


class SubtitlePolicy(str, Enum):
    """How a subtitle is chosen when the frontmatter has none."""
    frontmatter = "frontmatter"     # frontmatter `subtitle` only
    extended = "extended"           # subtitle -> description -> first paragraph


def _text(value: Any) -> str:
    if isinstance(value, list):
        return ', '.join(str(v) for v in value).strip()
    return str(value).strip() if value is not None else ''


def _string_list(value: Any) -> list[str]:
    """Normalize a list or comma-separated string into stripped, non-empty strings."""
    if not value:
        return []
    if isinstance(value, list):
        items = [str(v).strip() for v in value if v is not None]
    elif isinstance(value, str):
        items = [v.strip() for v in value.split(',')]
    else:
        return []
    return [v for v in items if v]


def resolve_title(frontmatter: FrontmatterData, heading: Optional[str], fallback: str = DEFAULT_TITLE) -> str:
    """frontmatter title, then the first H1, then the fallback."""
    return _text(frontmatter.get('title')) or (heading or '').strip() or fallback


def first_paragraph(blocks: list[Block]) -> str:
    for block in blocks:
        if block.type == BlockType.paragraph:
            text = plain_text(block.content).strip()
            if text:
                return text
    return ''


def resolve_subtitle(
    frontmatter: FrontmatterData,
    blocks: list[Block],
    policy: SubtitlePolicy = SubtitlePolicy.frontmatter,
    max_length: int = SUBTITLE_MAX_LENGTH,
    ) -> Optional[str]:
    """Subtitle under the given policy; None when nothing applies."""
    subtitle = _text(frontmatter.get('subtitle'))
    if subtitle or SubtitlePolicy(policy) == SubtitlePolicy.frontmatter:
        return subtitle or None

    subtitle = _text(frontmatter.get('description'))
    if subtitle:
        return subtitle

    paragraph = first_paragraph(blocks)
    if len(paragraph) > max_length:
        paragraph = paragraph[:max_length] + '...'
    return paragraph or None


def extract_tags(frontmatter: FrontmatterData) -> list[str]:
    return _string_list(frontmatter.get('tags'))


def extract_categories(frontmatter: FrontmatterData) -> list[str]:
    """`categories`, falling back to the singular `category` key."""
    return _string_list(frontmatter.get('categories') or frontmatter.get('category'))


def extract_author(frontmatter: FrontmatterData) -> Optional[str]:
    return _text(frontmatter.get('author')) or None


def extract_visibility(frontmatter: FrontmatterData) -> Optional[str]:
    visibility = _text(frontmatter.get('visibility')).lower()
    return visibility if visibility in VISIBILITY_VALUES else None


def extract_scheduled_date(frontmatter: FrontmatterData, now: Optional[datetime] = None) -> Optional[datetime]:
    """The `date` value when it parses and lies in the future, else None.

    Accepts ISO strings as well as the datetime/date objects YAML produces.
    """
    value = frontmatter.get('date')
    if isinstance(value, datetime):
        scheduled = value
    elif isinstance(value, date):
        scheduled = datetime.combine(value, time())
    else:
        raw = _text(value)
        if not raw:
            return None
        try:
            scheduled = _DATETIME.validate_python(raw)
        except ValidationError:
            return None

    if now is None:
        now = datetime.now(scheduled.tzinfo)
    elif (now.tzinfo is None) != (scheduled.tzinfo is None):
        # compare naive values as local time
        now, scheduled = now.astimezone(), scheduled.astimezone()
    return scheduled if scheduled > now else None


def extract_metadata(markdown: str, fallback_title: str = DEFAULT_TITLE, now: Optional[datetime] = None) -> PostMetadata:
    """Extract every publishing field from a note in one pass.

    Unlike `convert`, the frontmatter here is full YAML, so block-style
    lists and typed dates are understood.
    """
    if not isinstance(markdown, str):
        raise TypeError(f"markdown must be str, not {type(markdown).__name__}")
    frontmatter, body = load_frontmatter(markdown.replace('\r\n', '\n'))
    return PostMetadata(
        title=resolve_title(frontmatter, first_heading(body), fallback_title),
        subtitle=resolve_subtitle(frontmatter, segment(body), SubtitlePolicy.extended) or '',
        tags=extract_tags(frontmatter),
        categories=extract_categories(frontmatter),
        author=extract_author(frontmatter),
        visibility=extract_visibility(frontmatter),
        scheduled_date=extract_scheduled_date(frontmatter, now),
        content=body,
    )
