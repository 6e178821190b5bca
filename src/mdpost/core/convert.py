"""Conversion entry point: one parse, one of several serializers"""

from enum import Enum
from typing import Optional, Union

from mdpost.core.blocks import first_heading, segment
from mdpost.core.frontmatter import extract_frontmatter
from mdpost.core.metadata import (
    DEFAULT_TITLE,
    SUBTITLE_MAX_LENGTH,
    SubtitlePolicy,
    extract_tags,
    resolve_subtitle,
    resolve_title,
)
from mdpost.core.models import Block, ConversionResult, FrontmatterData
from mdpost.core.render.html import HtmlRenderer
from mdpost.core.render.tree import TreeRenderer


class Backend(str, Enum):
    html = "html"
    tree = "tree"


RENDERERS = {
    Backend.html: HtmlRenderer,
    Backend.tree: TreeRenderer,
}


def assemble(
    blocks: list[Block],
    frontmatter: FrontmatterData,
    fallback_title: str = DEFAULT_TITLE,
    *,
    heading: Optional[str] = None,
    backend: Union[Backend, str] = Backend.html,
    subtitle_policy: Union[SubtitlePolicy, str] = SubtitlePolicy.frontmatter,
    subtitle_max_length: int = SUBTITLE_MAX_LENGTH,
    ) -> ConversionResult:
    """Resolve title/subtitle/tags and serialize blocks with the chosen backend.

    `heading` is the first-H1 text captured from the body, the second title
    candidate after the frontmatter title.
    """
    renderer = RENDERERS[Backend(backend)]()
    return ConversionResult(
        title=resolve_title(frontmatter, heading, fallback_title),
        subtitle=resolve_subtitle(frontmatter, blocks, SubtitlePolicy(subtitle_policy), subtitle_max_length),
        tags=extract_tags(frontmatter),
        document=renderer.render(blocks),
    )


def convert(
    markdown: str,
    fallback_title: str = DEFAULT_TITLE,
    *,
    backend: Union[Backend, str] = Backend.html,
    subtitle_policy: Union[SubtitlePolicy, str] = SubtitlePolicy.frontmatter,
    subtitle_max_length: int = SUBTITLE_MAX_LENGTH,
    ) -> ConversionResult:
    """Convert a markdown note into a title, subtitle, tags and serialized document.

    Never raises for malformed markdown; only a non-str input is rejected.
    """
    if not isinstance(markdown, str):
        raise TypeError(f"markdown must be str, not {type(markdown).__name__}")

    frontmatter, body = extract_frontmatter(markdown.replace('\r\n', '\n'))
    return assemble(
        segment(body),
        frontmatter,
        fallback_title,
        heading=first_heading(body),
        backend=backend,
        subtitle_policy=subtitle_policy,
        subtitle_max_length=subtitle_max_length,
    )
