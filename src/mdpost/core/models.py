"""Intermediate data models shared by the parse stages and the render backends"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


FrontmatterData = dict[str, Union[str, list[str]]]


class Mark(str, Enum):
    """Inline formatting marks; a run carries each at most once."""
    bold = "bold"
    italic = "italic"
    strikethrough = "strikethrough"
    code = "code"


MARK_ORDER: tuple[Mark, ...] = (Mark.bold, Mark.italic, Mark.strikethrough, Mark.code)


class RunKind(str, Enum):
    text = "text"
    link = "link"
    image = "image"
    wiki_link = "wiki_link"
    hard_break = "hard_break"


class TextRun(BaseModel):
    """A single inline unit: text with marks, a link, an image or a line break."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    kind: RunKind = RunKind.text
    marks: tuple[Mark, ...] = ()
    href: Optional[str] = None      # link target; None for every other kind
    src: Optional[str] = None       # image source; alt text lives in `text`

    @field_validator("marks", mode="before")
    @classmethod
    def _canonical_marks(cls, value):
        present = {Mark(m) for m in value}
        return tuple(m for m in MARK_ORDER if m in present)


class BlockType(str, Enum):
    heading = "heading"
    paragraph = "paragraph"
    unordered_list = "unordered_list"
    ordered_list = "ordered_list"
    blockquote = "blockquote"
    code_block = "code_block"
    horizontal_rule = "horizontal_rule"


class Block(BaseModel):
    """A block-level unit of the document body, in source order."""
    type: BlockType
    content: list[TextRun] = []             # heading, paragraph, blockquote body
    level: Optional[int] = None             # heading level (2-6); None for non-headings
    items: list[list[TextRun]] = []         # list items, one run list per item
    callout_type: Optional[str] = None      # `note` in `> [!note] Title`
    callout_title: list[TextRun] = []       # inline-parsed title; empty when the callout has none
    language: Optional[str] = None          # code fence info string
    code: Optional[str] = None              # raw fence interior, never inline-parsed


class ConversionResult(BaseModel):
    """Value returned by a single convert() call."""
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: Optional[str] = None
    tags: list[str] = []
    document: Union[str, dict[str, Any]]    # HTML string or structured tree


class PostMetadata(BaseModel):
    """Every publishing field derivable from a note in one pass."""
    title: str
    subtitle: str = ""
    tags: list[str] = []
    categories: list[str] = []
    author: Optional[str] = None
    visibility: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    content: str = ""
