"""Line-oriented block segmentation of a frontmatter-free markdown body"""

import re
from enum import Enum
from typing import Optional

from mdpost.core.inline import parse_inline
from mdpost.core.models import Block, BlockType, RunKind, TextRun


H1_RE = re.compile(r'^#\s+(.+)$')
HEADING_RE = re.compile(r'^(#{2,6})\s+(.+)$')
FENCE_RE = re.compile(r'^```\s*([\w+#.-]*)\s*$')
HR_RE = re.compile(r'^[-*_]{3,}$')
BULLET_RE = re.compile(r'^[-*+]\s+(.+)$')
ORDERED_RE = re.compile(r'^\d+\.\s+(.+)$')
QUOTE_RE = re.compile(r'^>\s?(.*)$')
CALLOUT_RE = re.compile(r'^\[!(\w+)\][+-]?\s*(.*)$')


class State(Enum):
    none = "none"
    unordered_list = "unordered_list"
    ordered_list = "ordered_list"
    blockquote = "blockquote"


LIST_BLOCK = {
    State.unordered_list: BlockType.unordered_list,
    State.ordered_list: BlockType.ordered_list,
}


def _lines(body: str) -> list[str]:
    return body.replace('\r\n', '\n').split('\n')


def _title_index(lines: list[str]) -> Optional[int]:
    """Index of the first H1 line outside a code fence, else None."""
    in_fence = False
    for i, line in enumerate(lines):
        if FENCE_RE.match(line.strip()):
            in_fence = not in_fence
        elif not in_fence and H1_RE.match(line):
            return i
    return None


def first_heading(body: str) -> Optional[str]:
    """Text of the first level-1 heading, used as a title candidate."""
    lines = _lines(body)
    i = _title_index(lines)
    return H1_RE.match(lines[i]).group(1).strip() if i is not None else None


class BlockSegmenter:
    """Single-use state machine grouping body lines into blocks."""

    def __init__(self):
        self.blocks: list[Block] = []
        self.state = State.none
        self.paragraph: list[str] = []
        self.items: list[str] = []
        self.quote: list[str] = []
        self.callout: Optional[tuple[str, list[TextRun]]] = None
        self.fence: Optional[str] = None        # language of the open fence ("" if none)
        self.fence_lines: list[str] = []

    def segment(self, body: str) -> list[Block]:
        lines = _lines(body)
        i = _title_index(lines)
        if i is not None:
            del lines[i]
        for line in lines:
            self._feed(line)
        if self.fence is not None:
            self._close_fence()
        self._flush()
        return self.blocks

    def _feed(self, line: str) -> None:
        if self.fence is not None:
            if line.strip().startswith('```'):
                self._close_fence()
            else:
                self.fence_lines.append(line)
            return

        stripped = line.strip()
        if not stripped:
            self._flush()
            return

        m = FENCE_RE.match(stripped)
        if m:
            self._flush()
            self.fence = m.group(1)
            return

        m = HEADING_RE.match(line)
        if m:
            self._flush()
            self.blocks.append(Block(
                type=BlockType.heading,
                level=len(m.group(1)),
                content=parse_inline(m.group(2).strip()),
            ))
            return

        if HR_RE.match(stripped):
            self._flush()
            self.blocks.append(Block(type=BlockType.horizontal_rule))
            return

        m = BULLET_RE.match(line)
        if m:
            self._list_item(State.unordered_list, m.group(1))
            return

        m = ORDERED_RE.match(line)
        if m:
            self._list_item(State.ordered_list, m.group(1))
            return

        m = QUOTE_RE.match(line)
        if m:
            self._quote_line(m.group(1))
            return

        self._close_container()
        self.paragraph.append(stripped)

    def _list_item(self, state: State, text: str) -> None:
        self._flush_paragraph()
        if self.state != state:
            self._close_container()
            self.state = state
        self.items.append(text.strip())

    def _quote_line(self, text: str) -> None:
        self._flush_paragraph()
        m = CALLOUT_RE.match(text)
        if m:
            self._close_container()
            self.state = State.blockquote
            title = m.group(2).strip()
            self.callout = (m.group(1), parse_inline(title) if title else [])
            return
        if self.state != State.blockquote:
            self._close_container()
            self.state = State.blockquote
        self.quote.append(text.strip())

    def _close_fence(self) -> None:
        self.blocks.append(Block(
            type=BlockType.code_block,
            language=self.fence or None,
            code='\n'.join(self.fence_lines),
        ))
        self.fence = None
        self.fence_lines = []

    def _flush_paragraph(self) -> None:
        if self.paragraph:
            self.blocks.append(Block(
                type=BlockType.paragraph,
                content=parse_inline(' '.join(self.paragraph)),
            ))
            self.paragraph = []

    def _close_container(self) -> None:
        """Emit the open list or blockquote, if any, and return to State.none."""
        if self.state in LIST_BLOCK:
            self.blocks.append(Block(
                type=LIST_BLOCK[self.state],
                items=[parse_inline(item) for item in self.items],
            ))
        elif self.state == State.blockquote:
            callout_type, callout_title = self.callout or (None, [])
            self.blocks.append(Block(
                type=BlockType.blockquote,
                content=_quote_content(self.quote),
                callout_type=callout_type,
                callout_title=callout_title,
            ))
        self.state = State.none
        self.items = []
        self.quote = []
        self.callout = None

    def _flush(self) -> None:
        self._flush_paragraph()
        self._close_container()


def _quote_content(lines: list[str]) -> list[TextRun]:
    """Inline-parse each quote line and join them with hard breaks."""
    content: list[TextRun] = []
    for i, line in enumerate(lines):
        if i:
            content.append(TextRun(kind=RunKind.hard_break))
        content.extend(parse_inline(line))
    return content or parse_inline('')


def segment(body: str) -> list[Block]:
    """Split a frontmatter-free body into blocks, dropping the first H1 line."""
    return BlockSegmenter().segment(body)
