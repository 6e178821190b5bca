"""Inline span scanning: one line or paragraph of text into typed, marked runs"""

import re

from mdpost.core.models import Mark, RunKind, TextRun


TRIPLE_RE = re.compile(r'\*\*\*(.+?)\*\*\*|___(.+?)___')
BOLD_RE = re.compile(r'\*\*(.+?)\*\*|__(.+?)__')
ITALIC_RE = re.compile(r'\*(.+?)\*|_(.+?)_')
CODE_RE = re.compile(r'`([^`]+)`')
STRIKE_RE = re.compile(r'~~(.+?)~~')
IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
WIKI_LINK_RE = re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]')
LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
PLAIN_RE = re.compile(r'[^*_`~!\[]+')

# Tried in order at every position; the first match wins.
EMPHASIS_RULES: tuple[tuple[re.Pattern, tuple[Mark, ...]], ...] = (
    (TRIPLE_RE, (Mark.bold, Mark.italic)),
    (BOLD_RE,   (Mark.bold,)),
    (ITALIC_RE, (Mark.italic,)),
)

MERGEABLE = (RunKind.text, RunKind.link)


def _group(m: re.Match) -> str:
    """Return whichever alternative of a `*...*|_..._` pattern matched."""
    return m.group(1) if m.group(1) is not None else m.group(2)


def _as_link(run: TextRun, href: str) -> TextRun:
    if run.kind != RunKind.text:
        return run
    return run.model_copy(update={"kind": RunKind.link, "href": href})


def _match_at(text: str, pos: int, marks: tuple[Mark, ...]) -> tuple[list[TextRun], int]:
    """Match one inline construct at pos. Returns (runs, end); end > pos always."""
    for pattern, added in EMPHASIS_RULES:
        m = pattern.match(text, pos)
        if m:
            return _scan(_group(m), marks + added), m.end()

    m = CODE_RE.match(text, pos)
    if m:
        return [TextRun(text=m.group(1), marks=marks + (Mark.code,))], m.end()

    m = STRIKE_RE.match(text, pos)
    if m:
        return _scan(m.group(1), marks + (Mark.strikethrough,)), m.end()

    m = IMAGE_RE.match(text, pos)
    if m:
        return [TextRun(text=m.group(1), kind=RunKind.image, src=m.group(2))], m.end()

    m = WIKI_LINK_RE.match(text, pos)
    if m:
        display = m.group(2) if m.group(2) is not None else m.group(1)
        return [TextRun(text=display, kind=RunKind.wiki_link, marks=marks)], m.end()

    m = LINK_RE.match(text, pos)
    if m:
        return [_as_link(r, m.group(2)) for r in _scan(m.group(1), marks)], m.end()

    m = PLAIN_RE.match(text, pos)
    end = m.end() if m else pos + 1     # a lone marker character is plain text
    return [TextRun(text=text[pos:end], marks=marks)], end


def _merge(runs: list[TextRun]) -> list[TextRun]:
    """Join neighbouring runs that differ only in their text."""
    merged: list[TextRun] = []
    for run in runs:
        prev = merged[-1] if merged else None
        if (prev is not None and run.kind in MERGEABLE and prev.kind == run.kind
                and prev.marks == run.marks and prev.href == run.href):
            merged[-1] = prev.model_copy(update={"text": prev.text + run.text})
        else:
            merged.append(run)
    return merged


def _scan(text: str, marks: tuple[Mark, ...]) -> list[TextRun]:
    runs: list[TextRun] = []
    pos = 0
    while pos < len(text):
        found, pos = _match_at(text, pos, marks)
        runs.extend(found)
    return _merge(runs)


def parse_inline(text: str) -> list[TextRun]:
    """Scan text into runs; empty text yields a single empty run, never []."""
    return _scan(text, ()) or [TextRun(text="")]


def plain_text(runs: list[TextRun]) -> str:
    """Flatten runs to their visible text, dropping images."""
    parts = []
    for run in runs:
        if run.kind == RunKind.image:
            continue
        parts.append(" " if run.kind == RunKind.hard_break else run.text)
    return "".join(parts)


def with_mark(runs: list[TextRun], mark: Mark) -> list[TextRun]:
    """Add mark to every text-bearing run, merging neighbours that now match."""
    return _merge([
        r if r.kind in (RunKind.image, RunKind.hard_break)
        else TextRun(text=r.text, kind=r.kind, marks=(*r.marks, mark), href=r.href, src=r.src)
        for r in runs
    ])
