"""HTML backend: blocks and runs to a portable HTML fragment"""

import html

from mdpost.core.inline import with_mark
from mdpost.core.models import MARK_ORDER, Block, BlockType, Mark, RunKind, TextRun


MARK_TAGS: dict[Mark, str] = {
    Mark.bold: 'strong',
    Mark.italic: 'em',
    Mark.strikethrough: 'del',
    Mark.code: 'code',
}


def escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def escape_attr(text: str) -> str:
    return html.escape(text, quote=True)


class HtmlRenderer:
    """Serialize blocks to HTML, one element per block joined by newlines."""

    def render(self, blocks: list[Block]) -> str:
        return '\n'.join(self.render_block(b) for b in blocks)

    def render_block(self, block: Block) -> str:
        if block.type == BlockType.heading:
            return f"<h{block.level}>{self.render_runs(block.content)}</h{block.level}>"
        if block.type == BlockType.paragraph:
            return f"<p>{self.render_runs(block.content)}</p>"
        if block.type == BlockType.unordered_list:
            return self._render_list('ul', block.items)
        if block.type == BlockType.ordered_list:
            return self._render_list('ol', block.items)
        if block.type == BlockType.blockquote:
            return self._render_blockquote(block)
        if block.type == BlockType.code_block:
            lang = f' class="language-{escape_attr(block.language)}"' if block.language else ''
            return f"<pre><code{lang}>{escape_text(block.code or '')}</code></pre>"
        if block.type == BlockType.horizontal_rule:
            return "<hr />"
        raise ValueError(f"Unknown block type: {block.type}")

    def _render_list(self, tag: str, items: list[list[TextRun]]) -> str:
        lines = [f"<{tag}>"]
        lines.extend(f"<li>{self.render_runs(item)}</li>" for item in items)
        lines.append(f"</{tag}>")
        return '\n'.join(lines)

    def _render_blockquote(self, block: Block) -> str:
        body = self.render_runs(block.content)
        if block.callout_type is None:
            return f"<blockquote><p>{body}</p></blockquote>"
        if not block.callout_title:
            return f"<blockquote>{body}</blockquote>"
        title = self.render_runs(with_mark(block.callout_title, Mark.bold))
        return f"<blockquote>{title}<br />{body}</blockquote>" if body else f"<blockquote>{title}</blockquote>"

    def render_runs(self, runs: list[TextRun]) -> str:
        return ''.join(self.render_run(r) for r in runs)

    def render_run(self, run: TextRun) -> str:
        if run.kind == RunKind.hard_break:
            return "<br />"
        if run.kind == RunKind.image:
            return f'<img src="{escape_attr(run.src or "")}" alt="{escape_attr(run.text)}" />'

        out = escape_text(run.text)
        if run.kind == RunKind.link:
            out = f'<a href="{escape_attr(run.href or "")}">{out}</a>'
        # innermost tag first so bold+italic reads <strong><em>..</em></strong>
        for mark in reversed(MARK_ORDER):
            if mark in run.marks:
                tag = MARK_TAGS[mark]
                out = f"<{tag}>{out}</{tag}>"
        return out
