"""Structured-tree backend: blocks to a ProseMirror/Tiptap-style JSON document"""

from typing import Any

from mdpost.core.inline import with_mark
from mdpost.core.models import Block, BlockType, Mark, RunKind, TextRun


MARK_TYPES: dict[Mark, str] = {
    Mark.bold: 'bold',
    Mark.italic: 'italic',
    Mark.strikethrough: 'strikethrough',
    Mark.code: 'code',
}

Node = dict[str, Any]


def text_node(text: str, marks: list[Node] = None) -> Node:
    node: Node = {"type": "text", "text": text}
    if marks:
        node["marks"] = marks
    return node


class TreeRenderer:
    """Serialize blocks to a `doc` node; an empty stream becomes one empty paragraph."""

    def render(self, blocks: list[Block]) -> Node:
        content = [self.render_block(b) for b in blocks]
        if not content:
            content = [self._paragraph([TextRun(text="")])]
        return {"type": "doc", "content": content}

    def render_block(self, block: Block) -> Node:
        if block.type == BlockType.heading:
            return {
                "type": "heading",
                "attrs": {"level": block.level},
                "content": self.render_runs(block.content),
            }
        if block.type == BlockType.paragraph:
            return self._paragraph(block.content)
        if block.type == BlockType.unordered_list:
            return self._list("bulletList", block.items)
        if block.type == BlockType.ordered_list:
            return self._list("orderedList", block.items)
        if block.type == BlockType.blockquote:
            return self._blockquote(block)
        if block.type == BlockType.code_block:
            node: Node = {"type": "codeBlock", "attrs": {"language": block.language}}
            if block.code:
                node["content"] = [text_node(block.code)]
            return node
        if block.type == BlockType.horizontal_rule:
            return {"type": "horizontalRule"}
        raise ValueError(f"Unknown block type: {block.type}")

    def _paragraph(self, runs: list[TextRun]) -> Node:
        return {"type": "paragraph", "content": self.render_runs(runs)}

    def _list(self, kind: str, items: list[list[TextRun]]) -> Node:
        return {
            "type": kind,
            "content": [{"type": "listItem", "content": [self._paragraph(item)]} for item in items],
        }

    def _blockquote(self, block: Block) -> Node:
        runs = list(block.content)
        if block.callout_title:
            title = with_mark(block.callout_title, Mark.bold)
            body = [r for r in runs if r.text or r.kind != RunKind.text]
            runs = title + ([TextRun(kind=RunKind.hard_break)] + body if body else [])
        node: Node = {"type": "blockquote", "content": [self._paragraph(runs)]}
        if block.callout_type:
            node["attrs"] = {"callout": block.callout_type}
        return node

    def render_runs(self, runs: list[TextRun]) -> list[Node]:
        """Convert runs to inline nodes; at least one node is always returned."""
        nodes = [self.render_run(r) for r in runs if r.text or r.kind != RunKind.text]
        return nodes or [text_node("")]

    def render_run(self, run: TextRun) -> Node:
        if run.kind == RunKind.hard_break:
            return {"type": "hardBreak"}
        if run.kind == RunKind.image:
            return {"type": "image", "attrs": {"src": run.src, "alt": run.text}}

        marks: list[Node] = [{"type": MARK_TYPES[m]} for m in run.marks]
        if run.kind == RunKind.link:
            marks.append({"type": "link", "attrs": {"href": run.href}})
        return text_node(run.text, marks)
