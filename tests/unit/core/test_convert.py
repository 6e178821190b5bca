"""Unit tests for core/convert.py"""

import pytest

from mdpost.core.blocks import segment
from mdpost.core.convert import Backend, assemble, convert
from mdpost.core.models import ConversionResult


def test_basic_conversion():
    """The H1 becomes the title and is not rendered in the body."""
    result = convert("# Title\n\nThis is a paragraph.")
    assert isinstance(result, ConversionResult)
    assert result.title == "Title"
    assert "<p>This is a paragraph.</p>" in result.document
    assert "<h1>" not in result.document


def test_frontmatter_title_wins_over_h1():
    result = convert('---\ntitle: "A"\n---\n# B\n\nbody')
    assert result.title == "A"
    assert "B" not in result.document


def test_fallback_title():
    assert convert("Just content, no heading", "Default Title").title == "Default Title"
    assert convert("Just content").title == "Untitled"


def test_empty_input_html():
    result = convert("", "Fallback")
    assert result.title == "Fallback"
    assert result.document == ""
    assert result.tags == []
    assert result.subtitle is None


def test_empty_input_tree():
    result = convert("", "Fallback", backend="tree")
    assert result.title == "Fallback"
    assert result.document == {
        "type": "doc",
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": ""}]}],
    }


def test_whitespace_only():
    assert convert("   \n\n   ").document == ""


def test_sample_document(sample_md):
    result = convert(sample_md)
    assert result.title == "My Article"
    assert result.subtitle == "A Deep Dive"
    assert result.tags == ["tech", "tutorial"]
    html = result.document
    assert "<h2>Introduction</h2>" in html
    assert "<strong>introduction</strong>" in html
    assert "<em>emphasis</em>" in html
    assert "<ul>" in html
    assert 'class="language-javascript"' in html
    assert "<blockquote><strong>Remember</strong><br />Always test your code</blockquote>" in html
    assert '<a href="https://example.com">link</a>' in html
    assert "---" not in html


def test_sample_document_tree(sample_md):
    doc = convert(sample_md, backend=Backend.tree).document
    types = [n["type"] for n in doc["content"]]
    assert types == ["heading", "paragraph", "bulletList", "heading", "codeBlock", "blockquote", "paragraph"]
    assert all(n.get("attrs", {}).get("level") != 1 for n in doc["content"])


def test_code_fence_scenario():
    result = convert("```javascript\nconst x = 1;\n```")
    assert result.document == '<pre><code class="language-javascript">const x = 1;</code></pre>'
    tree = convert("```javascript\nconst x = 1;\n```", backend="tree").document
    assert tree["content"][0]["attrs"] == {"language": "javascript"}
    assert tree["content"][0]["content"][0]["text"] == "const x = 1;"


def test_later_rule_is_not_frontmatter():
    result = convert("Intro\n\n---\n\nOutro")
    assert result.document == "<p>Intro</p>\n<hr />\n<p>Outro</p>"


def test_tags_comma_string():
    assert convert("---\ntags: a, b\n---\n").tags == ["a", "b"]


def test_block_list_tags_are_not_collected():
    """The converter reads `tags:` with nothing after it as an empty list, ignoring dash lines."""
    result = convert("---\ntags:\n  - a\n  - b\n---\nx")
    assert result.tags == []
    assert result.document == "<p>x</p>"


def test_subtitle_policy_extended():
    md = "---\ndescription: From description\n---\nBody."
    assert convert(md).subtitle is None
    assert convert(md, subtitle_policy="extended").subtitle == "From description"


def test_subtitle_max_length():
    result = convert("abcdef", subtitle_policy="extended", subtitle_max_length=3)
    assert result.subtitle == "abc..."


def test_crlf_input():
    result = convert("---\r\ntitle: T\r\n---\r\n## H\r\n")
    assert result.title == "T"
    assert result.document == "<h2>H</h2>"


def test_deterministic_output(sample_md):
    """Converting the same input twice gives identical output."""
    assert convert(sample_md) == convert(sample_md)
    assert convert(sample_md, backend="tree") == convert(sample_md, backend="tree")


@pytest.mark.parametrize("md", [
    "*", "**", "***", "[", "[[", "![", "`", "~~", "> ", ">", "```", "1.", "- ",
    "> [!", "---\n", "#", "# ", "__*~`[]()!", "\n\n\n", "\t",
])
@pytest.mark.parametrize("backend", ["html", "tree"])
def test_convert_never_raises(md, backend):
    """convert is total over odd and truncated inputs."""
    result = convert(md, backend=backend)
    assert isinstance(result.title, str)


def test_non_string_rejected():
    with pytest.raises(TypeError):
        convert(None)


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        convert("x", backend="pdf")


def test_result_is_frozen():
    result = convert("x")
    with pytest.raises(Exception):
        result.title = "changed"


def test_assemble_uses_heading_candidate():
    result = assemble(segment("text"), {}, "Fallback", heading="From H1")
    assert result.title == "From H1"
    assert result.document == "<p>text</p>"
