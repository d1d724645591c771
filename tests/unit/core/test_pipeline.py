"""Unit tests for core/pipeline.py"""

import pytest

from mdsafe.core.errors import ConversionFailed, InputTooLarge, RenderError
from mdsafe.core.models import RenderOptions, RenderResult
from mdsafe.core.pipeline import check_size, extract_code_blocks, extract_toc, render, render_html


# --- render ---

def test_render_empty_input_short_circuits(fake_converter):
    """Empty input returns an empty result without calling the converter."""
    result = render("", converter=fake_converter, max_input_size=1)
    assert result == RenderResult(html="")
    assert fake_converter.calls == []


def test_render_passes_source_and_options(fake_converter):
    """The converter receives the original content and the resolved options."""
    opts = RenderOptions(code_theme="vim", enable_math=False)
    render("---\nk: v\n---\n# T\n", opts, converter=fake_converter)
    assert fake_converter.calls == [("---\nk: v\n---\n# T\n", opts)]


def test_render_default_options(fake_converter):
    """Options default to RenderOptions() when not given."""
    render("x", converter=fake_converter)
    assert fake_converter.calls[0][1] == RenderOptions()


def test_render_sanitizes_html(make_converter):
    """Converter output is sanitized when sanitize_html is on."""
    conv = make_converter("<p>Hello</p><script>alert('x')</script><p>World</p>")
    result = render("anything", converter=conv)
    assert result.html == "<p>Hello</p><p>World</p>"


def test_render_without_sanitize_passes_html_through(make_converter):
    """Converter output is untouched when sanitize_html is off."""
    raw = "<p onclick='x'>Hi</p>\n"
    result = render("anything", RenderOptions(sanitize_html=False), converter=make_converter(raw))
    assert result.html == raw


def test_render_extracts_from_source_not_html(make_converter):
    """TOC, code blocks, and metadata come from the markdown, not the converter's HTML."""
    conv = make_converter("<h1>Other</h1><pre><code>nope</code></pre>")
    md = "---\ntitle: Doc\n---\n# Real\n\n```sh\necho <script>\n```\n"
    result = render(md, converter=conv)
    assert [t.text for t in result.toc] == ["Real"]
    assert result.metadata == {"title": "Doc"}
    assert result.code_blocks[0].language == "sh"
    assert result.code_blocks[0].code == "echo <script>\n"


def test_render_toc_disabled(fake_converter):
    """No TOC entries are produced when enable_toc is off; code blocks still are."""
    result = render("# H\n```\nx\n```\n", RenderOptions(enable_toc=False), converter=fake_converter)
    assert result.toc == []
    assert len(result.code_blocks) == 1


def test_render_metadata_absent_without_frontmatter(fake_converter):
    """metadata stays None when there is no frontmatter block."""
    assert render("# H\n", converter=fake_converter).metadata is None


def test_render_metadata_absent_for_empty_block(fake_converter):
    """An empty frontmatter block does not produce a metadata mapping."""
    assert render("---\n\n---\n# H\n", converter=fake_converter).metadata is None


def test_render_conversion_failure_wrapped(make_converter):
    """Converter errors surface as ConversionFailed with the original message."""
    conv = make_converter(error=RuntimeError("engine exploded"))
    with pytest.raises(ConversionFailed, match="engine exploded") as exc:
        render("x", converter=conv)
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert isinstance(exc.value, RenderError)


def test_render_html_returns_string(make_converter):
    """render_html is render(...).html."""
    assert render_html("x", converter=make_converter("<p>y</p>")) == "<p>y</p>"


# --- size limit ---

@pytest.mark.parametrize("entry", [
    lambda c, n: render(c, max_input_size=n, converter=None),
    lambda c, n: extract_toc(c, max_input_size=n),
    lambda c, n: extract_code_blocks(c, max_input_size=n),
])
def test_size_limit_exceeded(entry):
    """All three entry points reject input over the limit."""
    with pytest.raises(InputTooLarge, match="exceeds maximum size of 100 bytes"):
        entry("x" * 101, 100)


def test_size_limit_at_boundary(fake_converter):
    """Input exactly at the limit is accepted."""
    render("x" * 100, converter=fake_converter, max_input_size=100)
    extract_toc("x" * 100, max_input_size=100)
    extract_code_blocks("x" * 100, max_input_size=100)


def test_size_limit_rejected_before_conversion(fake_converter):
    """Oversized input never reaches the converter."""
    with pytest.raises(InputTooLarge):
        render("x" * 11, converter=fake_converter, max_input_size=10)
    assert fake_converter.calls == []


def test_size_limit_counts_utf8_bytes():
    """The limit is measured in encoded bytes, not characters."""
    with pytest.raises(InputTooLarge) as exc:
        check_size("é" * 6, 10)
    assert exc.value.size == 12
    assert exc.value.limit == 10


def test_size_limit_zero_is_unlimited():
    """max_input_size=0 disables the check."""
    check_size("x" * 10_000, 0)


# --- standalone extraction ---

def test_extract_toc_entry_point():
    """extract_toc returns headings for non-empty input."""
    toc = extract_toc("# Title\n## Section A\n### Sub A1\n## Section B\n")
    assert [(t.level, t.id) for t in toc] == [(1, "title"), (2, "section-a"), (3, "sub-a1"), (2, "section-b")]


def test_extract_code_blocks_entry_point():
    """extract_code_blocks returns fenced blocks for non-empty input."""
    blocks = extract_code_blocks("```go\nfmt.Println(1)\n```\n")
    assert blocks[0].language == "go"


@pytest.mark.parametrize("entry", [extract_toc, extract_code_blocks])
def test_extract_empty_input(entry):
    """Empty input returns an empty list and ignores the size limit."""
    assert entry("", max_input_size=1) == []
