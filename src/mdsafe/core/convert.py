"""Markdown to HTML conversion: converter protocol and markdown-it-py engine"""

from typing import Protocol

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from mdit_py_plugins.dollarmath import dollarmath_plugin
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from mdsafe.core.models import RenderOptions


class Converter(Protocol):
    """Anything that turns markdown source into an HTML string."""

    def convert(self, source: str, options: RenderOptions) -> str:
        ...


def _make_highlighter(options: RenderOptions):
    """Build a markdown-it highlight callback bound to the requested Pygments style."""
    formatter = HtmlFormatter(style=options.code_theme, noclasses=True, nowrap=True)

    def _highlight(code: str, lang: str, _attrs: str) -> str:
        if options.enable_mermaid and lang == 'mermaid':
            return f'<pre class="mermaid">{escapeHtml(code)}</pre>'
        if not lang:
            return ''
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            return ''       # markdown-it falls back to escaped plain code
        return highlight(code, lexer, formatter)

    return _highlight


class MarkdownItConverter:
    """Default converter: CommonMark/GFM via markdown-it-py with raw HTML passthrough.

    Raw HTML in the source reaches the output untouched; the pipeline's
    sanitizer is what makes the result safe to serve.
    """

    def __init__(self, preset: str = 'gfm-like'):
        self.preset = preset

    def _make_parser(self, options: RenderOptions) -> MarkdownIt:
        """Build a fresh MarkdownIt instance for one request."""
        md = MarkdownIt(self.preset, options_update={
            "linkify": False,
            "html": True,
            "highlight": _make_highlighter(options),
        })
        if options.enable_math:
            md.use(dollarmath_plugin)
        return md

    def convert(self, source: str, options: RenderOptions) -> str:
        return self._make_parser(options).render(source)
