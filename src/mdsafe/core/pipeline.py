"""Render pipeline: validate, convert, sanitize, extract, assemble"""

import logging
from typing import Optional

from mdsafe.core.convert import Converter, MarkdownItConverter
from mdsafe.core.errors import ConversionFailed, InputTooLarge
from mdsafe.core.extract import code_blocks, toc
from mdsafe.core.frontmatter import split_frontmatter
from mdsafe.core.models import CodeBlock, RenderOptions, RenderResult, TOCEntry
from mdsafe.core.sanitize import sanitize


logger = logging.getLogger(__name__)


def check_size(content: str, max_input_size: int) -> None:
    """Raise InputTooLarge when content's UTF-8 length exceeds max_input_size (0 = unlimited)."""
    if max_input_size <= 0:
        return
    size = len(content.encode('utf-8'))
    if size > max_input_size:
        raise InputTooLarge(size, max_input_size)


def render(
    content: str,
    options: Optional[RenderOptions] = None,
    *,
    converter: Optional[Converter] = None,
    max_input_size: int = 0,
    ) -> RenderResult:
    """Convert markdown to HTML and extract TOC, frontmatter, and code blocks.

    Extraction always reads `content` itself, never the generated HTML. Only
    the HTML goes through the sanitizer.
    """
    if not content:
        return RenderResult(html="")
    check_size(content, max_input_size)

    options = options or RenderOptions()
    converter = converter or MarkdownItConverter()
    logger.debug("rendering %d chars (sanitize=%s, toc=%s)", len(content), options.sanitize_html, options.enable_toc)

    try:
        html = converter.convert(content, options)
    except Exception as e:
        raise ConversionFailed(str(e)) from e

    if options.sanitize_html:
        html = sanitize(html)

    metadata, _ = split_frontmatter(content)
    result = RenderResult(
        html=html,
        toc=toc.extract_toc(content) if options.enable_toc else [],
        metadata=metadata or None,
        code_blocks=code_blocks.extract_code_blocks(content),
    )
    logger.debug(
        "rendered %d bytes of HTML, %d headings, %d code blocks",
        len(result.html), len(result.toc), len(result.code_blocks),
    )
    return result


def render_html(content: str, options: Optional[RenderOptions] = None, **kwargs) -> str:
    """Render and return only the HTML string."""
    return render(content, options, **kwargs).html


def extract_toc(content: str, *, max_input_size: int = 0) -> list[TOCEntry]:
    """Headings of `content` without rendering it."""
    if not content:
        return []
    check_size(content, max_input_size)
    return toc.extract_toc(content)


def extract_code_blocks(content: str, *, max_input_size: int = 0) -> list[CodeBlock]:
    """Fenced code blocks of `content` without rendering it."""
    if not content:
        return []
    check_size(content, max_input_size)
    return code_blocks.extract_code_blocks(content)
