"""Frontmatter separation: leading `---` key/value block and document body"""

import re
from typing import Optional


FRONTMATTER_OPEN_RE = re.compile(r'---\r?\n')
CLOSING_DELIMITER = '\n---'


def _parse_block(block: str) -> dict[str, str]:
    """Scan `key: value` lines; no quoting, nesting, or escapes."""
    meta: dict[str, str] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(':')
        key = key.strip()
        if sep and key:
            meta[key] = value.strip()
    return meta


def split_frontmatter(source: str) -> tuple[Optional[dict[str, str]], str]:
    """Return (metadata, body) with the leading `---` block removed.

    Metadata is None and the source is returned unchanged when the document
    does not open with a delimiter line or the block is never closed.
    """
    m = FRONTMATTER_OPEN_RE.match(source)
    if not m:
        return None, source

    end = source.find(CLOSING_DELIMITER, m.end())
    if end < 0:
        return None, source

    block = source[m.end():end]
    line_end = source.find('\n', end + len(CLOSING_DELIMITER))
    body = source[line_end + 1:] if line_end >= 0 else ''
    return _parse_block(block), body
