"""Table-of-contents extraction from ATX headings in raw markdown source"""

import re

from mdsafe.core.models import TOCEntry
from mdsafe.core.utils.slug import slugify


# Horizontal whitespace only, so a bare `#` line never swallows the next line as its text.
HEADING_RE = re.compile(r'^(#{1,6})[ \t]+(.*)$', re.MULTILINE)


def extract_toc(source: str) -> list[TOCEntry]:
    """Return one TOCEntry per ATX heading line, in document order.

    A marker followed only by blanks is an empty heading (text and id both
    empty). Setext headings are not recognized and headings inside fenced code
    are not skipped. Duplicate slugs are not disambiguated.
    """
    entries: list[TOCEntry] = []
    for m in HEADING_RE.finditer(source):
        text = m.group(2).strip()
        entries.append(TOCEntry(level=len(m.group(1)), text=text, id=slugify(text)))
    return entries
