"""Allowlist HTML sanitizer over a parsed fragment tree

The input is parsed with BeautifulSoup and a new, clean serialization is built
from the tree; the parsed tree itself is never modified. Each element falls in
exactly one bucket:

  * DROP_SUBTREE_TAGS: element and all descendants (text included) are removed.
  * ALLOWED_TAGS: element is kept with filtered attributes; children are walked.
  * anything else: element is unwrapped and its children take its place.

Comments, doctypes and other markup declarations are always discarded. Text is
re-escaped on output, so the only markup in the result is what this module
emits itself.
"""

import logging
import re
from html import escape

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag


logger = logging.getLogger(__name__)


DROP_SUBTREE_TAGS: frozenset[str] = frozenset({
    'script', 'style', 'iframe', 'object', 'embed', 'applet', 'noscript',
    'frame', 'frameset', 'template', 'svg', 'math', 'base', 'link', 'meta',
})

ALLOWED_TAGS: frozenset[str] = frozenset({
    'a', 'abbr', 'b', 'blockquote', 'br', 'code', 'dd', 'del', 'details',
    'div', 'dl', 'dt', 'em', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'hr', 'i',
    'img', 'ins', 'kbd', 'li', 'ol', 'p', 'pre', 'q', 's', 'samp', 'small',
    'span', 'strong', 'sub', 'summary', 'sup', 'table', 'tbody', 'td',
    'tfoot', 'th', 'thead', 'tr', 'u', 'ul', 'var',
})

VOID_TAGS: frozenset[str] = frozenset({'br', 'hr', 'img'})

# Whitespace the parser treats as collapsible between elements.
ASCII_SPACES = ' \n\t\x0c\r'

SAFE_ATTRIBUTES: frozenset[str] = frozenset({
    'href', 'src', 'alt', 'title', 'class', 'id',
    'width', 'height', 'colspan', 'rowspan', 'align',
})

URL_ATTRIBUTES: frozenset[str] = frozenset({'href', 'src'})
BLOCKED_URL_SCHEMES = ('javascript:', 'data:', 'vbscript:')

# Browsers ignore embedded tabs, newlines and control characters in URL schemes.
_URL_NOISE_RE = re.compile(r'[\x00-\x20\x7f]+')


def _is_blocked_url(value: str) -> bool:
    """True when the URL uses a script or data scheme."""
    normalized = _URL_NOISE_RE.sub('', value.strip().lower())
    return normalized.startswith(BLOCKED_URL_SCHEMES)


def clean_attributes(attrs: dict) -> list[tuple[str, str]]:
    """Return the (name, value) pairs that survive the attribute allowlist, in order."""
    kept = []
    for name, value in attrs.items():
        key = name.lower()
        if key.startswith('on') or key not in SAFE_ATTRIBUTES:
            continue
        if isinstance(value, list):
            value = ' '.join(value)
        value = value or ''
        if key in URL_ATTRIBUTES and _is_blocked_url(value):
            continue
        kept.append((key, value))
    return kept


class _Serializer:
    """Builds the clean output from a parsed tree with an explicit stack.

    Adjacent text is merged before it is written. Outside <pre>, a merged run
    of only ASCII whitespace is reduced to a single newline or space, which is
    what the parser itself does to such runs; re-parsing the output therefore
    yields the same text nodes.
    """

    def __init__(self):
        self.out: list[str] = []
        self.text: list[str] = []
        self.pre_depth = 0

    def _flush(self) -> None:
        if not self.text:
            return
        run = ''.join(self.text)
        self.text.clear()
        if not self.pre_depth and all(c in ASCII_SPACES for c in run):
            run = '\n' if '\n' in run else ' '
        self.out.append(escape(run, quote=False))

    def _open(self, tag: Tag, name: str) -> bool:
        """Emit an allowed start tag; True when a closing tag is still owed."""
        self._flush()
        attrs = ''.join(f' {k}="{escape(v, quote=True)}"' for k, v in clean_attributes(tag.attrs))
        if name in VOID_TAGS:
            self.out.append(f'<{name}{attrs}/>')
            return False
        self.out.append(f'<{name}{attrs}>')
        if name == 'pre':
            self.pre_depth += 1
        return True

    def _close(self, name: str) -> None:
        self._flush()
        self.out.append(f'</{name}>')
        if name == 'pre':
            self.pre_depth -= 1

    def run(self, root: Tag) -> str:
        # Entries are nodes still to visit or ('close', name) markers.
        stack: list = list(reversed(root.contents))
        while stack:
            node = stack.pop()
            if isinstance(node, tuple):
                self._close(node[1])
            elif isinstance(node, Tag):
                name = (node.name or '').lower()
                if name in DROP_SUBTREE_TAGS:
                    continue
                if name in ALLOWED_TAGS:
                    if not self._open(node, name):
                        continue
                    stack.append(('close', name))
                stack.extend(reversed(node.contents))
            elif isinstance(node, PreformattedString):
                continue    # comment, doctype, CDATA, processing instruction
            elif isinstance(node, NavigableString):
                self.text.append(str(node))
        self._flush()
        return ''.join(self.out)


def sanitize(raw_html: str) -> str:
    """Return `raw_html` reduced to allowlisted tags and attributes.

    Never raises: markup the parser rejects comes back fully escaped so it
    can only be displayed as text.
    """
    if not raw_html:
        return ''
    try:
        soup = BeautifulSoup(raw_html, 'html.parser', multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        logger.warning("HTML sanitizer fell back to escaping: %s", e)
        return escape(raw_html)
    return _Serializer().run(soup).strip()
