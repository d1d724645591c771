"""Slug generation for heading anchor ids"""

import re


_UNSAFE_RE = re.compile(r'[^a-z0-9\s-]', re.ASCII)
_SPACE_RE = re.compile(r'\s+', re.ASCII)


def slugify(text: str) -> str:
    """Convert heading text to a lowercase, ASCII, hyphen-separated anchor id.

    Non-ASCII letters are dropped rather than transliterated, and duplicate
    slugs are left as-is for the caller.
    """
    text = _UNSAFE_RE.sub('', text.lower())
    return _SPACE_RE.sub('-', text).strip('-')
