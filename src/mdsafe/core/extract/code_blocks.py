"""Fenced code block extraction from raw markdown source"""

import re

from mdsafe.core.models import CodeBlock


# Opening fence: three backticks plus an optional word-only info string, then a line break.
# The block closes at the next line that starts with three backticks.
FENCE_RE = re.compile(r'^```(\w*)\r?\n(.*?)^```', re.MULTILINE | re.DOTALL | re.ASCII)


def line_count(code: str) -> int:
    """Number of newline characters plus one."""
    return code.count('\n') + 1


def extract_code_blocks(source: str) -> list[CodeBlock]:
    """Return fenced code blocks in document order; unterminated fences yield nothing."""
    return [
        CodeBlock(language=m.group(1), code=m.group(2), line_count=line_count(m.group(2)))
        for m in FENCE_RE.finditer(source)
    ]
