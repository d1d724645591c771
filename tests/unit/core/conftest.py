"""Shared markdown samples for core unit tests"""

import pytest


SAMPLE_MD = """\
---
title: Test Doc
author: Alice
---
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

### Deep Heading

```
plain
block
```
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
