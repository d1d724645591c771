"""Request and result models for the render and extract pipeline"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_CODE_THEME = "monokai"


class RenderOptions(BaseModel):
    """Per-request render settings; immutable once built."""
    model_config = ConfigDict(frozen=True)

    sanitize_html:  bool = True
    enable_toc:     bool = True
    enable_mermaid: bool = True     # passed through to the converter
    enable_math:    bool = True     # passed through to the converter
    code_theme:     str = Field(default=DEFAULT_CODE_THEME, description="Pygments style for fenced code")

    @field_validator("code_theme", mode="before")
    @classmethod
    def _default_theme(cls, value):
        """Fall back to the default theme when unset or blank."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CODE_THEME
        return value


class TOCEntry(BaseModel):
    """One ATX heading from the markdown source."""
    level: int = Field(..., ge=1, le=6)
    text: str
    id: str


class CodeBlock(BaseModel):
    """A fenced code block copied verbatim from the markdown source."""
    language: str = ""
    code: str
    line_count: int


class RenderResult(BaseModel):
    """Rendered HTML plus structure extracted from the same source."""
    html: str = ""
    toc: list[TOCEntry] = []
    metadata: Optional[dict[str, str]] = None     # only set when frontmatter has keys
    code_blocks: list[CodeBlock] = []
