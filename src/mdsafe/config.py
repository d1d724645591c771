"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from mdsafe.core.models import DEFAULT_CODE_THEME, RenderOptions


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    max_input_size: int  = Field(default=1048576, ge=0, description="Max input bytes per request; 0 = unlimited")
    sanitize_html:  bool = Field(default=True,  description="Run rendered HTML through the allowlist sanitizer")
    enable_toc:     bool = Field(default=True,  description="Include heading TOC in render results")
    enable_mermaid: bool = Field(default=True,  description="Emit mermaid fences as <pre class=\"mermaid\">")
    enable_math:    bool = Field(default=True,  description="Parse $ and $$ math")
    code_theme:     str  = Field(default=DEFAULT_CODE_THEME, description="Pygments style for fenced code")
    parser_config:  str  = Field(default="gfm-like", description="MarkdownIt parser preset name")

    def render_options(self) -> RenderOptions:
        """Per-request options derived from these settings."""
        return RenderOptions(
            sanitize_html=self.sanitize_html,
            enable_toc=self.enable_toc,
            enable_mermaid=self.enable_mermaid,
            enable_math=self.enable_math,
            code_theme=self.code_theme,
        )


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSAFE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSAFE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
