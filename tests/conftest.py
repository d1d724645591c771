"""Root test configuration: shared fake converter and working-directory isolation"""

import pytest

from mdsafe.core.models import RenderOptions


class FakeConverter:
    """Returns canned HTML and records each call."""

    def __init__(self, html: str = "<p>ok</p>", error: Exception = None):
        self.html = html
        self.error = error
        self.calls: list[tuple[str, RenderOptions]] = []

    def convert(self, source: str, options: RenderOptions) -> str:
        self.calls.append((source, options))
        if self.error:
            raise self.error
        return self.html


@pytest.fixture(name="fake_converter")
def fake_converter_fixture():
    return FakeConverter()


@pytest.fixture(name="make_converter")
def make_converter_fixture():
    """Factory for converters returning specific HTML or raising a specific error."""
    return FakeConverter


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml or MDSAFE_* env leaks in."""
    monkeypatch.chdir(tmp_path)
    for name in ("MAX_INPUT_SIZE", "SANITIZE_HTML", "ENABLE_TOC", "ENABLE_MERMAID",
                 "ENABLE_MATH", "CODE_THEME", "PARSER_CONFIG"):
        monkeypatch.delenv(f"MDSAFE_{name}", raising=False)
