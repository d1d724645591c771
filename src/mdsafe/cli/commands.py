"""CLI command implementations"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsafe.config import Settings, load_config
from mdsafe.core.convert import MarkdownItConverter
from mdsafe.core.errors import RenderError
from mdsafe.core.frontmatter import split_frontmatter
from mdsafe.core.pipeline import extract_code_blocks, extract_toc, render
from mdsafe.core.sanitize import sanitize


PathArg = Annotated[str, typer.Argument(help="Input file, or '-' for stdin")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline steps to stderr")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _read(path: str) -> str:
    """Read input text from a file path or stdin."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def render_cmd(
    path: PathArg,
    no_sanitize: Annotated[bool, typer.Option("--no-sanitize", help="Skip HTML sanitization")] = False,
    no_toc: Annotated[bool, typer.Option("--no-toc", help="Skip table-of-contents extraction")] = False,
    theme: Annotated[Optional[str], typer.Option("--code-theme", help="Pygments style for code")] = None,
    max_size: Annotated[Optional[int], typer.Option("--max-input-size", help="Max input bytes; 0 = unlimited")] = None,
    verbose: VerboseOpt = False,
    ):
    """Render markdown to HTML and print the result record as JSON."""
    _setup_logging(verbose)
    settings = _settings(overrides={
        "sanitize_html": False if no_sanitize else None,
        "enable_toc": False if no_toc else None,
        "code_theme": theme,
        "max_input_size": max_size,
    })
    try:
        result = render(
            _read(path),
            settings.render_options(),
            converter=MarkdownItConverter(settings.parser_config),
            max_input_size=settings.max_input_size,
        )
    except RenderError as e:
        _fail(str(e))
    typer.echo(result.model_dump_json(indent=2, exclude_none=True))


def toc_cmd(path: PathArg, verbose: VerboseOpt = False):
    """Print ATX headings as {"toc": [...]}."""
    _setup_logging(verbose)
    settings = _settings()
    try:
        entries = extract_toc(_read(path), max_input_size=settings.max_input_size)
    except RenderError as e:
        _fail(str(e))
    _echo_json({"toc": [entry.model_dump() for entry in entries]})


def code_blocks_cmd(path: PathArg, verbose: VerboseOpt = False):
    """Print fenced code blocks as {"code_blocks": [...]}."""
    _setup_logging(verbose)
    settings = _settings()
    try:
        blocks = extract_code_blocks(_read(path), max_input_size=settings.max_input_size)
    except RenderError as e:
        _fail(str(e))
    _echo_json({"code_blocks": [b.model_dump() for b in blocks]})


def sanitize_cmd(path: PathArg, verbose: VerboseOpt = False):
    """Print an HTML file reduced to allowlisted tags and attributes."""
    _setup_logging(verbose)
    typer.echo(sanitize(_read(path)))


def frontmatter_cmd(path: PathArg):
    """Print leading frontmatter and the remaining body as JSON."""
    metadata, body = split_frontmatter(_read(path))
    _echo_json({"metadata": metadata, "body": body})
