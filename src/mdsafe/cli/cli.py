"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsafe.cli.commands import code_blocks_cmd, frontmatter_cmd, render_cmd, sanitize_cmd, toc_cmd


app = typer.Typer(name="mdsafe", no_args_is_help=True, help="Safe markdown rendering and structure extraction")

app.command(name="render")(render_cmd)
app.command(name="toc")(toc_cmd)
app.command(name="code-blocks")(code_blocks_cmd)
app.command(name="sanitize")(sanitize_cmd)
app.command(name="frontmatter")(frontmatter_cmd)


def main() -> None:
    app()
