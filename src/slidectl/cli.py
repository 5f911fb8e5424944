"""Root CLI group for slidectl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from slidectl import __version__
from slidectl.commands import register_commands
from slidectl.commands._base import SlideGroup
from slidectl.commands._context import AppContext
from slidectl.config.settings import SlideSettings


@click.group(
    cls=SlideGroup,
    invoke_without_command=True,
    examples="""\
  slidectl icon a blue circle
  slidectl logo Acme
  slidectl --deck pitch.pptx unbg --select 0:4""",
)
@click.version_option(version=__version__, prog_name="slidectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-d",
    "--deck",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Deck to edit (default: presentation.pptx).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    deck: Path | None,
) -> None:
    """slidectl — add generated icons, logos and cut-out pictures to slides."""
    settings = SlideSettings.from_cli(
        config_path=config_path,
        deck=deck,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
