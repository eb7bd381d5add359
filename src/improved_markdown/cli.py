"""Root CLI group for imd with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from improved_markdown import __version__
from improved_markdown.commands import register_commands
from improved_markdown.commands._context import AppContext
from improved_markdown.config.settings import ImdSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="imd")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no password prompt).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory backing the virtual '/' (default: config dir or CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    root: Path | None,
) -> None:
    """imd — markdown document paths and embedded secrets."""
    ctx.ensure_object(dict)
    settings = ImdSettings.from_cli(
        config_path=config_path,
        root=root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
