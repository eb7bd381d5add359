"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Workspace initialization, the password
prompt, and centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from improved_markdown.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from improved_markdown.config.settings import ImdSettings
    from improved_markdown.infrastructure.workspace import Workspace
    from improved_markdown.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is lazily initialized on first use so ``--help`` and
    ``--version`` never build a template environment.
    """

    def __init__(self, settings: ImdSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from improved_markdown.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from improved_markdown.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings, self.prompt_password)
        return self._workspace

    def prompt_password(self) -> str | None:
        """Password source for the secret session.

        ``IMD_PASSWORD`` wins; otherwise ask on the terminal. Under
        ``--no-interact`` a missing password is a usage error.
        """
        password = self.settings.password_text()
        if password:
            return password
        if self.settings.no_interact:
            msg = "No encryption password: set IMD_PASSWORD or drop --no-interact."
            raise click.UsageError(msg)
        value: str = click.prompt(
            self.settings.secrets.prompt_text,
            hide_input=True,
            default="",
            show_default=False,
            err=True,
        )
        return value

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            # Verbatim documents already carry their own trailing newline.
            click.echo(output, nl=not output.endswith("\n"))
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
