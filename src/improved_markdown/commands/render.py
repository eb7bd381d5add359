"""Command: render a document's template layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from improved_markdown.commands._base import ImdCommand

if TYPE_CHECKING:
    from improved_markdown.commands._context import AppContext


@click.command(
    cls=ImdCommand,
    examples="""\
  imd render /notes/intro.md
  imd --root ./site render /index.md
  imd render /notes/draft.md --stdin < draft.md
  IMD_PASSWORD=pw imd --json render /secrets/plan.md""",
)
@click.argument("virtual_path")
@click.option(
    "--stdin",
    "from_stdin",
    is_flag=True,
    help="Read the document source from stdin; VIRTUAL_PATH names it.",
)
@click.pass_obj
def render(app: AppContext, virtual_path: str, from_stdin: bool) -> None:
    """Render the document at VIRTUAL_PATH under the document root."""
    from improved_markdown.domain.paths import resolve
    from improved_markdown.services.render import RenderService

    service = RenderService(app.workspace)
    if from_stdin:
        source = click.get_text_stream("stdin").read()
        app.emit(service.render_document(source, path=resolve(virtual_path)))
    else:
        app.emit(service.render_file(virtual_path))
