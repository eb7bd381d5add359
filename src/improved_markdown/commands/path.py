"""Command group: path algebra on the document filesystem."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from improved_markdown.commands._base import ImdGroup

if TYPE_CHECKING:
    from improved_markdown.commands._context import AppContext


@click.group(
    cls=ImdGroup,
    examples="""\
  imd path resolve /docs/guide ../assets/logo.png
  imd path relative /docs/guide /assets/logo.png
  imd path dirname /docs/guide/intro.md
  imd path is-absolute docs/intro.md""",
)
def path() -> None:
    """Resolve and relate virtual document paths."""


@path.command(
    examples="""\
  imd path resolve /a/b ../c
  imd -q path resolve notes ./draft.md
  imd --json path resolve / ../../etc""",
)
@click.argument("segments", nargs=-1)
@click.pass_obj
def resolve(app: AppContext, segments: tuple[str, ...]) -> None:
    """Resolve SEGMENTS right to left into one absolute path."""
    from improved_markdown.services.paths import PathService

    app.emit(PathService(app.workspace).resolve(segments))


@path.command(
    examples="""\
  imd path relative /a/b /a/c/d
  imd -q path relative /notes/2024 /notes/2024""",
)
@click.argument("from_path", metavar="FROM")
@click.argument("to_path", metavar="TO")
@click.pass_obj
def relative(app: AppContext, from_path: str, to_path: str) -> None:
    """Print the relative path from FROM to TO."""
    from improved_markdown.services.paths import PathService

    app.emit(PathService(app.workspace).relative(from_path, to_path))


@path.command(
    examples="""\
  imd path dirname /a/b/c.md
  imd -q path dirname intro.md""",
)
@click.argument("path_arg", metavar="PATH")
@click.pass_obj
def dirname(app: AppContext, path_arg: str) -> None:
    """Print the directory portion of PATH."""
    from improved_markdown.services.paths import PathService

    app.emit(PathService(app.workspace).dirname(path_arg))


@path.command(
    "is-absolute",
    examples="""\
  imd path is-absolute /a/b
  imd -q path is-absolute a/b""",
)
@click.argument("path_arg", metavar="PATH")
@click.pass_obj
def is_absolute(app: AppContext, path_arg: str) -> None:
    """Report whether PATH is absolute."""
    from improved_markdown.services.paths import PathService

    app.emit(PathService(app.workspace).is_absolute(path_arg))
