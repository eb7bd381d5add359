"""Command group: encrypt and decrypt document secrets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from improved_markdown.commands._base import ImdGroup

if TYPE_CHECKING:
    from improved_markdown.commands._context import AppContext


def _read_value(value: str) -> str:
    """Return *value*, or stdin minus one trailing newline when it is ``-``."""
    if value != "-":
        return value
    text = click.get_text_stream("stdin").read()
    return text[:-1] if text.endswith("\n") else text


@click.group(
    cls=ImdGroup,
    examples="""\
  IMD_PASSWORD=pw imd secret encrypt "launch code 0000"
  IMD_PASSWORD=pw imd -q secret decrypt "$PAYLOAD"
  cat secret.txt | IMD_PASSWORD=pw imd secret encrypt -""",
)
def secret() -> None:
    """Password-protected secrets for embedding in documents."""


@secret.command(
    examples="""\
  imd secret encrypt "meet at noon"
  IMD_PASSWORD=pw imd -q secret encrypt - < note.txt""",
)
@click.argument("plaintext", default="-")
@click.pass_obj
def encrypt(app: AppContext, plaintext: str) -> None:
    """Encrypt PLAINTEXT (or stdin with '-') into a base64 payload."""
    from improved_markdown.services.secrets import SecretService

    app.emit(SecretService(app.workspace).encrypt(_read_value(plaintext)))


@secret.command(
    examples="""\
  imd secret decrypt "$PAYLOAD"
  IMD_PASSWORD=pw imd --json secret decrypt - < payload.txt""",
)
@click.argument("payload", default="-")
@click.pass_obj
def decrypt(app: AppContext, payload: str) -> None:
    """Decrypt PAYLOAD (or stdin with '-'); a wrong password shows the placeholder."""
    from improved_markdown.services.secrets import SecretService

    app.emit(SecretService(app.workspace).decrypt(_read_value(payload)))
