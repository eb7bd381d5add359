"""Rich console plumbing for imd output.

Renderers draw into an in-memory Console and return the text, leaving the
CLI to route it (stdout for results, stderr for failures). Rich drops ANSI
styling on its own when output is not a terminal, so pipes and CliRunner
see plain text.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

IMD_THEME = Theme(
    {
        "imd.ok": "bold green",
        "imd.error": "bold red",
        "imd.warning": "bold yellow",
        "imd.op": "bold cyan",
        "imd.key": "dim",
        "imd.path": "bold blue",
    }
)


def create_console(*, width: int = DEFAULT_WIDTH, color: bool | None = None) -> Console:
    """In-memory console using :data:`IMD_THEME`.

    *color* forces styling on or off; None lets Rich detect the terminal.
    """
    return Console(
        file=StringIO(),
        theme=IMD_THEME,
        width=width,
        highlight=False,
        emoji=False,
        force_terminal=color or None,
        no_color=color is False,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console is not writing to an in-memory buffer")
    return buffer.getvalue()
