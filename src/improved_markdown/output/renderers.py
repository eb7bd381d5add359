"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from improved_markdown.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from improved_markdown.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    output = get_output(console)
    if result.ok and result.op in _VERBATIM_OPS:
        return output
    return output.rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the primary value only.

    The value is returned as-is, trailing newline included.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    for key in _PRIMARY_KEYS.get(result.op, ()):
        if key in result.data:
            return _plain(result.data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _plain(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="imd.ok")
    op = Text(f"  {result.op}", style="imd.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="imd.key")
    v = Text(_plain(value), style=style)
    console.print(Text.assemble(k, v), soft_wrap=True)


def _raw(console: Console, text: str) -> None:
    """Write *text* to the buffer as-is; Rich would expand tabs and drop \\r."""
    console.file.write(text)


def _raw_field(console: Console, key: str, value: str) -> None:
    """Styled key, verbatim value."""
    console.print(Text(f"  {key}: ", style="imd.key"), end="", soft_wrap=True)
    _raw(console, f"{value}\n")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="imd.error")
    op = Text(f"  {result.op}", style="imd.op")
    console.print(label, op, end="")
    console.print()
    if result.error is None:
        return
    console.print(f"  {result.error.message}")
    if verbose:
        console.print(Text(f"  code: {result.error.code}", style="dim"))
        for k, v in result.error.detail.items():
            _field(console, k, v)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Path ops: the computed path (or flag), inputs only when verbose."""
    _status_line(console, result)
    d = result.data
    if "path" in d:
        _field(console, "path", d["path"], style="imd.path")
    if "absolute" in d:
        _field(console, "absolute", d["absolute"])
    if verbose:
        for key in ("segments", "from", "to", "input"):
            if key in d:
                _field(console, key, d[key])


def _render_secret(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("payload", "plaintext"):
        if key in d:
            _raw_field(console, key, d[key])
    if "authenticated" in d and (verbose or not d["authenticated"]):
        _field(console, "authenticated", d["authenticated"])


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Rendered documents are written verbatim so output can be piped."""
    if verbose:
        _status_line(console, result)
        if result.data.get("path"):
            _field(console, "path", result.data["path"], style="imd.path")
        console.print()
    _raw(console, result.data.get("content", ""))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Paths
    "resolve_path": _render_path,
    "relative_path": _render_path,
    "dirname": _render_path,
    "is_absolute": _render_path,
    # Secrets
    "encrypt": _render_secret,
    "decrypt": _render_secret,
    # Render
    "render": _render_document,
}

_VERBATIM_OPS = frozenset({"render"})

_PRIMARY_KEYS: dict[str, tuple[str, ...]] = {
    "resolve_path": ("path",),
    "relative_path": ("path",),
    "dirname": ("path",),
    "is_absolute": ("absolute",),
    "encrypt": ("payload",),
    "decrypt": ("plaintext",),
    "render": ("content",),
}
