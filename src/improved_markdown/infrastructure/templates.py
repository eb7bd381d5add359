"""Jinja2 environment for markdown documents on the virtual filesystem.

Template names are virtual absolute paths (``/notes/intro.md``). Relative
``include``/``import`` names resolve against the directory of the including
template, the same way the file link tags resolve their targets.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    TemplateNotFound,
    TemplateRuntimeError,
    Undefined,
    nodes,
)
from jinja2.ext import Extension

from improved_markdown.domain.paths import dirname, is_absolute, resolve

if TYPE_CHECKING:
    from jinja2.parser import Parser
    from jinja2.runtime import Context

    from improved_markdown.infrastructure.session import SecretSession

DEFAULT_RAW_PREFIX = "/api/raw"
DEFAULT_FILES_PREFIX = "/files"
DEFAULT_PLACEHOLDER = "#ENCRYPTED#"


class DocumentLoader(BaseLoader):
    """Serve virtual paths from a directory on disk.

    Names are canonicalized against ``/`` first, so ``..`` segments are
    clamped at the document root. Sources are never cached.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def locate(self, name: str) -> Path:
        """Map a virtual path to its file under the root."""
        virtual = resolve(name)
        target = self.root.joinpath(*[part for part in virtual.split("/") if part])
        if not target.resolve().is_relative_to(self.root.resolve()):
            raise TemplateNotFound(name, f"Path escapes document root: {virtual}")
        return target

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, Callable[[], bool]]:
        target = self.locate(template)
        if target.is_dir():
            message = f"Fetching {resolve(template)}: resource is a directory"
            raise TemplateNotFound(template, message)
        if not target.is_file():
            raise TemplateNotFound(template)
        source = target.read_text(encoding="utf-8")
        return source, str(target), lambda: False


class DocumentEnvironment(Environment):
    """Environment whose template names follow POSIX path rules."""

    raw_prefix: str = DEFAULT_RAW_PREFIX
    files_prefix: str = DEFAULT_FILES_PREFIX

    def join_path(self, template: str, parent: str) -> str:
        if is_absolute(template):
            return template
        return resolve(dirname(parent), template)

    def render_document(
        self, body: str, context: dict[str, Any], *, path: str | None = None
    ) -> str:
        """Render *body* as if it were the template stored at *path*.

        The name matters for relative includes and file links inside the
        body; an unnamed body resolves against the document root.
        """
        code = self.compile(body, name=path)
        template = self.template_class.from_code(self, code, self.make_globals(None))
        return template.render(context)


class FileLinkExtension(Extension):
    """``{% link %}``, ``{% image %}`` and ``{% download %}`` tags.

    Each tag takes ``name[, path]``; with one argument the name doubles as
    the path. Relative paths resolve against the current template.
    """

    tags = {"download", "image", "link"}

    def parse(self, parser: Parser) -> nodes.Node:
        token = next(parser.stream)
        args: list[nodes.Expr] = [nodes.ContextReference(), nodes.Const(token.value)]
        while parser.stream.current.type != "block_end":
            if len(args) > 2:
                parser.stream.expect("comma")
            args.append(parser.parse_expression())

        if len(args) == 2:
            parser.fail("file path required", token.lineno)
        if len(args) > 4:
            parser.fail(f"'{token.value}' takes at most two arguments", token.lineno)

        return nodes.Output([self.call_method("_render", args)], lineno=token.lineno)

    def _render(self, context: Context, tag: str, name: Any, path: Any = None) -> str:
        if not path:
            if not name:
                raise TemplateRuntimeError("file path required")
            path = name
        target = str(path)
        if not is_absolute(target):
            target = resolve(dirname(context.name), target) if context.name else resolve(target)

        env = self.environment
        raw_prefix = getattr(env, "raw_prefix", DEFAULT_RAW_PREFIX)
        files_prefix = getattr(env, "files_prefix", DEFAULT_FILES_PREFIX)
        if tag == "download":
            return f"[{name}]({raw_prefix}{target})"
        if tag == "image":
            return f"![{name}]({raw_prefix}{target})"
        href = f"{files_prefix}{target}"
        return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{name}</a>'


def build_template_environment(
    root: Path,
    session: SecretSession,
    *,
    raw_prefix: str = DEFAULT_RAW_PREFIX,
    files_prefix: str = DEFAULT_FILES_PREFIX,
    placeholder: str = DEFAULT_PLACEHOLDER,
    strict_undefined: bool = True,
) -> DocumentEnvironment:
    """Build the document environment with link tags and secret filters.

    ``encrypt`` seals a value with the session key. ``decrypt`` reveals it,
    or renders *placeholder* when the key does not authenticate. Both filters
    take the value as a string, so numbers and dates from front matter work.
    """

    def encrypt_filter(value: Any) -> str:
        return session.encrypt(str(value))

    def decrypt_filter(value: Any) -> str:
        return session.reveal(str(value), placeholder)

    env = DocumentEnvironment(
        loader=DocumentLoader(root),
        autoescape=False,
        undefined=StrictUndefined if strict_undefined else Undefined,
        keep_trailing_newline=True,
        extensions=[FileLinkExtension],
    )
    env.raw_prefix = raw_prefix
    env.files_prefix = files_prefix
    env.filters["encrypt"] = encrypt_filter
    env.filters["decrypt"] = decrypt_filter
    return env
