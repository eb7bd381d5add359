"""RenderService — expand a markdown document's template layer.

Front matter becomes the template context; the body is rendered with the
document environment (relative includes, file link tags, secret filters).
Failures render into the document as an error section instead of
aborting, mirroring what a reader would see in the preview. Any exception
raised while the body renders counts, including errors from filters and
expressions (``{{ 1 / 0 }}``) and a refused password prompt.
"""

from __future__ import annotations

import logging

from jinja2 import TemplateNotFound

from improved_markdown.domain.frontmatter import FrontmatterError, parse_frontmatter
from improved_markdown.domain.paths import resolve
from improved_markdown.services.base import BaseService
from improved_markdown.services.result import ServiceResult

logger = logging.getLogger(__name__)


def error_section(title: str, exc: Exception) -> str:
    """Markdown section describing a render failure."""
    return f"# {title}\n\n```text\n{type(exc).__name__}: {exc}\n```\n"


class RenderService(BaseService):
    """Render documents from source text or from the document root."""

    def render_document(self, source: str, *, path: str | None = None) -> ServiceResult:
        """Render *source* as the document stored at virtual *path*."""
        op = "render"
        warnings: list[str] = []
        try:
            context, body = parse_frontmatter(source)
        except FrontmatterError as exc:
            logger.debug("Front matter rejected for %s", path, exc_info=True)
            warnings.append(f"Front matter error: {exc}")
            content = error_section("Front Matter error", exc)
        else:
            try:
                content = self._workspace.environment.render_document(body, context, path=path)
            except Exception as exc:
                logger.debug("Template rendering failed for %s", path, exc_info=True)
                warnings.append(f"Template error: {exc}")
                content = error_section("Template error", exc)

        return ServiceResult.success(op, {"path": path, "content": content}, warnings=warnings)

    def render_file(self, virtual_path: str) -> ServiceResult:
        """Read *virtual_path* from the document root and render it."""
        op = "render"
        path = resolve(virtual_path)
        try:
            target = self._workspace.locate(path)
        except TemplateNotFound as exc:
            message = exc.message or f"No document at {path}"
            return ServiceResult.failure(op, "NOT_FOUND", message, path=path)
        if not target.is_file():
            return ServiceResult.failure(op, "NOT_FOUND", f"No document at {path}", path=path)
        source = target.read_text(encoding="utf-8")
        return self.render_document(source, path=path)
