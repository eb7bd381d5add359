"""PathService — virtual path algebra exposed as service operations."""

from __future__ import annotations

from collections.abc import Sequence

from improved_markdown.domain.paths import dirname, is_absolute, relative, resolve
from improved_markdown.services.base import BaseService
from improved_markdown.services.result import ServiceResult


class PathService(BaseService):
    """Resolve and relate paths on the document filesystem (rooted at ``/``)."""

    def resolve(self, segments: Sequence[str]) -> ServiceResult:
        data = {"segments": list(segments), "path": resolve(*segments)}
        return ServiceResult.success("resolve_path", data)

    def relative(self, from_path: str, to_path: str) -> ServiceResult:
        data = {"from": from_path, "to": to_path, "path": relative(from_path, to_path)}
        return ServiceResult.success("relative_path", data)

    def dirname(self, path: str) -> ServiceResult:
        return ServiceResult.success("dirname", {"input": path, "path": dirname(path)})

    def is_absolute(self, path: str) -> ServiceResult:
        return ServiceResult.success("is_absolute", {"input": path, "absolute": is_absolute(path)})
