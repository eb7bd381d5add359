"""BaseService — common constructor for imd services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from improved_markdown.config.settings import ImdSettings
    from improved_markdown.infrastructure.workspace import Workspace


class BaseService:
    """Holds the :class:`Workspace` a service operates on.

    Services are cheap; the CLI builds one per command. Expensive state
    (the derived key, the template environment) lives on the workspace.
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def settings(self) -> ImdSettings:
        return self._workspace.settings
