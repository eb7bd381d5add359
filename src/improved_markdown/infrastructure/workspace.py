"""Workspace — the single dependency injected into every service.

Owns the document root that backs the virtual ``/``, the secret session,
and the template environment. The session and environment are created
lazily so path commands never touch either.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from improved_markdown.infrastructure.session import PasswordPrompt, SecretSession
from improved_markdown.infrastructure.templates import (
    DocumentEnvironment,
    DocumentLoader,
    build_template_environment,
)

if TYPE_CHECKING:
    from pathlib import Path

    from improved_markdown.config.settings import ImdSettings

logger = logging.getLogger(__name__)


class Workspace:
    """Document root plus session-scoped rendering state."""

    def __init__(self, settings: ImdSettings, prompt: PasswordPrompt) -> None:
        self.settings = settings
        self._prompt = prompt
        self._session: SecretSession | None = None
        self._environment: DocumentEnvironment | None = None

    @property
    def root(self) -> Path:
        return self.settings.root

    @property
    def session(self) -> SecretSession:
        """The secret session (created lazily on first access)."""
        if self._session is None:
            self._session = SecretSession(self._prompt)
        return self._session

    @property
    def environment(self) -> DocumentEnvironment:
        """The template environment (built lazily on first access)."""
        if self._environment is None:
            render = self.settings.render
            self._environment = build_template_environment(
                self.root,
                self.session,
                raw_prefix=render.raw_prefix,
                files_prefix=render.files_prefix,
                placeholder=self.settings.secrets.placeholder,
                strict_undefined=render.strict_undefined,
            )
            logger.debug("Built template environment rooted at %s", self.root)
        return self._environment

    def locate(self, virtual_path: str) -> Path:
        """Map a virtual document path to its file on disk."""
        return DocumentLoader(self.root).locate(virtual_path)

    def close(self) -> None:
        """End the session: forget the derived key."""
        if self._session is not None:
            self._session.clear()
