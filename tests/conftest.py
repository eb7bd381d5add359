"""Shared pytest fixtures and test helpers for improved_markdown tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from improved_markdown.config.settings import ImdSettings
from improved_markdown.infrastructure.crypto import SecretKey, derive_key
from improved_markdown.infrastructure.session import SecretSession
from improved_markdown.infrastructure.workspace import Workspace

PASSWORD = "correct horse"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's IMD_* environment out of the tests."""
    for name in ("IMD_PASSWORD", "IMD_CONFIG", "IMD_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture(scope="session")
def secret_key() -> SecretKey:
    """Key for :data:`PASSWORD` (PBKDF2 is slow; derive once)."""
    return derive_key(PASSWORD)


def fixed_prompt(*answers: str | None) -> Callable[[], str | None]:
    """Prompt stub returning *answers* in order, then the last one forever."""
    queue = list(answers)

    def prompt() -> str | None:
        return queue.pop(0) if len(queue) > 1 else queue[0]

    return prompt


@pytest.fixture
def make_prompt() -> Callable[..., Callable[[], str | None]]:
    """Factory for scripted password prompts."""
    return fixed_prompt


@pytest.fixture
def session() -> SecretSession:
    return SecretSession(fixed_prompt(PASSWORD))


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """Document root with a small tree of markdown files.

    Layout::

        /index.md
        /notes/intro.md
        /notes/partials/footer.md
        /assets/                      (directory)
    """
    (tmp_path / "notes" / "partials").mkdir(parents=True)
    (tmp_path / "assets").mkdir()
    (tmp_path / "index.md").write_text("# Home\n", encoding="utf-8")
    (tmp_path / "notes" / "intro.md").write_text(
        "---\ntitle: Intro\n---\n# {{ title }}\n", encoding="utf-8"
    )
    (tmp_path / "notes" / "partials" / "footer.md").write_text(
        "-- footer for {{ title }} --", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def workspace(doc_root: Path) -> Iterator[Workspace]:
    """Workspace over :func:`doc_root` whose prompt answers :data:`PASSWORD`."""
    settings = ImdSettings.from_cli(root=doc_root)
    ws = Workspace(settings, fixed_prompt(PASSWORD))
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_root(doc_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the document root so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(doc_root)
