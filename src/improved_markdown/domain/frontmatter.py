"""Front matter parsing for markdown documents.

The YAML block between the leading ``---`` delimiters becomes the template
context; everything after it is the template body.
"""

from __future__ import annotations

from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

_FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when the front matter block is not a valid YAML mapping."""


def _new_yaml() -> YAML:
    """Create a fresh safe YAML parser.

    ruamel.yaml's YAML object is stateful; a new instance per call keeps
    a failed load from leaking into the next document.
    """
    return YAML(typ="safe", pure=True)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from markdown content.

    Expects the document to start with ``---`` on the first line. The
    second ``---`` closes the YAML block. Everything after is the body.

    ``\\r\\n`` line endings are normalized to ``\\n`` in the returned body
    whether or not a block is present.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no front matter
        delimiters are found, returns ``({}, normalized_content)``.

    Raises:
        FrontmatterError: The block is not valid YAML or not a mapping.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, normalized

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, normalized

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        data = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        raise FrontmatterError(str(exc)) from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(msg)
    return dict(data), body
