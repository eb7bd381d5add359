"""POSIX path algebra over the virtual document filesystem.

Pure string functions, no OS access. Paths are ``/``-separated; an empty
string means ``.`` and a leading ``/`` marks an absolute path. Consumed by
the template loader (relative includes) and the file link helpers.

INVARIANT: every operation is total. Malformed input is normalized,
never rejected.
"""

from __future__ import annotations

import re

# root, dir, basename, ext — the classic POSIX split.
_SPLIT_PATH_PATTERN = re.compile(r"^(/?|)([\s\S]*?)((?:\.{1,2}|[^/]+?|)(\.[^./]*|))(?:[/]*)\Z")


def _normalize_segments(parts: list[str], *, allow_above_root: bool) -> list[str]:
    """Drop empty and ``.`` segments and collapse ``..`` where possible.

    A ``..`` with nothing left to collapse is kept only when
    *allow_above_root* is set (relative results); absolute results clamp
    it away at the root.
    """
    result: list[str] = []
    for part in parts:
        if not part or part == ".":
            continue
        if part == "..":
            if result and result[-1] != "..":
                result.pop()
            elif allow_above_root:
                result.append("..")
        else:
            result.append(part)
    return result


def _trim_segments(parts: list[str]) -> list[str]:
    """Strip leading and trailing empty segments."""
    start = 0
    end = len(parts)
    while start < end and not parts[start]:
        start += 1
    while end > start and not parts[end - 1]:
        end -= 1
    return parts[start:end]


def _split_path(path: str) -> tuple[str, str, str, str]:
    """Split *path* into ``(root, dir, basename, ext)``."""
    match = _SPLIT_PATH_PATTERN.match(path)
    if match is None:
        return "", "", "", ""
    root, directory, basename, ext = match.groups()
    return root, directory, basename, ext


class PathOperations:
    """Path operations anchored at a fixed working directory.

    The working directory is the implicit left-most segment of every
    :meth:`resolve` call. The document filesystem uses ``/``; an empty
    working directory keeps relative inputs relative.
    """

    def __init__(self, cwd: str = "/") -> None:
        self.cwd = cwd

    def resolve(self, *paths: str) -> str:
        """Resolve *paths* right to left into one canonical path.

        Segments are prepended until an absolute one is found; the working
        directory is tried last.

        Examples::

            >>> PathOperations("/").resolve("/a/b", "../c")
            '/a/c'
            >>> PathOperations("").resolve("a", "b", "../c")
            'a/c'
        """
        resolved = ""
        resolved_absolute = False
        for path in (self.cwd, *paths)[::-1]:
            if not path:
                continue
            resolved = f"{path}/{resolved}"
            resolved_absolute = path.startswith("/")
            if resolved_absolute:
                break

        segments = _normalize_segments(resolved.split("/"), allow_above_root=not resolved_absolute)
        joined = "/".join(segments)
        return (("/" if resolved_absolute else "") + joined) or "."

    def is_absolute(self, path: str) -> bool:
        """Return True when *path* starts with ``/``."""
        return path.startswith("/")

    def relative(self, from_path: str, to_path: str) -> str:
        """Return the relative path leading from *from_path* to *to_path*.

        Both sides are resolved first; identical paths yield ``""``.
        """
        from_parts = _trim_segments(self.resolve(from_path)[1:].split("/"))
        to_parts = _trim_segments(self.resolve(to_path)[1:].split("/"))

        length = min(len(from_parts), len(to_parts))
        same = length
        for i in range(length):
            if from_parts[i] != to_parts[i]:
                same = i
                break

        output = [".."] * (len(from_parts) - same)
        output.extend(to_parts[same:])
        return "/".join(output)

    def dirname(self, path: str) -> str:
        """Return the directory portion of *path* (``.`` when there is none)."""
        root, directory, _basename, _ext = _split_path(path)
        if not root and not directory:
            return "."
        if directory:
            directory = directory[:-1]
        return root + directory


# The document filesystem is rooted at "/".
DOCUMENT_PATHS = PathOperations("/")

resolve = DOCUMENT_PATHS.resolve
is_absolute = DOCUMENT_PATHS.is_absolute
relative = DOCUMENT_PATHS.relative
dirname = DOCUMENT_PATHS.dirname
