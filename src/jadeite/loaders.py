"""Template source loaders.

``extends`` and ``include`` never touch the filesystem directly: the parser
resolves a path and hands it to a loader. Anything with a ``load(path)``
method returning the template text satisfies the protocol.

Example:
    >>> from jadeite.loaders import DictLoader
    >>> loader = DictLoader({"views/layout.jade": "html\\n  block body"})
    >>> loader.load("views/layout.jade")
    'html\\n  block body'
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from jadeite.errors import ResolutionError


@runtime_checkable
class SourceLoader(Protocol):
    """Protocol for objects that return template source by path."""

    def load(self, path: str) -> str:
        """Return the text stored at ``path``.

        Raises:
            ResolutionError: The path does not exist or cannot be read.
        """
        ...


class FileSystemLoader:
    """Read templates from disk.

    Relative paths are resolved against ``root`` when one is given,
    otherwise against the process working directory.
    """

    __slots__ = ("_encoding", "_root")

    def __init__(self, root: str | os.PathLike[str] | None = None, encoding: str = "utf-8") -> None:
        self._root = Path(root) if root is not None else None
        self._encoding = encoding

    def load(self, path: str) -> str:
        target = Path(path)
        if self._root is not None and not target.is_absolute():
            target = self._root / target
        try:
            return target.read_text(encoding=self._encoding)
        except FileNotFoundError as exc:
            raise ResolutionError(f"template not found: {path}", path=path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ResolutionError(f"cannot read template {path}: {exc}", path=path) from exc

    def __repr__(self) -> str:
        return f"FileSystemLoader(root={self._root!r}, encoding={self._encoding!r})"


class DictLoader:
    """Serve templates from an in-memory mapping of path -> source.

    Keys are compared after ``os.path.normpath`` so ``a/../b.jade`` finds
    ``b.jade``.
    """

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[str, str]) -> None:
        self._templates = {os.path.normpath(k): v for k, v in templates.items()}

    def load(self, path: str) -> str:
        try:
            return self._templates[os.path.normpath(path)]
        except KeyError:
            raise ResolutionError(f"template not found: {path}", path=path) from None

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and os.path.normpath(path) in self._templates

    def __repr__(self) -> str:
        return f"DictLoader({sorted(self._templates)!r})"


__all__ = ["DictLoader", "FileSystemLoader", "SourceLoader"]
