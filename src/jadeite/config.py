"""ContextVar-based parse configuration for Jadeite.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse call and read by every parser in the context,
including the child parsers spawned for ``extends`` and ``include``.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from jadeite.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(colons=True)):
        root = Parser(source, filename="index.jade").parse()

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jadeite.loaders import SourceLoader

DEFAULT_EXTENSION = ".jade"


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: the template filename is intentionally excluded. It is per-call
    state and stays on the Parser instance.

    Attributes:
        colons: Treat ``:`` as ``=`` inside attribute lists
        extension: Template extension appended to extension-less
            ``extends``/``include`` paths
        loader: Source loader for ``extends``/``include``; None reads
            UTF-8 files from disk

    """

    colons: bool = False
    extension: str = DEFAULT_EXTENSION
    loader: SourceLoader | None = None

    def get_loader(self) -> SourceLoader:
        """Return the configured loader, falling back to the filesystem."""
        if self.loader is not None:
            return self.loader
        from jadeite.loaders import FileSystemLoader

        return FileSystemLoader()

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Unknown keys are ignored.

        Example:
            >>> ParseConfig.from_dict({"colons": True, "pretty": True}).colons
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "jadeite_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(colons=True)):
        ...     get_parse_config().colons
        True

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_EXTENSION",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
