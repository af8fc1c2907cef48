"""Exception classes for Jadeite.

Every failure while lexing, parsing or composing a template is fatal to the
current parse. Errors carry the offending line number (and file, when known)
so callers can point at the broken template.
"""

from __future__ import annotations


class JadeiteError(Exception):
    """Base exception for all Jadeite errors."""

    pass


class TemplateError(JadeiteError):
    """Error tied to a location inside a template source.

    Raised (through a subclass) when the lexer, parser or composition
    step rejects a template.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        filename: str | None = None,
    ) -> None:
        """Initialize template error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            filename: Path to the template (optional)
        """
        self.message = message
        self.lineno = lineno
        self.filename = filename

        location = ""
        if filename:
            location = f"{filename}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class LexicalError(TemplateError):
    """Input that cannot be split into tokens.

    Mixed tabs and spaces after the indentation style is locked in, or an
    attribute list whose parenthesis is never closed.
    """

    pass


class TemplateSyntaxError(TemplateError):
    """A token appeared where the grammar expects something else."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        filename: str | None = None,
        *,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message, lineno, filename)

    @classmethod
    def mismatch(
        cls, expected: str, actual: str, lineno: int | None, filename: str | None = None
    ) -> TemplateSyntaxError:
        """Build the ``expected X, but got Y`` error."""
        return cls(
            f'expected "{expected}", but got "{actual}"',
            lineno,
            filename,
            expected=expected,
            actual=actual,
        )


class ResolutionError(TemplateError):
    """A referenced template could not be resolved.

    Covers loader failures (missing or unreadable files) as well as
    composition chains that would never terminate (cyclic or duplicate
    ``extends``/``include``).
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        lineno: int | None = None,
        filename: str | None = None,
    ) -> None:
        self.path = path
        super().__init__(message, lineno, filename)


class ConfigurationError(JadeiteError):
    """The parser was not given something a construct requires.

    ``extends`` and ``include`` need the current template's filename to
    resolve relative paths.
    """

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        location = f" (line {lineno})" if lineno else ""
        super().__init__(f"{message}{location}")


__all__ = [
    "ConfigurationError",
    "JadeiteError",
    "LexicalError",
    "ResolutionError",
    "TemplateError",
    "TemplateSyntaxError",
]
