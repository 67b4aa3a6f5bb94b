"""Exception classes for Tinct.

Provides standardized exceptions for error handling throughout Tinct.

Tokenizing itself never raises for ordinary input: unrecognized text is
emitted as plain leaves. Errors are reserved for malformed grammars (caught
when the grammar is built) and for lookups and rendering calls that are
handed something they cannot work with.
"""

from __future__ import annotations


class TinctError(Exception):
    """Base exception for all Tinct errors.

    Subclass this for specific error categories.
    """

    pass


class GrammarError(TinctError):
    """Malformed grammar definition.

    Raised while a grammar is being built, never partway through
    tokenizing.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize grammar error with optional entry path.

        Args:
            message: Error description
            path: Dotted path of the offending entry
                (e.g., "group-definition.inside.inputs")
        """
        self.message = message
        self.path = path

        location = f"{path}: " if path else ""
        super().__init__(f"{location}{message}")


class UnknownLanguageError(TinctError, LookupError):
    """No grammar is registered under the requested name."""

    def __init__(self, language: str) -> None:
        """Initialize unknown language error.

        Args:
            language: The name or alias that failed to resolve
        """
        self.language = language
        super().__init__(f"Unknown language: {language!r}")


class RenderError(TinctError):
    """Error during HTML rendering.

    Raised when the renderer is handed something that is not a token
    stream.
    """

    pass
