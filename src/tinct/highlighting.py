"""Syntax highlighting for code blocks.

Implements the Highlighter protocol used by documentation hosts (a
``highlight(code, language, hl_lines, show_linenos)`` and
``supports_language(language)`` pair), backed by the Tinct lexer and the
language registry.

Usage:
    from tinct.highlighting import highlight

    html = highlight("src.id -> tgt.id;", "fml")

    # Use a custom registry
    from tinct.highlighting import TinctHighlighter
    highlighter = TinctHighlighter(registry=my_registry)

    # Or replace the module-level highlighter entirely
    from tinct.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from tinct.config import get_highlight_config
from tinct.languages.registry import LanguageRegistry, get_default_registry
from tinct.lexer import tokenize
from tinct.renderers.html import HtmlRenderer, html_escape
from tinct.utils.logger import get_logger

logger = get_logger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and language and return HTML markup
    with syntax highlighting applied.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        """Highlight code with syntax colors.

        Args:
            code: Source code to highlight
            language: Language identifier (e.g., "fml", "mapping")
            hl_lines: 1-indexed line numbers to emphasize (optional)
            show_linenos: Include line numbers in output

        Returns:
            HTML markup with highlighting

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - MUST use CSS classes (not inline styles)
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Contract:
            - MUST NOT raise exceptions
            - SHOULD handle common aliases (mapping -> fml)
        """
        ...


class TinctHighlighter:
    """Highlighter backed by the Tinct lexer.

    Args:
        registry: Language registry (defaults to the built-in languages)
        renderer: HTML renderer for token streams

    Thread Safety:
        Holds only immutable state; safe to share across threads.
    """

    __slots__ = ("_registry", "_renderer")

    def __init__(
        self,
        registry: LanguageRegistry | None = None,
        renderer: HtmlRenderer | None = None,
    ) -> None:
        self._registry = registry
        self._renderer = renderer or HtmlRenderer()

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def supports_language(self, language: str) -> bool:
        """Check if a grammar is registered for the language or alias."""
        return isinstance(language, str) and self.registry.has(language)

    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        """Highlight code, falling back to escaped text for unknown languages."""
        grammar = self.registry.get(language) if isinstance(language, str) and language else None
        per_line = bool(hl_lines) or show_linenos

        if grammar is None:
            logger.debug("No grammar for language %r; emitting plain text", language)
            escaped = html_escape(code)
            lines = escaped.split("\n") if per_line else None
            body = escaped
        else:
            tokens = tokenize(code, grammar)
            lines = self._renderer.render_lines(tokens) if per_line else None
            body = "" if per_line else self._renderer.render(tokens)

        if lines is not None:
            body = _decorate_lines(lines, set(hl_lines or ()), show_linenos)
        return _wrap(body, language)


def _decorate_lines(lines: list[str], hl_set: set[int], show_linenos: bool) -> str:
    width = len(str(len(lines)))
    decorated: list[str] = []
    for lineno, line in enumerate(lines, start=1):
        if show_linenos:
            line = f'<span class="lineno">{lineno:>{width}}</span>{line}'
        if lineno in hl_set:
            line = f'<span class="highlight-line">{line}</span>'
        decorated.append(line)
    return "\n".join(decorated)


def _wrap(body: str, language: str) -> str:
    config = get_highlight_config()
    if not config.wrap_pre:
        return body
    lang_class = f' class="{html_escape(config.language_class_prefix + language)}"' if language else ""
    return f"<pre{lang_class}><code{lang_class}>{body}</code></pre>"


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]

# Global highlighter; None means the built-in TinctHighlighter
_highlighter: Highlighter | SimpleHighlighter | None = None
_default_highlighter = TinctHighlighter()


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation, or a simple
            function that takes (code, language) and returns HTML.
            Pass None to restore the built-in highlighter.
    """
    global _highlighter
    _highlighter = highlighter


def get_highlighter() -> Highlighter | SimpleHighlighter:
    """Get the active highlighter instance."""
    return _highlighter if _highlighter is not None else _default_highlighter


def highlight(
    code: str,
    language: str,
    *,
    hl_lines: list[int] | None = None,
    show_linenos: bool = False,
) -> str:
    """Highlight code using the active highlighter.

    Args:
        code: Source code to highlight
        language: Language identifier or alias
        hl_lines: 1-indexed line numbers to emphasize (optional)
        show_linenos: Include line numbers in output

    Returns:
        HTML markup (highlighted if the language is known, plain otherwise)
    """
    highlighter = get_highlighter()
    # Full protocol or a simple callable
    if hasattr(highlighter, "highlight") and callable(highlighter.highlight):
        return highlighter.highlight(code, language, hl_lines=hl_lines, show_linenos=show_linenos)
    return highlighter(code, language)


def supports_language(language: str) -> bool:
    """Check if the active highlighter supports the language."""
    highlighter = get_highlighter()
    if hasattr(highlighter, "supports_language"):
        return bool(highlighter.supports_language(language))
    return False
