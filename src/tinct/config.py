"""ContextVar-based highlight configuration for Tinct.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per context and read by the lexer and the renderers.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from tinct.config import HighlightConfig, highlight_config_context

    with highlight_config_context(HighlightConfig(class_prefix="tok")):
        html = highlight(code, "fml")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Immutable highlight configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        class_prefix: First CSS class on every token span
        language_class_prefix: Prefix for the language class on <pre>/<code>
        wrap_pre: Wrap highlighted output in <pre><code>
        max_passes: Cap on full grammar passes per tokenize call.
            None means one pass per grammar entry; values below 1 act as 1.

    """

    class_prefix: str = "token"
    language_class_prefix: str = "language-"
    wrap_pre: bool = True
    max_passes: int | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "HighlightConfig":
        """Create HighlightConfig from dictionary.

        Only includes keys that are valid HighlightConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = HighlightConfig.from_dict({
            ...     "class_prefix": "tok",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.class_prefix
            'tok'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: HighlightConfig = HighlightConfig()

# Thread-local configuration via ContextVar
_highlight_config: ContextVar[HighlightConfig] = ContextVar(
    "highlight_config",
    default=_DEFAULT_CONFIG,
)


def get_highlight_config() -> HighlightConfig:
    """Get current highlight configuration (thread-local)."""
    return _highlight_config.get()


def set_highlight_config(config: HighlightConfig) -> None:
    """Set highlight configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _highlight_config.set(config)


def reset_highlight_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _highlight_config.set(_DEFAULT_CONFIG)


@contextmanager
def highlight_config_context(config: HighlightConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: HighlightConfig to use within the context.

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _highlight_config.get()
    _highlight_config.set(config)
    try:
        yield
    finally:
        _highlight_config.set(previous)


__all__ = [
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
]
