"""Language registry for grammar lookup and registration.

The registry maps language names and aliases to grammars. Every alias
resolves to the very same Grammar object as its primary name.

Thread Safety:
LanguageRegistry is immutable after creation. Safe to share.
Use LanguageRegistryBuilder for mutable construction.

Example:
    >>> builder = LanguageRegistryBuilder()
    >>> builder.register("fml", FML, aliases=("mapping", "structuremap"))
    >>> registry = builder.build()
    >>> registry.get("mapping") is registry.get("fml")
    True
"""

from __future__ import annotations

from collections.abc import Iterable

from tinct.errors import GrammarError, UnknownLanguageError
from tinct.grammar import Grammar
from tinct.utils.logger import get_logger

logger = get_logger(__name__)


def _key(name: str) -> str:
    return name.strip().lower()


class LanguageRegistry:
    """Immutable registry of grammars.

    Maps language names and aliases (case-insensitive) to grammars.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_by_name", "_primary")

    def __init__(self, by_name: dict[str, Grammar], primary: dict[str, str]) -> None:
        """Initialize registry with pre-built mappings.

        Use LanguageRegistryBuilder to create instances.
        """
        self._by_name = by_name
        self._primary = primary

    def get(self, name: str) -> Grammar | None:
        """Get grammar for a language name or alias.

        Returns:
            Grammar if registered, None otherwise
        """
        return self._by_name.get(_key(name))

    def resolve(self, name: str) -> Grammar:
        """Get grammar for a language name or alias.

        Raises:
            UnknownLanguageError: If nothing is registered under ``name``
        """
        grammar = self.get(name)
        if grammar is None:
            raise UnknownLanguageError(name)
        return grammar

    def primary_name(self, name: str) -> str | None:
        """Map an alias to the name its grammar was registered under."""
        return self._primary.get(_key(name))

    def has(self, name: str) -> bool:
        """Check if a language name or alias is registered."""
        return _key(name) in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """All registered names and aliases."""
        return frozenset(self._by_name.keys())

    def __contains__(self, name: object) -> bool:
        """Support 'name in registry' syntax."""
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        """Number of registered names and aliases."""
        return len(self._by_name)


class LanguageRegistryBuilder:
    """Mutable builder for LanguageRegistry.

    Use this to register grammars, then call build() to create
    an immutable registry.
    """

    __slots__ = ("_by_name", "_primary")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._by_name: dict[str, Grammar] = {}
        self._primary: dict[str, str] = {}

    def register(
        self,
        name: str,
        grammar: Grammar,
        aliases: Iterable[str] = (),
    ) -> LanguageRegistryBuilder:
        """Register a grammar under a name and optional aliases.

        Args:
            name: Primary language name (e.g., "fml")
            grammar: Grammar to register
            aliases: Additional names resolving to the same grammar

        Returns:
            Self for method chaining

        Raises:
            GrammarError: If grammar is not a Grammar, or a name is empty
                or already registered
        """
        if not isinstance(grammar, Grammar):
            raise GrammarError(f"expected Grammar, got {type(grammar).__name__}", name)

        primary = _key(name)
        keys = [primary, *(_key(alias) for alias in aliases)]
        for key in keys:
            if not key:
                raise GrammarError("language name must not be empty", name)
            if key in self._by_name:
                raise GrammarError(f"language {key!r} is already registered", name)
        if len(set(keys)) != len(keys):
            raise GrammarError("duplicate alias", name)

        for key in keys:
            self._by_name[key] = grammar
            self._primary[key] = primary
        logger.debug("Registered language %r (aliases: %s)", primary, ", ".join(keys[1:]) or "none")
        return self

    def build(self) -> LanguageRegistry:
        """Build immutable registry from registered grammars."""
        return LanguageRegistry(dict(self._by_name), dict(self._primary))


def create_default_registry() -> LanguageRegistry:
    """Create a registry with the built-in languages.

    Registers ``fml`` with aliases ``mapping`` and ``structuremap``.
    """
    from tinct.languages.fml import FML, FML_ALIASES, FML_NAME

    return LanguageRegistryBuilder().register(FML_NAME, FML, aliases=FML_ALIASES).build()


_default_registry: LanguageRegistry | None = None


def get_default_registry() -> LanguageRegistry:
    """Get the shared default registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def get_grammar(name: str, registry: LanguageRegistry | None = None) -> Grammar:
    """Resolve a language name or alias to its grammar.

    Raises:
        UnknownLanguageError: If the name is not registered
    """
    if registry is None:
        registry = get_default_registry()
    return registry.resolve(name)
