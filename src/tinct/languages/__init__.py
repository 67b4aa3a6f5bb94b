"""Built-in grammars and the language registry.

Provides:
- fml: the FHIR Mapping Language grammar (``fml``, ``mapping``, ``structuremap``)
- registry: LanguageRegistry, LanguageRegistryBuilder, get_grammar
"""

from tinct.languages.fml import FML
from tinct.languages.registry import (
    LanguageRegistry,
    LanguageRegistryBuilder,
    create_default_registry,
    get_default_registry,
    get_grammar,
)

__all__ = [
    "FML",
    "LanguageRegistry",
    "LanguageRegistryBuilder",
    "create_default_registry",
    "get_default_registry",
    "get_grammar",
]
