"""
Tinct — Prioritized-pattern syntax highlighting for Python

A small lexer engine that runs ordered, nested regular-expression grammars
over source text and returns a token tree covering the input exactly.
Ships with a grammar for the FHIR Mapping Language (FML).

Quick Start:
    >>> from tinct import tokenize, get_grammar
    >>> tokenize("true false", get_grammar("fml"))
    [Token(boolean, 'true'), ' ', Token(boolean, 'false')]

    >>> from tinct import highlight
    >>> highlight("42", "fml")
    '<pre class="language-fml"><code class="language-fml"><span class="token number">42</span></code></pre>'

Custom Grammars:
    >>> from tinct import compile_grammar, tokenize
    >>> grammar = compile_grammar({
    ...     "comment": {"pattern": r"#.*", "greedy": True},
    ...     "number": r"\\b\\d+\\b",
    ... })
    >>> tokenize("x = 1  # one", grammar)
    ['x = ', Token(number, '1'), '  ', Token(comment, '# one')]

Installation:
    pip install tinct                # Engine and FML grammar (zero deps)
"""

from tinct.config import (
    HighlightConfig,
    get_highlight_config,
    highlight_config_context,
    reset_highlight_config,
    set_highlight_config,
)
from tinct.errors import GrammarError, RenderError, TinctError, UnknownLanguageError
from tinct.grammar import Grammar, Rule, compile_grammar
from tinct.highlighting import Highlighter, TinctHighlighter, highlight, supports_language
from tinct.languages import (
    FML,
    LanguageRegistry,
    LanguageRegistryBuilder,
    create_default_registry,
    get_grammar,
)
from tinct.lexer import tokenize
from tinct.renderers.html import HtmlRenderer
from tinct.serialization import from_json, to_json
from tinct.tokens import Token, TokenItem, iter_tokens, text_of, token_types

__version__ = "0.1.0"

__all__ = [
    # Engine
    "tokenize",
    "Token",
    "TokenItem",
    "text_of",
    "iter_tokens",
    "token_types",
    # Grammars
    "Grammar",
    "Rule",
    "compile_grammar",
    "FML",
    "LanguageRegistry",
    "LanguageRegistryBuilder",
    "create_default_registry",
    "get_grammar",
    # Presentation
    "HtmlRenderer",
    "Highlighter",
    "TinctHighlighter",
    "highlight",
    "supports_language",
    # Serialization
    "to_json",
    "from_json",
    # Configuration
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
    # Errors
    "TinctError",
    "GrammarError",
    "UnknownLanguageError",
    "RenderError",
    "__version__",
]
