"""Prioritized-pattern lexer engine for Tinct.

This package executes an ordered, nested Grammar against a source string and
returns a token tree that covers the source exactly.

Architecture:
lexer/
├── __init__.py          # Re-exports tokenize
├── core.py              # Token-tree builder (passes, nesting, output)
└── matcher.py           # Applies one rule across the span list

Usage:
    >>> from tinct.grammar import compile_grammar
    >>> from tinct.lexer import tokenize
    >>> grammar = compile_grammar({"boolean": r"\\b(?:true|false)\\b"})
    >>> tokenize("true false", grammar)
    [Token(boolean, 'true'), ' ', Token(boolean, 'false')]

"""

from tinct.lexer.core import tokenize

__all__ = ["tokenize"]
