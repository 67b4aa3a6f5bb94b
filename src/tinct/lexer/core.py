"""Token-tree builder: drives the matcher over a whole grammar.

Algorithm:
1. Start from one unmatched span covering the source.
2. Apply every entry of the grammar, in declared order, rule by rule.
3. Repeat the full pass while it keeps producing matches, up to one pass
   per grammar entry (or the configured cap).
4. Build the result in source order. Matches whose rule has a nested
   grammar are tokenized again on their own text, recursively.

Thread Safety:
tokenize() is a pure function of (source, grammar). The span list is
created per call and never shared.

"""

from __future__ import annotations

from tinct.config import get_highlight_config
from tinct.grammar import Grammar
from tinct.lexer.matcher import Node, apply_rule
from tinct.tokens import Token, TokenItem
from tinct.utils.logger import get_logger

logger = get_logger(__name__)


def tokenize(source: str, grammar: Grammar) -> list[TokenItem]:
    """Split source into plain-text leaves and typed tokens.

    Args:
        source: Text to tokenize
        grammar: Grammar to apply

    Returns:
        Items in source order. Leaves are ``str``; classified spans are
        Token objects whose content may hold child items. The empty source
        yields ``[""]``.

    Example:
        >>> from tinct.grammar import compile_grammar
        >>> tokenize("x = 42", compile_grammar({"number": r"\\d+"}))
        ['x = ', Token(number, '42')]
    """
    if not isinstance(source, str):
        raise TypeError(f"source must be str, got {type(source).__name__}")
    if not isinstance(grammar, Grammar):
        raise TypeError(f"grammar must be a Grammar, got {type(grammar).__name__}")

    max_passes = get_highlight_config().max_passes
    nodes = _match_grammar(source, grammar, max_passes)
    return [_build(node, max_passes) for node in nodes]


def _match_grammar(text: str, grammar: Grammar, max_passes: int | None) -> list[Node]:
    nodes: list[Node] = [text]
    if not text:
        return nodes

    cap = max(1, max_passes if max_passes is not None else len(grammar))
    for passes in range(1, cap + 1):
        produced = 0
        for name, rules in grammar:
            for rule in rules:
                produced += apply_rule(text, nodes, name, rule)
        if not produced:
            break
    else:
        logger.debug("Pass cap (%d) reached with matches still being produced", cap)
        return nodes

    logger.debug("Settled after %d pass(es) over %d character(s)", passes, len(text))
    return nodes


def _build(node: Node, max_passes: int | None) -> TokenItem:
    if isinstance(node, str):
        return node

    rule = node.rule
    if rule.inside is None:
        content: str | tuple[TokenItem, ...] = node.text
    else:
        children = _match_grammar(node.text, rule.inside, max_passes)
        content = tuple(_build(child, max_passes) for child in children)
    return Token(node.type, content, rule.alias, len(node.text))


__all__ = ["tokenize"]
