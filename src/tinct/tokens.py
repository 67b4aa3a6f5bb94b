"""Token definitions for the Tinct lexer engine.

The engine produces a sequence whose items are either plain ``str`` leaves
(text no rule classified) or Token objects. A Token's content is either the
matched text or, when its rule carries a nested grammar, a tuple of child
items of the same shape.

Invariant:
    Concatenating the leaf text of a token stream, in order and recursively,
    reproduces the source exactly.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Union

# A leaf is unmatched text; a Token is classified text.
TokenItem = Union[str, "Token"]


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of source text.

    Attributes:
        type: Token type name from the grammar (e.g., "string")
        content: Matched text, or child items when a nested grammar applied
        alias: Secondary names for theming, in declaration order
        length: Number of source characters covered. Computed from
            content when not given.

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: str
    content: str | tuple[TokenItem, ...]
    alias: tuple[str, ...] = ()
    length: int = field(default=-1, compare=False)

    def __post_init__(self) -> None:
        if self.length < 0:
            object.__setattr__(self, "length", len(self.text))

    @property
    def text(self) -> str:
        """Source text covered by this token."""
        if isinstance(self.content, str):
            return self.content
        return text_of(self.content)

    @property
    def nested(self) -> bool:
        """True when content holds child items."""
        return not isinstance(self.content, str)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.nested:
            body = f"<{len(self.content)} items>"
        else:
            val = self.content
            if len(val) > 20:
                val = val[:17] + "..."
            body = repr(val)
        alias = f", alias={'|'.join(self.alias)}" if self.alias else ""
        return f"Token({self.type}, {body}{alias})"


def text_of(items: Iterable[TokenItem]) -> str:
    """Concatenate the leaf text of a token stream.

    Example:
        >>> text_of(["a ", Token("number", "1")])
        'a 1'
    """
    parts: list[str] = []
    for item in items:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item.content, str):
            parts.append(item.content)
        else:
            parts.append(text_of(item.content))
    return "".join(parts)


def iter_tokens(items: Sequence[TokenItem], depth: int = 0) -> Iterator[tuple[Token, int]]:
    """Walk typed tokens depth-first in source order.

    Yields:
        (token, depth) pairs; top-level tokens have depth 0.
    """
    for item in items:
        if isinstance(item, str):
            continue
        yield item, depth
        if not isinstance(item.content, str):
            yield from iter_tokens(item.content, depth + 1)


def token_types(items: Sequence[TokenItem]) -> set[str]:
    """Collect every token type that appears anywhere in the stream."""
    return {token.type for token, _ in iter_tokens(items)}
