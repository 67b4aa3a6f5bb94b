"""Token serialization: JSON round-trip for token streams.

Converts token streams to/from JSON-compatible data. Useful for:
- Caching highlighted output keyed by source hash
- Shipping token trees to a client-side renderer
- Debugging and inspection

Leaves serialize as plain strings; tokens as
``{"type": ..., "content": ..., "alias": [...]}`` where content is a string
or a list of serialized children. All output is deterministic (sorted keys).

Example:
    from tinct import tokenize, get_grammar
    from tinct.serialization import to_json, from_json

    tokens = tokenize("src.id -> tgt.id", get_grammar("fml"))
    assert from_json(to_json(tokens)) == tokens

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from typing import Any

from tinct.tokens import Token, TokenItem


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a Token to a JSON-compatible dict.

    Args:
        token: Any Token.

    Returns:
        Dict with ``type``, ``content`` and ``alias``.

    """
    content: Any = token.content if isinstance(token.content, str) else to_list(token.content)
    return {"type": token.type, "content": content, "alias": list(token.alias)}


def to_list(items: Sequence[TokenItem]) -> list[Any]:
    """Convert a token stream to a JSON-compatible list."""
    return [item if isinstance(item, str) else to_dict(item) for item in items]


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a Token from a dict.

    Args:
        data: Dict with ``type``, ``content`` and optional ``alias``
            (as produced by to_dict).

    Returns:
        Token (frozen dataclass).

    Raises:
        ValueError: If a field is missing or has the wrong shape.

    """
    if not isinstance(data, dict):
        msg = f"Expected dict for token, got {type(data).__name__}"
        raise ValueError(msg)

    token_type = data.get("type")
    if not isinstance(token_type, str) or not token_type:
        msg = "Missing or invalid 'type' field in serialized token"
        raise ValueError(msg)

    raw_content = data.get("content")
    if isinstance(raw_content, str):
        content: str | tuple[TokenItem, ...] = raw_content
    elif isinstance(raw_content, list):
        content = tuple(from_list(raw_content))
    else:
        msg = f"Invalid 'content' for token {token_type!r}: {type(raw_content).__name__}"
        raise ValueError(msg)

    alias = data.get("alias", [])
    if not isinstance(alias, list) or not all(isinstance(a, str) for a in alias):
        msg = f"Invalid 'alias' for token {token_type!r}"
        raise ValueError(msg)

    return Token(token_type, content, tuple(alias))


def from_list(data: list[Any]) -> list[TokenItem]:
    """Reconstruct a token stream from a list."""
    if not isinstance(data, list):
        msg = f"Expected list for token stream, got {type(data).__name__}"
        raise ValueError(msg)
    return [item if isinstance(item, str) else from_dict(item) for item in data]


def to_json(items: Sequence[TokenItem], *, indent: int | None = None) -> str:
    """Serialize a token stream to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        items: Token stream as returned by tokenize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_list(items), sort_keys=True, indent=indent)


def from_json(data: str) -> list[TokenItem]:
    """Deserialize a token stream from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a token stream.

    """
    return from_list(json.loads(data))
