"""Pattern matcher: applies one rule across the working span list.

The span list covers the source in order. Each node is either an unmatched
``str`` or a Pending match. Unmatched nodes are never adjacent: every split
leaves tokens between them, and a greedy match absorbs the unmatched text
that follows it.

Matching policy:
- A match never starts inside an existing token.
- Non-greedy rules search each unmatched node on its own; anchors and word
  boundaries see the node's edges.
- Greedy rules search the whole source from the current node's offset. A
  match that runs past the node absorbs everything up to its end, plus the
  unmatched text right after it. Absorbed tokens are discarded; any part of
  them beyond the match end becomes unmatched text again.
- Empty matches count as no match.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from tinct.grammar import Rule


class Pending:
    """A match recorded during scanning, turned into a Token afterwards.

    Nested grammars are applied only once scanning has settled, so a match
    that a greedy rule later absorbs never pays for its ``inside`` pass.
    """

    __slots__ = ("type", "rule", "text")

    def __init__(self, type: str, rule: Rule, text: str) -> None:
        self.type = type
        self.rule = rule
        self.text = text

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f"Pending({self.type}, {self.text!r})"


Node = Union[str, Pending]


def apply_rule(text: str, nodes: list[Node], name: str, rule: Rule) -> int:
    """Apply one rule to every unmatched node.

    The list is rebuilt in a single sweep and written back in place.

    Args:
        text: The full source the nodes cover
        nodes: Working span list (mutated)
        name: Token type to record for matches
        rule: Rule to apply

    Returns:
        Number of matches recorded.
    """
    out: list[Node] = []
    produced = 0
    count = len(nodes)
    i = 0
    pos = 0

    while i < count:
        node = nodes[i]
        if not isinstance(node, str):
            out.append(node)
            pos += len(node)
            i += 1
            continue

        if not rule.greedy:
            rest = node
            while rest:
                found = rule.search(rest)
                if found is None:
                    out.append(rest)
                    break
                start, end = found
                if start:
                    out.append(rest[:start])
                out.append(Pending(name, rule, rest[start:end]))
                produced += 1
                rest = rest[end:]
            pos += len(node)
            i += 1
            continue

        found = rule.search(text, pos)
        if found is None:
            out.extend(nodes[i:])
            break
        start, end = found

        # Copy nodes that end before the match
        while pos + len(nodes[i]) <= start:
            out.append(nodes[i])
            pos += len(nodes[i])
            i += 1
        if not isinstance(nodes[i], str):
            # Starts inside a token; resume after it
            out.append(nodes[i])
            pos += len(nodes[i])
            i += 1
            continue

        # Absorb every node the match reaches, plus trailing unmatched text
        k, q = i, pos
        while k < count and (q < end or isinstance(nodes[k], str)):
            q += len(nodes[k])
            k += 1

        if start > pos:
            out.append(text[pos:start])
        out.append(Pending(name, rule, text[start:end]))
        produced += 1
        if end < q:
            # Leftover text is rescanned as one unmatched node
            i = k - 1
            nodes[i] = text[end:q]
        else:
            i = k
        pos = end

    nodes[:] = out
    return produced
