"""Grammar model for the Tinct lexer engine.

A Grammar is an ordered tuple of entries. Each entry pairs a token type name
with one or more Rules; entries are tried top-to-bottom and a multi-rule
entry tries its alternatives in listed order. Declaration order is the only
conflict-resolution mechanism: the earlier entry wins.

Grammars are usually written with the authoring surface, a plain mapping
compiled by compile_grammar():

    >>> from tinct.grammar import compile_grammar
    >>> grammar = compile_grammar({
    ...     "comment": {"pattern": r"#.*", "greedy": True},
    ...     "number": r"\\b\\d+\\b",
    ...     "keyword": [r"\\bif\\b", {"pattern": r"\\belse\\b", "alias": "control"}],
    ... })
    >>> grammar.names
    ('comment', 'number', 'keyword')

Every malformed definition is reported as GrammarError while the grammar is
built, so tokenizing never fails partway through.

Thread Safety:
Rule and Grammar are frozen. Safe to share across threads.

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from tinct.errors import GrammarError

# Options recognised in a rule dict
_RULE_OPTIONS = frozenset({"pattern", "greedy", "alias", "inside", "lookbehind", "flags"})

# What compile_grammar() accepts for a single entry value
RuleSpec = Union["Rule", str, re.Pattern[str], Mapping[str, Any]]
GrammarDefinition = Union["Grammar", Mapping[str, Any], Sequence[tuple[str, Any]]]


def _normalize_alias(alias: Any, path: str | None = None) -> tuple[str, ...]:
    """Turn an alias option into a tuple of names.

    A string may hold several space-separated aliases ("class-name inherited").
    """
    if alias is None:
        return ()
    if isinstance(alias, str):
        return tuple(alias.split())
    if isinstance(alias, (list, tuple)):
        names: list[str] = []
        for name in alias:
            if not isinstance(name, str):
                raise GrammarError(f"alias must be a string, got {type(name).__name__}", path)
            names.extend(name.split())
        return tuple(names)
    raise GrammarError(f"alias must be a string or list of strings, got {type(alias).__name__}", path)


@dataclass(frozen=True, slots=True)
class Rule:
    """One pattern plus its matching options.

    Attributes:
        pattern: Compiled pattern (a string is compiled with no flags)
        greedy: Search the whole source from the current unmatched region
            and absorb tokens produced earlier if the match runs over them
        alias: Secondary names attached to emitted tokens
        inside: Nested grammar applied to the matched text only
        lookbehind: Treat the first capture group as leading context. It is
            consumed by the scan but left as plain text before the token.
    """

    pattern: re.Pattern[str]
    greedy: bool = False
    alias: tuple[str, ...] = ()
    inside: Grammar | None = None
    lookbehind: bool = False

    def __post_init__(self) -> None:
        pattern: Any = self.pattern
        if isinstance(pattern, str):
            if not pattern:
                raise GrammarError("pattern must not be empty")
            try:
                pattern = re.compile(pattern)
            except re.error as e:
                raise GrammarError(f"invalid pattern {self.pattern!r}: {e}") from e
            object.__setattr__(self, "pattern", pattern)
        elif not isinstance(pattern, re.Pattern):
            raise GrammarError(f"pattern must be a str or compiled regex, got {type(pattern).__name__}")
        if not isinstance(pattern.pattern, str):
            raise GrammarError("bytes patterns are not supported")
        if not pattern.pattern:
            raise GrammarError("pattern must not be empty")
        if self.lookbehind and pattern.groups < 1:
            raise GrammarError(f"lookbehind rule needs a capture group: {pattern.pattern!r}")
        if self.inside is not None and not isinstance(self.inside, Grammar):
            raise GrammarError(f"inside must be a Grammar, got {type(self.inside).__name__}")
        if not isinstance(self.alias, tuple):
            object.__setattr__(self, "alias", _normalize_alias(self.alias))

    def search(self, subject: str, pos: int = 0) -> tuple[int, int] | None:
        """Find the first usable match at or after ``pos``.

        Returns:
            (start, end) offsets into ``subject``, or None. A match that is
            empty, or becomes empty once the lookbehind group is dropped,
            counts as no match so the scan always makes progress.
        """
        match = self.pattern.search(subject, pos)
        if match is None:
            return None
        start, end = match.span()
        if self.lookbehind:
            context = match.group(1)
            if context:
                start += len(context)
        if start >= end:
            return None
        return start, end


Entry = tuple[str, tuple[Rule, ...]]


@dataclass(frozen=True, slots=True)
class Grammar:
    """Ordered, immutable set of (type name, rules) entries.

    Construct directly from pairs, or with compile_grammar() from the
    authoring surface. A single Rule may stand in for a one-rule tuple.

    Example:
        >>> grammar = Grammar([("number", Rule(r"\\d+"))])
        >>> grammar.get("number")[0].greedy
        False
    """

    entries: tuple[Entry, ...] = field(default=())

    def __post_init__(self) -> None:
        entries: list[Entry] = []
        seen: set[str] = set()
        for item in self.entries:
            try:
                name, rules = item
            except (TypeError, ValueError):
                raise GrammarError(f"entry must be a (name, rules) pair, got {item!r}") from None
            if not isinstance(name, str) or not name:
                raise GrammarError(f"type name must be a non-empty string, got {name!r}")
            if name in seen:
                raise GrammarError("duplicate type name", name)
            seen.add(name)
            if isinstance(rules, Rule):
                rules = (rules,)
            rules = tuple(rules)
            if not rules:
                raise GrammarError("entry has no rules", name)
            for rule in rules:
                if not isinstance(rule, Rule):
                    raise GrammarError(f"expected Rule, got {type(rule).__name__}", name)
            entries.append((name, rules))
        object.__setattr__(self, "entries", tuple(entries))

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return any(entry_name == name for entry_name, _ in self.entries)

    @property
    def names(self) -> tuple[str, ...]:
        """Type names in declaration order."""
        return tuple(name for name, _ in self.entries)

    @property
    def depth(self) -> int:
        """Nesting depth: 1 for a flat grammar, +1 per level of ``inside``."""
        nested = [
            rule.inside.depth for _, rules in self.entries for rule in rules if rule.inside is not None
        ]
        return 1 + max(nested, default=0)

    def get(self, name: str) -> tuple[Rule, ...] | None:
        """Get the rules for a type name, or None if absent."""
        for entry_name, rules in self.entries:
            if entry_name == name:
                return rules
        return None

    def extend(self, definition: GrammarDefinition, *, flags: int = 0) -> Grammar:
        """Return a copy with entries replaced or appended.

        Entries whose name already exists keep their position; new names go
        to the end, in the order given.
        """
        overrides = compile_grammar(definition, flags=flags)
        replaced = dict(overrides.entries)
        entries = [(name, replaced.pop(name, rules)) for name, rules in self.entries]
        entries.extend((name, rules) for name, rules in overrides.entries if name in replaced)
        return Grammar(tuple(entries))

    def insert_before(self, anchor: str, definition: GrammarDefinition, *, flags: int = 0) -> Grammar:
        """Return a copy with new entries inserted before ``anchor``.

        An inserted name that already exists elsewhere moves to the new
        position.

        Raises:
            GrammarError: If ``anchor`` is not in this grammar.
        """
        if anchor not in self:
            raise GrammarError("anchor entry not found", anchor)
        inserted = compile_grammar(definition, flags=flags)
        new_names = set(inserted.names)
        entries: list[Entry] = []
        for name, rules in self.entries:
            if name == anchor:
                entries.extend(inserted.entries)
            if name not in new_names:
                entries.append((name, rules))
        return Grammar(tuple(entries))


def compile_grammar(definition: GrammarDefinition, *, flags: int = 0) -> Grammar:
    """Build a Grammar from the authoring surface.

    Args:
        definition: A Grammar (returned unchanged), a mapping, or a sequence
            of (name, value) pairs. Each value is a Rule, a pattern string, a
            compiled pattern, a rule dict, or a list of those. Rule dicts
            accept ``pattern``, ``greedy``, ``alias``, ``inside``,
            ``lookbehind`` and ``flags``.
        flags: Default ``re`` flags for string patterns.

    Returns:
        Immutable Grammar preserving declaration order.

    Raises:
        GrammarError: If any entry is malformed, including an ``inside``
            definition that refers back to an enclosing one.
    """
    return _compile(definition, flags, None, ())


def _compile(
    definition: GrammarDefinition,
    flags: int,
    path: str | None,
    active: tuple[int, ...],
) -> Grammar:
    if isinstance(definition, Grammar):
        return definition
    if id(definition) in active:
        raise GrammarError("inside refers back to an enclosing grammar", path)
    active = (*active, id(definition))

    if isinstance(definition, Mapping):
        items = list(definition.items())
    elif isinstance(definition, Sequence) and not isinstance(definition, str):
        items = list(definition)
    else:
        raise GrammarError(f"grammar must be a mapping or list of pairs, got {type(definition).__name__}", path)

    entries: list[Entry] = []
    for item in items:
        try:
            name, value = item
        except (TypeError, ValueError):
            raise GrammarError(f"entry must be a (name, rules) pair, got {item!r}", path) from None
        entry_path = f"{path}.{name}" if path else str(name)
        if isinstance(value, (list, tuple)) and not isinstance(value, str):
            if not value:
                raise GrammarError("entry has no rules", entry_path)
            rules = tuple(
                _compile_rule(spec, flags, f"{entry_path}[{i}]", active) for i, spec in enumerate(value)
            )
        else:
            rules = (_compile_rule(value, flags, entry_path, active),)
        entries.append((name, rules))

    try:
        return Grammar(tuple(entries))
    except GrammarError as e:
        if path and e.path:
            raise GrammarError(e.message, f"{path}.{e.path}") from None
        raise


def _compile_rule(spec: RuleSpec, flags: int, path: str, active: tuple[int, ...]) -> Rule:
    if isinstance(spec, Rule):
        return spec
    if isinstance(spec, (str, re.Pattern)):
        return _build_rule(path, spec, flags)
    if not isinstance(spec, Mapping):
        raise GrammarError(f"rule must be a pattern or dict, got {type(spec).__name__}", path)

    unknown = set(spec) - _RULE_OPTIONS
    if unknown:
        raise GrammarError(f"unknown rule option(s): {', '.join(sorted(unknown))}", path)
    if "pattern" not in spec or spec["pattern"] is None:
        raise GrammarError("rule has no pattern", path)

    inside = spec.get("inside")
    if inside is not None:
        inside = _compile(inside, flags, f"{path}.inside", active)

    return _build_rule(
        path,
        spec["pattern"],
        spec.get("flags", flags),
        greedy=bool(spec.get("greedy", False)),
        alias=_normalize_alias(spec.get("alias"), path),
        inside=inside,
        lookbehind=bool(spec.get("lookbehind", False)),
    )


def _build_rule(path: str, pattern: Any, flags: int, **options: Any) -> Rule:
    if isinstance(pattern, str):
        if not pattern:
            raise GrammarError("pattern must not be empty", path)
        try:
            pattern = re.compile(pattern, flags)
        except re.error as e:
            raise GrammarError(f"invalid pattern: {e}", path) from e
    try:
        return Rule(pattern, **options)
    except GrammarError as e:
        raise GrammarError(e.message, path) from None
