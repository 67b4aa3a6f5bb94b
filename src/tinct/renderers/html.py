"""HTML renderer for token streams.

Each typed token becomes ``<span class="token TYPE ALIAS...">``; leaves are
escaped text. Child sequences render as nested spans, so the markup mirrors
the token tree.

render_lines() additionally splits the output at newlines, closing every
open span at the end of a line and reopening it on the next, so each line
is balanced markup on its own. Line numbering and line emphasis build on it.

Thread Safety:
HtmlRenderer holds only immutable settings. Per-render state lives in a
LineBuilder created for each call, so instances can be shared across threads.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

from tinct.config import get_highlight_config
from tinct.errors import RenderError
from tinct.stringbuilder import LineBuilder
from tinct.tokens import Token, TokenItem


def html_escape(s: str) -> str:
    """Escape <, >, & and double quotes (single quotes are left alone)."""
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render token streams to HTML spans.

    Args:
        class_prefix: First CSS class on every span. Defaults to the
            active HighlightConfig's ``class_prefix``.

    Example:
        >>> HtmlRenderer().render(["x ", Token("number", "1")])
        'x <span class="token number">1</span>'
    """

    __slots__ = ("_class_prefix",)

    def __init__(self, class_prefix: str | None = None) -> None:
        self._class_prefix = class_prefix

    @property
    def class_prefix(self) -> str:
        if self._class_prefix is not None:
            return self._class_prefix
        return get_highlight_config().class_prefix

    def render(self, tokens: Sequence[TokenItem]) -> str:
        """Render a token stream to a single HTML string."""
        out = LineBuilder()
        self._render_items(tokens, out, self.class_prefix, None)
        return out.build(sep="")

    def render_lines(self, tokens: Sequence[TokenItem]) -> list[str]:
        """Render a token stream to one balanced HTML string per source line."""
        out = LineBuilder()
        self._render_items(tokens, out, self.class_prefix, [])
        return out.lines()

    def open_tag(self, token: Token, prefix: str | None = None) -> str:
        """Opening span for a token: prefix, type, then aliases."""
        classes = [prefix if prefix is not None else self.class_prefix, token.type, *token.alias]
        return f'<span class="{html_escape(" ".join(c for c in classes if c))}">'

    def _render_items(
        self,
        items: Sequence[TokenItem],
        out: LineBuilder,
        prefix: str,
        open_tags: list[str] | None,
    ) -> None:
        if isinstance(items, (str, Token)):
            raise RenderError(f"expected a token sequence, got {type(items).__name__}")
        for item in items:
            if isinstance(item, str):
                self._render_text(item, out, open_tags)
            elif isinstance(item, Token):
                tag = self.open_tag(item, prefix)
                out.append(tag)
                if open_tags is not None:
                    open_tags.append(tag)
                if isinstance(item.content, str):
                    self._render_text(item.content, out, open_tags)
                else:
                    self._render_items(item.content, out, prefix, open_tags)
                if open_tags is not None:
                    open_tags.pop()
                out.append("</span>")
            else:
                raise RenderError(f"unexpected item in token stream: {type(item).__name__}")

    def _render_text(self, text: str, out: LineBuilder, open_tags: list[str] | None) -> None:
        if open_tags is None:
            out.append(html_escape(text))
            return
        first, *rest = text.split("\n")
        out.append(html_escape(first))
        for line in rest:
            out.append("</span>" * len(open_tags))
            out.newline()
            for tag in open_tags:
                out.append(tag)
            out.append(html_escape(line))
