"""TokenRenderer protocol: stable interface for token stream renderers.

Any renderer that implements ``render(tokens) -> str`` conforms to this protocol.
The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from tinct.renderers.protocol import TokenRenderer

    def render_snippet(renderer: TokenRenderer, tokens: list[TokenItem]) -> str:
        return renderer.render(tokens)

"""

from collections.abc import Sequence
from typing import Protocol

from tinct.tokens import TokenItem


class TokenRenderer(Protocol):
    """Protocol for token stream renderers.

    Implementations must accept the output of ``tokenize`` and return a
    rendered string. The built-in ``HtmlRenderer`` conforms to this protocol.

    """

    def render(self, tokens: Sequence[TokenItem]) -> str:
        """Render a token stream to a string.

        Args:
            tokens: Items as returned by ``tokenize``.

        Returns:
            Rendered string output.

        """
        ...
