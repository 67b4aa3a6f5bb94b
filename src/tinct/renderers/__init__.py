"""Tinct renderers.

Renderers convert token streams into output formats.

Available Renderers:
- HtmlRenderer: Renders tokens to nested, class-annotated HTML spans

Thread Safety:
All renderers use a LineBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from tinct.renderers.html import HtmlRenderer
from tinct.renderers.protocol import TokenRenderer

__all__ = ["HtmlRenderer", "TokenRenderer"]
