#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/renderers/__init__.py
"""HTML rendering of parsed BBCode."""

from bbhtml.renderers.context import RenderContext
from bbhtml.renderers.html import HtmlRenderer

__all__ = [
    "HtmlRenderer",
    "RenderContext",
]
