#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for bbhtml rendering."""

from __future__ import annotations

from bbhtml.options.base import CloneFrozenMixin
from bbhtml.options.render import BBCodeRenderOptions

__all__ = [
    "CloneFrozenMixin",
    "BBCodeRenderOptions",
]
