"""bbhtml - BBCode to sanitized HTML for forum posts.

bbhtml converts user-authored bracket-tag markup into safe HTML. All input is
HTML-escaped first; only tags known to the registry are interpreted, and
anything that cannot be matched stays visible as literal text and is reported
as a diagnostic instead of raising.

Key Features
------------
- Registry of tag definitions with per-tag open/close rendering callbacks
- Parent/child nesting restrictions reported as diagnostics
- Non-parsed tags (``[code]``, ``[noparse]``) and ``[*]`` list items
  without a close tag
- The forum's built-in tag set, including tables with header rows
- Optional passes for green-text, smilies, mentions and autolinking
- Plugin tags via the ``bbhtml.tags`` entry point group

Requirements
------------
- Python 3.10+

Examples
--------
Basic usage:

    >>> from bbhtml import render
    >>> result = render("[b]Hello[/b] [i]world")
    >>> result.html
    '<span class="bb-b">Hello</span> &#91;i&#93;world'
    >>> result.errors
    ['Some tags appear to be misaligned.']

Custom tags:

    >>> from bbhtml import TagDefinition, register_tags
    >>> register_tags([TagDefinition.simple("ooc", '<span class="bb-ooc">', "</span>")])
    >>> render("[ooc]brb[/ooc]").html
    '<span class="bb-ooc">brb</span>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbhtml requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from bbhtml.api import RenderResult, list_tags, parse, register_tags, render
from bbhtml.diagnostics import Diagnostic, DiagnosticCollector
from bbhtml.exceptions import (
    BBHtmlError,
    ConfigurationError,
    DuplicateTagError,
    InputTooLargeError,
    InvalidOptionsError,
    InvalidTagDefinitionError,
    RenderingError,
    ValidationError,
)
from bbhtml.options import BBCodeRenderOptions
from bbhtml.registry import RegistrySnapshot, TagRegistry, tag_registry
from bbhtml.renderers import RenderContext
from bbhtml.tags import TagDefinition
from bbhtml.utils.quotes import extract_top_level_markup

__all__ = [
    "__version__",
    # API
    "render",
    "parse",
    "register_tags",
    "list_tags",
    "RenderResult",
    "extract_top_level_markup",
    # Tags
    "TagDefinition",
    "TagRegistry",
    "RegistrySnapshot",
    "RenderContext",
    "tag_registry",
    # Options
    "BBCodeRenderOptions",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCollector",
    # Exceptions
    "BBHtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "InputTooLargeError",
    "ConfigurationError",
    "DuplicateTagError",
    "InvalidTagDefinitionError",
    "RenderingError",
]
