#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/tags/__init__.py
"""Tag definitions and the built-in forum tag set."""

from bbhtml.tags.builtin import BUILTIN_TAGS
from bbhtml.tags.definition import TagCallback, TagDefinition, normalize_tag_name

__all__ = [
    "BUILTIN_TAGS",
    "TagCallback",
    "TagDefinition",
    "normalize_tag_name",
]
