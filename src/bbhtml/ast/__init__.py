#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/ast/__init__.py
"""Parse tree for BBCode posts.

The module consists of two components:

- nodes: Document, Tag and Text node classes
- visitors: visitor base class and the nesting validator

Examples
--------
    >>> from bbhtml.ast import Document, Tag, Text
    >>> doc = Document(children=[Tag("b", children=[Text("bold")])])

"""

from bbhtml.ast.nodes import Document, Node, Tag, Text, get_node_children, iter_tags
from bbhtml.ast.visitors import NestingValidator, NodeVisitor, validate_nesting

__all__ = [
    # Nodes
    "Node",
    "Document",
    "Tag",
    "Text",
    "get_node_children",
    "iter_tags",
    # Visitors
    "NodeVisitor",
    "NestingValidator",
    "validate_nesting",
]
