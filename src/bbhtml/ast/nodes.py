#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/ast/nodes.py
"""Parse tree node classes.

A parsed post is a tree of three node types:

    - Document: the implicit root, named ``bbcode`` for nesting checks
    - Tag: a matched ``[name=params]...[/name]`` pair and its children
    - Text: already-escaped text, emitted verbatim by the renderer

Trees are built and discarded per render call; nothing is shared between
renders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from bbhtml.constants import ROOT_TAG_NAME


class Node(ABC):
    """Base class for all parse tree nodes.

    All nodes support the visitor pattern through ``accept``.
    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Document(Node):
    """Root node containing the top-level children of a post.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes
    metadata : dict, default = empty dict
        Document-level metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    name = ROOT_TAG_NAME

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


@dataclass
class Tag(Node):
    """A matched tag with its parameters and children.

    Parameters
    ----------
    name : str
        Lower-cased tag name as registered
    params : str or None, default = None
        Text following ``=`` (or a space) in the open token, verbatim
    children : list of Node, default = empty list
        Child nodes in document order
    metadata : dict, default = empty dict
        Tag metadata

    """

    name: str
    params: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_tag(self)


@dataclass
class Text(Node):
    """Escaped text.

    Parameters
    ----------
    content : str
        HTML-safe text content
    metadata : dict, default = empty dict
        ``{"misaligned": True}`` marks a tag token that could not be matched

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)

    @property
    def is_misaligned(self) -> bool:
        return bool(self.metadata.get("misaligned"))


def get_node_children(node: Node) -> list[Node]:
    """Return the children of a node, or an empty list for leaf nodes."""
    if isinstance(node, (Document, Tag)):
        return node.children
    return []


def iter_tags(node: Node) -> Iterator[Tag]:
    """Yield every Tag below ``node`` in document order."""
    stack = list(reversed(get_node_children(node)))
    while stack:
        current = stack.pop()
        if isinstance(current, Tag):
            yield current
            stack.extend(reversed(current.children))
