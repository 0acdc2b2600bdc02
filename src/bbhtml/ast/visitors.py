#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/ast/visitors.py
"""Visitor pattern implementation for parse tree traversal.

Visitors keep the algorithms that walk a parsed post (nesting validation,
HTML rendering) separate from the node classes themselves. Each node's
``accept`` dispatches to the matching ``visit_*`` method.

Tree depth is bounded by ``BBCodeRenderOptions.max_nesting_depth`` when the
tree is built, so the recursive walks below stay within the interpreter's
recursion limit.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Union

from bbhtml.ast.nodes import Document, Node, Tag, Text
from bbhtml.diagnostics import DiagnosticCollector

if TYPE_CHECKING:
    from bbhtml.registry import RegistrySnapshot

logger = logging.getLogger(__name__)


class NodeVisitor(ABC):
    """Abstract base class for parse tree visitors.

    Subclasses implement one ``visit_*`` method per node type.

    Examples
    --------
    Count the tags in a post:

        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_tag(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_text(self, node):
        ...         pass
        >>> counter = TagCounter()
        >>> document.accept(counter)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the Document root.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_tag(self, node: Tag) -> Any:
        """Visit a Tag node.

        Parameters
        ----------
        node : Tag
            The tag node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


class NestingValidator(NodeVisitor):
    """Visitor that checks parent/child tag restrictions.

    For every tag, the parent's ``allowed_children`` and the child's
    ``allowed_parents`` are consulted. The document root takes part in the
    checks under the name ``bbcode``. Violations are reported to the
    diagnostics collector; the tree is never modified.

    Parameters
    ----------
    snapshot : RegistrySnapshot
        Tag definitions the tree was built from
    diagnostics : DiagnosticCollector, optional
        Collector receiving the violations. A new one is created if omitted.

    Examples
    --------
        >>> validator = NestingValidator(tag_registry.snapshot())
        >>> document.accept(validator)
        >>> validator.diagnostics.messages
        []

    """

    def __init__(self, snapshot: RegistrySnapshot, diagnostics: DiagnosticCollector | None = None):
        self.snapshot = snapshot
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def visit_document(self, node: Document) -> None:
        self._check_children(node)

    def visit_tag(self, node: Tag) -> None:
        self._check_children(node)

    def visit_text(self, node: Text) -> None:
        pass

    def _check_children(self, parent: Union[Document, Tag]) -> None:
        allowed_children = self.snapshot.valid_child_lookup.get(parent.name, frozenset())
        for child in parent.children:
            if not isinstance(child, Tag):
                continue
            if allowed_children and child.name not in allowed_children:
                self._report(f'The tag "{child.name}" is not allowed as a child of the tag "{parent.name}".')
            allowed_parents = self.snapshot.valid_parent_lookup.get(child.name, frozenset())
            if allowed_parents and parent.name not in allowed_parents:
                self._report(f'The tag "{parent.name}" is not allowed as a parent of the tag "{child.name}".')
            child.accept(self)

    def _report(self, message: str) -> None:
        logger.debug(message)
        self.diagnostics.add(message, "nesting")


def validate_nesting(node: Node, snapshot: RegistrySnapshot) -> DiagnosticCollector:
    """Validate a tree and return the collected nesting diagnostics.

    Parameters
    ----------
    node : Node
        Root of the tree to validate, usually a Document
    snapshot : RegistrySnapshot
        Tag definitions to validate against

    Returns
    -------
    DiagnosticCollector
        The nesting violations found, in document order

    """
    validator = NestingValidator(snapshot)
    node.accept(validator)
    return validator.diagnostics
