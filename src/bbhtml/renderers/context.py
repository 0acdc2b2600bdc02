#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/renderers/context.py
"""Per-render state passed to tag callbacks.

Tag callbacks receive a ``RenderContext`` as their third argument. It carries
the render options and the diagnostics collector, and it exposes the chain
of enclosing tags, so that tags such as ``row`` and ``cell`` can tell
whether they belong to the first row of their own table. A context lives for
exactly one render call; nothing is shared between renders.
"""

from __future__ import annotations

from typing import Optional, Union

from bbhtml.ast.nodes import Document, Tag
from bbhtml.constants import DiagnosticCategory
from bbhtml.diagnostics import DiagnosticCollector
from bbhtml.options import BBCodeRenderOptions


class RenderContext:
    """Render-time state for one document.

    Parameters
    ----------
    document : Document
        The document being rendered
    options : BBCodeRenderOptions
        Options of the current render call
    diagnostics : DiagnosticCollector
        Collector for problems found while rendering

    """

    def __init__(self, document: Document, options: BBCodeRenderOptions, diagnostics: DiagnosticCollector):
        self.document = document
        self.options = options
        self.diagnostics = diagnostics
        self._stack: list[Tag] = []

    def push(self, tag: Tag) -> None:
        self._stack.append(tag)

    def pop(self) -> Tag:
        return self._stack.pop()

    @property
    def current(self) -> Optional[Tag]:
        """The tag whose callback is running."""
        return self._stack[-1] if self._stack else None

    @property
    def parent(self) -> Union[Tag, Document, None]:
        """The node directly containing the current tag."""
        return self.container()

    def is_first_of_kind(self, level: int = 0) -> bool:
        """Check whether a tag is the first child of its name within its parent.

        Parameters
        ----------
        level : int, default = 0
            Which tag to check: 0 for the current tag, 1 for its parent tag,
            and so on

        Returns
        -------
        bool
            True if no earlier sibling tag has the same name

        Examples
        --------
        Inside a ``cell`` callback, ``context.is_first_of_kind(1)`` tells
        whether the enclosing ``row`` is the first row of its table.

        """
        index = len(self._stack) - 1 - level
        if index < 0:
            return False
        tag = self._stack[index]
        container = self.container(level)
        if container is None:
            return False
        for sibling in container.children:
            if isinstance(sibling, Tag) and sibling.name == tag.name:
                return sibling is tag
        return False

    def add_diagnostic(self, message: str, category: DiagnosticCategory = "tag") -> None:
        self.diagnostics.add(message, category)

    def container(self, level: int = 0) -> Union[Tag, Document, None]:
        """Return the node directly containing the tag ``level`` steps above the current one."""
        index = len(self._stack) - 1 - level
        if index < 0:
            return None
        return self._stack[index - 1] if index > 0 else self.document
