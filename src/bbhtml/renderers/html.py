#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/renderers/html.py
"""HTML rendering from the parse tree.

``HtmlRenderer`` walks the tree depth-first. A tag's children are rendered
before its own callbacks run, so ``render_open`` and ``render_close`` both see
the finished HTML of the tag's content. Text nodes are already escaped and
are emitted as they are.

After the walk, any literal square bracket left in the output means a tag
callback emitted raw markup it could not pair up; it is reported as
misaligned and, with ``strip_misaligned_tags``, removed.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from bbhtml.ast.nodes import Document, Tag, Text
from bbhtml.ast.visitors import NodeVisitor
from bbhtml.diagnostics import DiagnosticCollector
from bbhtml.exceptions import InvalidOptionsError, RenderingError
from bbhtml.options import BBCodeRenderOptions
from bbhtml.registry import RegistrySnapshot, TagRegistry, tag_registry
from bbhtml.renderers.context import RenderContext
from bbhtml.tags.definition import TagCallback

logger = logging.getLogger(__name__)

LEFTOVER_BRACKETS_PATTERN = re.compile(r"\[[^\]]*\]")


class HtmlRenderer(NodeVisitor):
    """Render a parse tree to an HTML fragment.

    Parameters
    ----------
    registry : TagRegistry, RegistrySnapshot or None, default = None
        Tag definitions used for rendering; must match the ones the tree was
        parsed with. Defaults to the global ``tag_registry``.
    options : BBCodeRenderOptions or None, default = None
        Rendering options

    Examples
    --------
        >>> from bbhtml.parsers import BBCodeParser
        >>> document = BBCodeParser().parse("[b]bold[/b]").document
        >>> HtmlRenderer().render_to_string(document)
        '<span class="bb-b">bold</span>'

    """

    def __init__(
        self,
        registry: Union[TagRegistry, RegistrySnapshot, None] = None,
        options: Optional[BBCodeRenderOptions] = None,
    ):
        """Initialize the HTML renderer with a registry snapshot and options."""
        if options is not None and not isinstance(options, BBCodeRenderOptions):
            raise InvalidOptionsError(BBCodeRenderOptions, type(options))
        if registry is None:
            registry = tag_registry
        self.snapshot = registry.snapshot() if isinstance(registry, TagRegistry) else registry
        self.options = options or BBCodeRenderOptions()
        self._context: Optional[RenderContext] = None

    def render_to_string(self, document: Document, diagnostics: Optional[DiagnosticCollector] = None) -> str:
        """Render a document to HTML.

        Parameters
        ----------
        document : Document
            Tree to render
        diagnostics : DiagnosticCollector, optional
            Collector receiving problems reported by tag callbacks and the
            leftover-bracket check. A new one is created if omitted.

        Returns
        -------
        str
            HTML fragment

        Raises
        ------
        RenderingError
            If a tag callback raises or returns something other than a string

        """
        collector = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._context = RenderContext(document, self.options, collector)
        try:
            html = document.accept(self)
        finally:
            self._context = None

        if "[" in html or "]" in html:
            collector.misaligned()
            if self.options.strip_misaligned_tags:
                html = LEFTOVER_BRACKETS_PATTERN.sub("", html)

        return html

    def visit_document(self, node: Document) -> str:
        parts = []
        for child in node.children:
            parts.append(child.accept(self))
        return "".join(parts)

    def visit_text(self, node: Text) -> str:
        if node.is_misaligned and self.options.strip_misaligned_tags:
            return ""
        return node.content

    def visit_tag(self, node: Tag) -> str:
        """Render a tag: children first, then its open and close callbacks.

        Parameters
        ----------
        node : Tag
            Tag to render

        Returns
        -------
        str
            The tag's HTML

        """
        context = self._require_context()
        definition = self.snapshot.resolve(node.name)

        parts = []
        context.push(node)
        try:
            for child in node.children:
                parts.append(child.accept(self))
            content = "".join(parts)

            if definition is None:
                # Tree built with a different registry
                logger.debug(f"No definition for tag {node.name!r}; rendering its content only")
                context.add_diagnostic(f'The tag "{node.name}" is not registered.')
                return content

            if definition.trim_contents:
                content = content.strip()
            open_html = self._call(definition.render_open, node, content, context)
            close_html = self._call(definition.render_close, node, content, context)
        finally:
            context.pop()

        if not definition.display_content:
            content = ""
        return open_html + content + close_html

    def _call(self, callback: TagCallback, node: Tag, content: str, context: RenderContext) -> str:
        try:
            result = callback(node.params, content, context)
        except RenderingError:
            raise
        except Exception as e:
            raise RenderingError(f"Tag '{node.name}' failed to render: {e}", tag_name=node.name, original_error=e) from e

        if not isinstance(result, str):
            raise RenderingError(
                f"Tag '{node.name}' callback returned {type(result).__name__}, expected str", tag_name=node.name
            )
        return result

    def _require_context(self) -> RenderContext:
        if self._context is None:
            raise RenderingError("HtmlRenderer.visit_* called outside render_to_string")
        return self._context
