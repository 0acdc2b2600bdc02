#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/parsers/bbcode.py
"""BBCode to parse tree converter.

``BBCodeParser`` runs the first three stages of the pipeline: escaping and
tokenizing (``escape_markup``), closing list items (``expand_star_tags``) and
building the tree. Tree building is a single left-to-right scan over the
tokens with an explicit stack of open tags:

- an open token pushes a new Tag (self-closing tags attach immediately);
- a close token resolves against the innermost open tag of the same name.
  Open tags above it were never closed; they are turned back into literal
  text and their children move up to the enclosing tag;
- the body of a no-parse tag, up to its first close token, becomes a single
  Text child and is never interpreted;
- anything still open when the input ends becomes literal text.

Malformed markup never raises. Tokens that cannot be matched are kept as
visible, bracket-escaped text marked ``misaligned`` and reported as
diagnostics.
"""

from __future__ import annotations

import logging
import time
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Optional, Union

from bbhtml.ast.nodes import Document, Node, Tag, Text
from bbhtml.constants import NESTING_TOO_DEEP_MESSAGE
from bbhtml.diagnostics import Diagnostic, DiagnosticCollector
from bbhtml.exceptions import InvalidOptionsError
from bbhtml.options import BBCodeRenderOptions
from bbhtml.parsers.star_list import expand_star_tags
from bbhtml.parsers.tokenizer import BBCodeToken, escape_markup, iter_tokens, to_literal
from bbhtml.registry import RegistrySnapshot, TagRegistry, tag_registry

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """A parsed post and the diagnostics found while building it.

    Parameters
    ----------
    document : Document
        Root of the parse tree
    diagnostics : tuple of Diagnostic
        Misaligned and too-deeply nested tags, in the order they were found

    """

    document: Document
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)


@dataclass
class _OpenTag:
    """Stack entry for a tag whose close token has not been seen yet."""

    tag: Tag
    literal: str


class BBCodeParser:
    """Convert BBCode markup into a parse tree.

    Parameters
    ----------
    registry : TagRegistry, RegistrySnapshot or None, default = None
        Tags to recognize. Defaults to the global ``tag_registry``. The
        registry's snapshot is taken once, when the parser is created.
    options : BBCodeRenderOptions or None, default = None
        Only ``max_nesting_depth`` is used while parsing

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser()
        >>> result = parser.parse("[b]Bold[/b] and [i]italic[/i] text")
        >>> [type(node).__name__ for node in result.document.children]
        ['Tag', 'Text', 'Tag', 'Text']

    With a custom registry:

        >>> registry = TagRegistry([TagDefinition.simple("b", "<strong>", "</strong>")])
        >>> BBCodeParser(registry).parse("[i]not a tag[/i]").diagnostics
        ()

    """

    def __init__(
        self,
        registry: Union[TagRegistry, RegistrySnapshot, None] = None,
        options: Optional[BBCodeRenderOptions] = None,
    ):
        """Initialize the parser with a registry snapshot and options."""
        if options is not None and not isinstance(options, BBCodeRenderOptions):
            raise InvalidOptionsError(BBCodeRenderOptions, type(options))
        if registry is None:
            registry = tag_registry
        self.snapshot = registry.snapshot() if isinstance(registry, TagRegistry) else registry
        self.options = options or BBCodeRenderOptions()

    def parse(self, text: str, diagnostics: Optional[DiagnosticCollector] = None) -> ParseResult:
        """Parse raw markup into a Document.

        Parameters
        ----------
        text : str
            Raw user markup
        diagnostics : DiagnosticCollector, optional
            Collector to report into. A new one is created if omitted.

        Returns
        -------
        ParseResult
            The tree and the diagnostics collected while building it

        """
        collector = diagnostics if diagnostics is not None else DiagnosticCollector()
        start = time.perf_counter()

        delimited = expand_star_tags(escape_markup(text, self.snapshot))
        document = self.build_tree(delimited, collector)

        logger.debug(f"Parsed {len(text)} chars of BBCode in {(time.perf_counter() - start) * 1000:.2f}ms")
        return ParseResult(document=document, diagnostics=collector.items)

    def build_tree(self, delimited: str, diagnostics: DiagnosticCollector) -> Document:
        """Build a tree from escaped, star-expanded text.

        Parameters
        ----------
        delimited : str
            Text whose recognized tokens are written ``<...>``
        diagnostics : DiagnosticCollector
            Receives misalignment and nesting-depth diagnostics

        Returns
        -------
        Document
            Root of the tree

        """
        document = Document()
        tokens = list(iter_tokens(delimited))
        no_parse_closes = self._index_no_parse_closes(tokens)

        stack: list[_OpenTag] = []
        open_counts: Counter[str] = Counter()
        # Opens left as text for exceeding the depth limit; their closes are too
        suppressed_counts: Counter[str] = Counter()
        max_depth = self.options.max_nesting_depth

        def current_children() -> list[Node]:
            return stack[-1].tag.children if stack else document.children

        def add_text(content: str, misaligned: bool = False) -> None:
            if not content:
                return
            siblings = current_children()
            metadata = {"misaligned": True} if misaligned else {}
            if not misaligned and siblings and isinstance(siblings[-1], Text) and not siblings[-1].is_misaligned:
                siblings[-1].content += content
            else:
                siblings.append(Text(content=content, metadata=metadata))

        def demote_top() -> None:
            entry = stack.pop()
            open_counts[entry.tag.name] -= 1
            add_text(entry.literal, misaligned=True)
            current_children().extend(entry.tag.children)

        pos = 0
        for token in tokens:
            if token.start < pos:
                # Consumed as part of a no-parse body
                continue

            add_text(delimited[pos : token.start])
            pos = token.end
            definition = self.snapshot.resolve(token.name)

            if definition is None:
                add_text(token.literal, misaligned=True)
                diagnostics.misaligned()
                continue

            if token.is_closing:
                if suppressed_counts[token.name] > 0:
                    suppressed_counts[token.name] -= 1
                    add_text(token.literal, misaligned=True)
                    continue
                if open_counts[token.name] == 0:
                    logger.debug(f"Unmatched close token {token.raw!r} at offset {token.start}")
                    add_text(token.literal, misaligned=True)
                    diagnostics.misaligned()
                    continue
                while stack[-1].tag.name != token.name:
                    logger.debug(f"Tag {stack[-1].tag.name!r} closed out of order by {token.raw!r}")
                    demote_top()
                    diagnostics.misaligned()
                entry = stack.pop()
                open_counts[token.name] -= 1
                current_children().append(entry.tag)
                continue

            if len(stack) >= max_depth:
                add_text(token.literal, misaligned=True)
                diagnostics.add(NESTING_TOO_DEEP_MESSAGE, "nesting")
                if not definition.self_closing:
                    suppressed_counts[token.name] += 1
                continue

            tag = Tag(name=definition.name, params=token.params)

            if definition.self_closing:
                current_children().append(tag)
                continue

            if definition.no_parse:
                close = self._next_close(no_parse_closes, token)
                if close is None:
                    add_text(token.literal, misaligned=True)
                    diagnostics.misaligned()
                    continue
                body = to_literal(delimited[token.end : close.start])
                if body:
                    tag.children.append(Text(content=body))
                current_children().append(tag)
                pos = close.end
                continue

            stack.append(_OpenTag(tag=tag, literal=token.literal))
            open_counts[tag.name] += 1

        add_text(delimited[pos:])

        if stack:
            logger.debug(f"{len(stack)} tag(s) left open at end of input")
            diagnostics.misaligned()
        while stack:
            demote_top()

        return document

    def _index_no_parse_closes(self, tokens: list[BBCodeToken]) -> dict[str, deque[BBCodeToken]]:
        closes: dict[str, deque[BBCodeToken]] = {}
        for token in tokens:
            if token.is_closing and token.name in self.snapshot.no_parse:
                closes.setdefault(token.name, deque()).append(token)
        return closes

    def _next_close(
        self, closes: dict[str, deque[BBCodeToken]], opening: BBCodeToken
    ) -> Optional[BBCodeToken]:
        """Return the first close token of ``opening``'s tag after it, consuming it."""
        if opening.name not in self.snapshot.no_parse:
            return None
        pending = closes.get(opening.name)
        while pending and pending[0].start < opening.end:
            pending.popleft()
        if not pending:
            return None
        return pending.popleft()
