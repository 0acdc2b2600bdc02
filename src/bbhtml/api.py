#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/api.py
"""Public entry points of bbhtml.

``render`` runs the whole pipeline: escape and tokenize, close list items,
build the tree, validate nesting, render the HTML, then apply the
post-processing passes. Problems in the markup are reported in the returned
``RenderResult`` and never raise.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from bbhtml.ast.visitors import NestingValidator
from bbhtml.diagnostics import Diagnostic, DiagnosticCollector
from bbhtml.exceptions import InputTooLargeError, InvalidOptionsError
from bbhtml.options import BBCodeRenderOptions
from bbhtml.parsers.bbcode import BBCodeParser, ParseResult
from bbhtml.postprocessors import apply_postprocessors
from bbhtml.registry import RegistrySnapshot, TagDefinitions, TagRegistry, tag_registry
from bbhtml.renderers.html import HtmlRenderer
from bbhtml.tags.definition import TagDefinition

logger = logging.getLogger(__name__)

RegistryLike = Union[TagRegistry, RegistrySnapshot]


@dataclass(frozen=True)
class RenderResult:
    """Rendered HTML and the diagnostics found on the way.

    Parameters
    ----------
    html : str
        The rendered HTML fragment
    diagnostics : tuple of Diagnostic
        Problems found in the markup, in the order they were found, without
        duplicates

    """

    html: str
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> list[str]:
        """Messages of all diagnostics."""
        return [diagnostic.message for diagnostic in self.diagnostics]

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary of the result."""
        return {
            "html": self.html,
            "error": self.has_errors,
            "errors": self.errors,
            "diagnostics": [{"message": d.message, "category": d.category} for d in self.diagnostics],
        }


def _resolve_snapshot(registry: Optional[RegistryLike]) -> RegistrySnapshot:
    if registry is None:
        return tag_registry.snapshot()
    if isinstance(registry, TagRegistry):
        return registry.snapshot()
    return registry


def _resolve_options(options: Optional[BBCodeRenderOptions], kwargs: dict[str, Any]) -> BBCodeRenderOptions:
    if options is not None and not isinstance(options, BBCodeRenderOptions):
        raise InvalidOptionsError(BBCodeRenderOptions, type(options))
    options = options or BBCodeRenderOptions()
    if kwargs:
        options = options.create_updated(**kwargs)
    return options


def render(
    text: str,
    options: Optional[BBCodeRenderOptions] = None,
    *,
    registry: Optional[RegistryLike] = None,
    **kwargs: Any,
) -> RenderResult:
    """Render BBCode markup to HTML.

    Parameters
    ----------
    text : str
        Raw user markup
    options : BBCodeRenderOptions, optional
        Rendering options. Defaults to ``BBCodeRenderOptions()``.
    registry : TagRegistry or RegistrySnapshot, optional
        Tags to recognize. Defaults to the global registry. A snapshot is
        taken once, so concurrent registrations do not affect this call.
    kwargs : Any
        Individual options, overriding the fields of ``options``

    Returns
    -------
    RenderResult
        The HTML and the diagnostics

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a ``BBCodeRenderOptions``
    TypeError
        If a keyword argument is not an option name
    InputTooLargeError
        If ``text`` is longer than ``max_input_length``
    RenderingError
        If a tag callback raises or returns something other than a string

    Examples
    --------
    Basic rendering:
        >>> render("[b]hi[/b]").html
        '<span class="bb-b">hi</span>'

    Options as keyword arguments:
        >>> render("[b]hi", strip_misaligned_tags=True).html
        'hi'

    """
    options = _resolve_options(options, kwargs)
    if options.max_input_length is not None and len(text) > options.max_input_length:
        raise InputTooLargeError(len(text), options.max_input_length)

    start = time.perf_counter()
    snapshot = _resolve_snapshot(registry)
    diagnostics = DiagnosticCollector()

    document = BBCodeParser(snapshot, options).parse(text, diagnostics).document
    document.accept(NestingValidator(snapshot, diagnostics))
    html = HtmlRenderer(snapshot, options).render_to_string(document, diagnostics)
    html = apply_postprocessors(html, options)

    logger.debug(
        f"Rendered {len(text)} chars of BBCode in {(time.perf_counter() - start) * 1000:.2f}ms "
        f"with {len(diagnostics)} diagnostic(s)"
    )
    return RenderResult(html=html, diagnostics=diagnostics.items)


def parse(text: str, registry: Optional[RegistryLike] = None) -> ParseResult:
    """Parse markup into a tree without rendering it.

    Nesting diagnostics are included next to the parse diagnostics.

    Examples
    --------
        >>> result = parse("[list][*]a[/list]")
        >>> result.document.children[0].name
        'list'

    """
    snapshot = _resolve_snapshot(registry)
    diagnostics = DiagnosticCollector()
    document = BBCodeParser(snapshot).parse(text, diagnostics).document
    document.accept(NestingValidator(snapshot, diagnostics))
    return ParseResult(document=document, diagnostics=diagnostics.items)


def register_tags(definitions: TagDefinitions, *, override: bool = False) -> None:
    """Register tags on the global registry.

    Parameters
    ----------
    definitions : mapping or iterable of TagDefinition
        Tags to add. Mapping keys take precedence over the definitions' names.
    override : bool, default False
        Replace existing tags instead of raising ``DuplicateTagError``

    Examples
    --------
        >>> register_tags({"aside": TagDefinition.simple("aside", "<aside>", "</aside>")})

    """
    tag_registry.register_tags(definitions, override=override)


def list_tags() -> Mapping[str, TagDefinition]:
    """Return a read-only view of the tags on the global registry."""
    return tag_registry.list_tags()
