#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/tags/definition.py
"""Tag definitions for the BBCode registry.

A ``TagDefinition`` describes how one bracket tag renders: two callbacks
producing the HTML placed before and after the tag's rendered content, plus
flags that control parsing (``no_parse``, ``self_closing``) and nesting
restrictions checked by the validator.

Examples
--------
Define a tag with fixed markup:

    >>> from bbhtml.tags import TagDefinition
    >>> spoiler = TagDefinition.simple("spoiler", '<span class="spoiler">', "</span>")

Define a tag whose output depends on its parameter:

    >>> def open_size(params, content, context):
    ...     size = params if params in {"small", "large"} else "normal"
    ...     return f'<span class="bb-size-{size}">'
    >>> size = TagDefinition(
    ...     name="size",
    ...     render_open=open_size,
    ...     render_close=lambda params, content, context: "</span>",
    ... )

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from bbhtml.constants import INVALID_TAG_NAME_CHARS, ROOT_TAG_NAME
from bbhtml.exceptions import InvalidTagDefinitionError

if TYPE_CHECKING:
    from bbhtml.renderers.context import RenderContext

TagCallback = Callable[[Optional[str], str, "RenderContext"], str]
"""Signature of ``render_open`` / ``render_close``: ``(params, content, context) -> html``."""


def _empty_fragment(params: Optional[str], content: str, context: RenderContext) -> str:
    return ""


def normalize_tag_name(name: str) -> str:
    """Return the canonical (lower-case) form of a tag name.

    Raises
    ------
    InvalidTagDefinitionError
        If the name is empty, contains markup characters or whitespace, or is
        the reserved root name ``bbcode``

    """
    if not isinstance(name, str) or not name:
        raise InvalidTagDefinitionError(str(name), "Tag name cannot be empty")

    normalized = name.lower()
    bad_chars = INVALID_TAG_NAME_CHARS.intersection(normalized)
    if bad_chars:
        raise InvalidTagDefinitionError(
            name, f"Tag name '{name}' contains invalid character(s): {''.join(sorted(bad_chars))!r}"
        )
    if normalized == ROOT_TAG_NAME:
        raise InvalidTagDefinitionError(name, f"Tag name '{ROOT_TAG_NAME}' is reserved for the document root")
    return normalized


def _normalize_name_set(names: Iterable[str], owner: str, attribute: str) -> frozenset[str]:
    if isinstance(names, str):
        raise InvalidTagDefinitionError(owner, f"{attribute} must be a collection of tag names, not a string")
    return frozenset(name.lower() for name in names)


@dataclass(frozen=True)
class TagDefinition:
    """Rendering rules for a single BBCode tag.

    Parameters
    ----------
    name : str
        Case-insensitive tag name; stored lower-cased
    render_open : callable, default returns ""
        ``(params, content, context) -> str`` producing the HTML placed
        before the content. ``content`` is the already-rendered children.
    render_close : callable, default returns ""
        Same signature, producing the HTML placed after the content
    display_content : bool, default = True
        When False the rendered children are dropped from the output; used by
        tags whose body is really a parameter (an image URL, a video link)
    no_parse : bool, default = False
        Treat the tag's body as opaque text; nested tags are not recognized
    allowed_children : frozenset of str, default = empty
        Names of tags allowed directly inside this tag. Empty allows any.
    allowed_parents : frozenset of str, default = empty
        Names of tags this tag may appear directly inside. Empty allows any;
        ``bbcode`` names the document root.
    trim_contents : bool, default = False
        Strip leading and trailing whitespace from the rendered children
    self_closing : bool, default = False
        The tag has no closing form (``[hr]``); it never has children
    description : str, default = ""
        Human-readable summary, shown by tag listings

    Raises
    ------
    InvalidTagDefinitionError
        If the name is unusable, a callback is not callable, or the flags
        contradict each other

    """

    name: str
    render_open: TagCallback = field(default=_empty_fragment, repr=False, compare=False)
    render_close: TagCallback = field(default=_empty_fragment, repr=False, compare=False)
    display_content: bool = True
    no_parse: bool = False
    allowed_children: frozenset[str] = frozenset()
    allowed_parents: frozenset[str] = frozenset()
    trim_contents: bool = False
    self_closing: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        """Normalize the name and nesting sets and validate the definition."""
        object.__setattr__(self, "name", normalize_tag_name(self.name))
        object.__setattr__(
            self, "allowed_children", _normalize_name_set(self.allowed_children, self.name, "allowed_children")
        )
        object.__setattr__(
            self, "allowed_parents", _normalize_name_set(self.allowed_parents, self.name, "allowed_parents")
        )

        if not callable(self.render_open):
            raise InvalidTagDefinitionError(self.name, f"render_open of tag '{self.name}' is not callable")
        if not callable(self.render_close):
            raise InvalidTagDefinitionError(self.name, f"render_close of tag '{self.name}' is not callable")
        if self.self_closing and self.no_parse:
            raise InvalidTagDefinitionError(self.name, f"Tag '{self.name}' cannot be both self_closing and no_parse")
        if self.self_closing and self.allowed_children:
            raise InvalidTagDefinitionError(self.name, f"Self-closing tag '{self.name}' cannot restrict children")

    @classmethod
    def simple(cls, name: str, open_html: str, close_html: str = "", **kwargs: object) -> TagDefinition:
        """Build a definition whose open and close fragments are constant.

        Parameters
        ----------
        name : str
            Tag name
        open_html : str
            HTML emitted before the content
        close_html : str, default = ""
            HTML emitted after the content
        **kwargs
            Any other ``TagDefinition`` field

        Returns
        -------
        TagDefinition
            The new definition

        """
        return cls(
            name=name,
            render_open=lambda params, content, context: open_html,
            render_close=lambda params, content, context: close_html,
            **kwargs,  # type: ignore[arg-type]
        )

    def renamed(self, name: str) -> TagDefinition:
        """Return a copy of this definition registered under another name."""
        return dataclasses.replace(self, name=name)
