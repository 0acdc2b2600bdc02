#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbhtml/options/render.py
"""Configuration options for rendering BBCode to HTML.

The two options every caller cares about are ``add_line_breaks`` and
``strip_misaligned_tags``. The rest switch on the forum's post-processing
passes (green-text, smilies, mentions, autolinking, newline conversion).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from bbhtml.constants import (
    DEFAULT_ADD_LINE_BREAKS,
    DEFAULT_AUTOLINK,
    DEFAULT_CONVERT_NEWLINES,
    DEFAULT_GREENTEXT,
    DEFAULT_INTERNAL_HOSTS,
    DEFAULT_MAX_INPUT_LENGTH,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_MENTION_URL_TEMPLATE,
    DEFAULT_MENTIONS,
    DEFAULT_SMILIE_URL_TEMPLATE,
    DEFAULT_SMILIES,
    DEFAULT_STRIP_MISALIGNED_TAGS,
    MAX_NESTING_DEPTH_LIMIT,
)
from bbhtml.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class BBCodeRenderOptions(CloneFrozenMixin):
    """Configuration options for BBCode-to-HTML rendering.

    Parameters
    ----------
    add_line_breaks : bool, default False
        Wrap the whole output in a ``white-space:pre-line`` block so that the
        author's line breaks survive.
    strip_misaligned_tags : bool, default False
        Remove tag tokens that could not be matched, tokens of tags that
        rejected their parameter (such as ``[color=bogus]``) and any other
        leftover ``[...]`` runs from the output instead of showing them
        literally.
    convert_newlines : bool, default False
        Replace newlines with ``<br>``, collapse runs of blank lines and
        encode tabs as ``&#9;``.
    greentext : bool, default False
        Wrap lines starting with ``>`` in a green-text span.
    smilies : bool, default False
        Replace ``:name`` smilie codes with images.
    smilie_url_template : str
        Image URL for smilies, formatted with ``name``.
    mentions : bool, default False
        Turn ``[@user name]`` into profile links.
    mention_exists : callable or None, default None
        Called with the lower-cased user name; mentions are only linked when
        it returns True. ``None`` links every mention.
    mention_url_template : str
        Profile URL, formatted with ``slug``.
    autolink : bool, default False
        Turn bare ``http(s)://`` and ``www.`` URLs in text into links.
    internal_hosts : tuple of str
        Host names treated as internal; links to them open in the same window
        and are not marked ``nofollow``.
    max_input_length : int or None, default None
        Reject markup longer than this many characters before parsing.
    max_nesting_depth : int, default 100
        Tags opened deeper than this are left as literal text.

    Examples
    --------
        >>> options = BBCodeRenderOptions(add_line_breaks=True)
        >>> strict = options.create_updated(strip_misaligned_tags=True)

    """

    add_line_breaks: bool = field(
        default=DEFAULT_ADD_LINE_BREAKS,
        metadata={"help": "Wrap output in a whitespace-preserving block", "importance": "core"},
    )
    strip_misaligned_tags: bool = field(
        default=DEFAULT_STRIP_MISALIGNED_TAGS,
        metadata={"help": "Remove unmatched tag tokens from the output", "importance": "core"},
    )
    convert_newlines: bool = field(
        default=DEFAULT_CONVERT_NEWLINES,
        metadata={"help": "Convert newlines to <br> and tabs to &#9;", "importance": "advanced"},
    )
    greentext: bool = field(
        default=DEFAULT_GREENTEXT,
        metadata={"help": "Style lines starting with '>' as green-text", "importance": "advanced"},
    )
    smilies: bool = field(
        default=DEFAULT_SMILIES,
        metadata={"help": "Replace :smilie codes with images", "importance": "advanced"},
    )
    smilie_url_template: str = field(
        default=DEFAULT_SMILIE_URL_TEMPLATE,
        metadata={"help": "Smilie image URL template, formatted with {name}", "importance": "advanced"},
    )
    mentions: bool = field(
        default=DEFAULT_MENTIONS,
        metadata={"help": "Link [@user] mentions to profiles", "importance": "advanced"},
    )
    mention_exists: Optional[Callable[[str], bool]] = field(
        default=None,
        metadata={"help": "Predicate deciding whether a mentioned user exists", "importance": "advanced"},
    )
    mention_url_template: str = field(
        default=DEFAULT_MENTION_URL_TEMPLATE,
        metadata={"help": "Profile URL template, formatted with {slug}", "importance": "advanced"},
    )
    autolink: bool = field(
        default=DEFAULT_AUTOLINK,
        metadata={"help": "Link bare URLs found in text", "importance": "advanced"},
    )
    internal_hosts: tuple[str, ...] = field(
        default=DEFAULT_INTERNAL_HOSTS,
        metadata={"help": "Hosts whose links stay in the same window", "importance": "advanced"},
    )
    max_input_length: Optional[int] = field(
        default=DEFAULT_MAX_INPUT_LENGTH,
        metadata={"help": "Reject markup longer than this many characters", "importance": "security"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum depth of nested tags", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ValueError(f"max_input_length must be positive, got {self.max_input_length}")
        if not 1 <= self.max_nesting_depth <= MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(
                f"max_nesting_depth must be between 1 and {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}"
            )
        if "{name}" not in self.smilie_url_template:
            raise ValueError("smilie_url_template must contain a {name} placeholder")
        if "{slug}" not in self.mention_url_template:
            raise ValueError("mention_url_template must contain a {slug} placeholder")
        # Accept any iterable of hosts but store a normalized tuple
        object.__setattr__(self, "internal_hosts", tuple(host.lower() for host in self.internal_hosts))
