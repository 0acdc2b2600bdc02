#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the bbhtml library.

This module centralizes hardcoded values, patterns and default configuration
constants used across bbhtml.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markup Syntax - Delimiters, entities and reserved tag names
3. Rendering Defaults - Default option values
4. Validation Patterns - URL, color and font patterns used by built-in tags
5. Post-processing - Smilies, mentions and autolinking
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DiagnosticCategory = Literal["misaligned", "nesting", "tag"]

# =============================================================================
# Markup Syntax
# =============================================================================

# Literal "<" and ">" are entity-escaped before tokenizing, so they are free
# to delimit recognized tag tokens inside the pipeline.
TAG_START = "<"
TAG_END = ">"

OPEN_BRACKET_ENTITY = "&#91;"
CLOSE_BRACKET_ENTITY = "&#93;"

ROOT_TAG_NAME = "bbcode"
STAR_TAG_NAME = "*"
LIST_TAG_NAME = "list"

# Characters that may not appear in a tag name; HTML escaping rewrites & " and '
INVALID_TAG_NAME_CHARS = frozenset("[]<>=/&\"' \t\r\n")

MISALIGNED_TAGS_MESSAGE = "Some tags appear to be misaligned."
NESTING_TOO_DEEP_MESSAGE = "Some tags are nested too deeply and were left as text."

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_ADD_LINE_BREAKS = False
DEFAULT_STRIP_MISALIGNED_TAGS = False
DEFAULT_CONVERT_NEWLINES = False
DEFAULT_GREENTEXT = False
DEFAULT_SMILIES = False
DEFAULT_MENTIONS = False
DEFAULT_AUTOLINK = False
DEFAULT_MAX_INPUT_LENGTH: int | None = None
DEFAULT_MAX_NESTING_DEPTH = 100

# Rendering and validation walk the tree recursively
MAX_NESTING_DEPTH_LIMIT = 250

DEFAULT_INTERNAL_HOSTS: tuple[str, ...] = ()

LINE_BREAK_WRAPPER_OPEN = '<div style="white-space:pre-line;">'
LINE_BREAK_WRAPPER_CLOSE = "</div>"

# =============================================================================
# Validation Patterns
# =============================================================================

# Adapted from https://gist.github.com/dperini/729294; private and local
# networks are rejected.
URL_PATTERN = re.compile(
    r"^"
    r"(?:(?:https?|ftp)://)"
    r"(?:\S+(?::\S*)?@)?"
    r"(?:"
    r"(?!(?:10|127)(?:\.\d{1,3}){3})"
    r"(?!(?:169\.254|192\.168)(?:\.\d{1,3}){2})"
    r"(?!172\.(?:1[6-9]|2\d|3[0-1])(?:\.\d{1,3}){2})"
    r"(?:[1-9]\d?|1\d\d|2[01]\d|22[0-3])"
    r"(?:\.(?:1?\d{1,2}|2[0-4]\d|25[0-5])){2}"
    r"(?:\.(?:[1-9]\d?|1\d\d|2[0-4]\d|25[0-4]))"
    r"|"
    r"(?:[a-z\u00a1-\uffff0-9](?:[a-z\u00a1-\uffff0-9-]*[a-z\u00a1-\uffff0-9])?)"
    r"(?:\.[a-z\u00a1-\uffff0-9](?:[a-z\u00a1-\uffff0-9-]*[a-z\u00a1-\uffff0-9])?)*"
    r"(?:\.(?:[a-z\u00a1-\uffff]{2,}))"
    r")"
    r"(?::\d{2,5})?"
    r"(?:/\S*)?"
    r"$",
    re.IGNORECASE,
)

URL_SCHEMES = ("http://", "https://", "ftp://")
MAX_URL_LENGTH = 2048

YOUTUBE_ID_PATTERN = re.compile(r"^.*(?:youtu\.be/|v/|e/|u/\w+/|embed/|v=)([A-Za-z0-9_\-]{11}).*")
YOUTUBE_EMBED_URL = "https://youtube.com/embed/{video_id}?theme=dark"

COLOR_CODE_PATTERN = re.compile(r"^#?[a-f0-9]{6}$", re.IGNORECASE)
FONT_FACE_PATTERN = re.compile(r"^([a-z][a-z0-9_\s]+)$", re.IGNORECASE)

COLOR_NAMES = frozenset(
    {
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige", "bisque", "black",
        "blanchedalmond", "blue", "blueviolet", "brown", "burlywood", "cadetblue", "chartreuse",
        "chocolate", "coral", "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkkhaki", "darkmagenta", "darkolivegreen",
        "darkorange", "darkorchid", "darkred", "darksalmon", "darkseagreen", "darkslateblue",
        "darkslategray", "darkturquoise", "darkviolet", "deeppink", "deepskyblue", "dimgray",
        "dodgerblue", "firebrick", "floralwhite", "forestgreen", "fuchsia", "gainsboro", "ghostwhite",
        "gold", "goldenrod", "gray", "green", "greenyellow", "honeydew", "hotpink", "indianred",
        "indigo", "ivory", "khaki", "lavender", "lavenderblush", "lawngreen", "lemonchiffon",
        "lightblue", "lightcoral", "lightcyan", "lightgoldenrodyellow", "lightgray", "lightgreen",
        "lightpink", "lightsalmon", "lightseagreen", "lightskyblue", "lightslategray",
        "lightsteelblue", "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon",
        "mediumaquamarine", "mediumblue", "mediumorchid", "mediumpurple", "mediumseagreen",
        "mediumslateblue", "mediumspringgreen", "mediumturquoise", "mediumvioletred", "midnightblue",
        "mintcream", "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive", "olivedrab",
        "orange", "orangered", "orchid", "palegoldenrod", "palegreen", "paleturquoise",
        "palevioletred", "papayawhip", "peachpuff", "peru", "pink", "plum", "powderblue", "purple",
        "red", "rosybrown", "royalblue", "saddlebrown", "salmon", "sandybrown", "seagreen",
        "seashell", "sienna", "silver", "skyblue", "slateblue", "slategray", "snow", "springgreen",
        "steelblue", "tan", "teal", "thistle", "tomato", "turquoise", "violet", "wheat", "white",
        "whitesmoke", "yellow", "yellowgreen",
    }
)  # fmt: skip

TABLE_STATUSES = frozenset({"active", "success", "warning", "danger", "info"})

# =============================================================================
# Post-processing
# =============================================================================

# Keep in sync with the BBCode cheatsheet
SMILIES = (
    "airquotes", "airquote", "arghfist", "bow", "brow", "btw", "cool", "dreamy", "drool", "gray",
    "confused", "magnum", "nat", "hehe", "lol", "hmm", "golfclap", "ou", "newlol", "punch", "rock",
    "respek", "rollin", "rolleyes", "sick", "sun", "toot", "usa", "wub", "what", "zzz",
)  # fmt: skip

DEFAULT_SMILIE_URL_TEMPLATE = "/smilies/{name}.gif"
DEFAULT_MENTION_URL_TEMPLATE = "/users/{slug}"

AUTOLINK_TRUNCATE_LENGTH = 40
GREENTEXT_CLASS = "bb-greentext"

# Text inside these elements is never rewritten by the text passes
TEXT_PASS_SKIP_ELEMENTS = frozenset({"a", "button", "code", "pre", "script", "style"})

# A text node right after one of these (or first inside one) starts a line
LINE_BLOCK_ELEMENTS = frozenset(
    {"blockquote", "br", "div", "footer", "hr", "iframe", "li", "ol", "table", "tbody", "td", "th", "thead", "tr", "ul"}
)
