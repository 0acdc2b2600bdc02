#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/tags/builtin.py
"""Built-in forum tags.

Every callback receives ``(params, content, context)``. ``params`` and
``content`` come from escaped markup, so they never contain raw ``<``, ``>``
or ``"`` and are safe to place in attributes. Tags that reject their
parameter (an unknown color, an invalid URL) report a diagnostic and render
their own tokens back as visible text, or drop them when
``strip_misaligned_tags`` is set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from bbhtml.ast.nodes import Tag
from bbhtml.constants import (
    CLOSE_BRACKET_ENTITY,
    COLOR_CODE_PATTERN,
    COLOR_NAMES,
    FONT_FACE_PATTERN,
    LIST_TAG_NAME,
    OPEN_BRACKET_ENTITY,
    STAR_TAG_NAME,
    TABLE_STATUSES,
    YOUTUBE_EMBED_URL,
)
from bbhtml.tags.definition import TagDefinition
from bbhtml.utils.html_utils import strip_tags
from bbhtml.utils.urls import add_default_scheme, extract_youtube_id, is_internal_url, is_valid_url

if TYPE_CHECKING:
    from bbhtml.renderers.context import RenderContext

INVALID_URL_MESSAGE = "One of your [url] tags has an invalid url"
INVALID_VIDEO_MESSAGE = "The video URL appears to be invalid"
MISSING_COLOR_MESSAGE = "You have a COLOR tag that does not specify a color"


def _literal_token(context: RenderContext, name: str, params: Optional[str] = None, closing: bool = False) -> str:
    if context.options.strip_misaligned_tags:
        return ""
    body = ("/" if closing else "") + name + (f"={params}" if params is not None else "")
    return OPEN_BRACKET_ENTITY + body + CLOSE_BRACKET_ENTITY


def _tag_name(context: RenderContext, default: str) -> str:
    current = context.current
    return current.name if current is not None else default


def _status_classes(params: Optional[str]) -> list[str]:
    status = (params or "").strip().lower()
    if status in TABLE_STATUSES:
        return [status, f"bb-{status}"]
    return []


# ----------------------------------------------------------------------------
# Colors and fonts
# ----------------------------------------------------------------------------


def _resolve_color(params: Optional[str]) -> Optional[str]:
    if not params:
        return None
    code = params.strip().lower()
    if code in COLOR_NAMES:
        return code
    if COLOR_CODE_PATTERN.match(code):
        return code if code.startswith("#") else "#" + code
    return None


def _open_color(params: Optional[str], content: str, context: RenderContext) -> str:
    name = _tag_name(context, "color")
    color = _resolve_color(params)
    if color is None:
        if not params:
            context.add_diagnostic(MISSING_COLOR_MESSAGE)
        else:
            context.add_diagnostic(f"You have a COLOR tag with an invalid color: [{name}={params}]")
        return _literal_token(context, name, params)
    return f'<span style="color:{color}">'


def _close_color(params: Optional[str], content: str, context: RenderContext) -> str:
    if _resolve_color(params) is None:
        return _literal_token(context, _tag_name(context, "color"), closing=True)
    return "</span>"


def _open_font(params: Optional[str], content: str, context: RenderContext) -> str:
    face = params.strip() if params else ""
    if not FONT_FACE_PATTERN.match(face):
        face = "inherit"
    return f'<span style="font-family:{face}">'


# ----------------------------------------------------------------------------
# Links and media
# ----------------------------------------------------------------------------


def _resolve_url(params: Optional[str], content: str) -> tuple[str, bool]:
    raw = params.strip() if params else strip_tags(content).strip()
    url = add_default_scheme(raw)
    return url, is_valid_url(url)


def _open_url(params: Optional[str], content: str, context: RenderContext) -> str:
    url, valid = _resolve_url(params, content)
    if not valid:
        context.add_diagnostic(INVALID_URL_MESSAGE)
        return _literal_token(context, "url", params)
    if is_internal_url(url, context.options.internal_hosts):
        return f'<a href="{url}">'
    return f'<a target="_blank" rel="nofollow noopener" href="{url}">'


def _close_url(params: Optional[str], content: str, context: RenderContext) -> str:
    _, valid = _resolve_url(params, content)
    return "</a>" if valid else _literal_token(context, "url", closing=True)


def _open_img(params: Optional[str], content: str, context: RenderContext) -> str:
    src = content.strip()
    if not is_valid_url(src):
        src = ""
    return f'<img src="{src}">'


def _open_youtube(params: Optional[str], content: str, context: RenderContext) -> str:
    video_id = extract_youtube_id(content.strip())
    if video_id is None:
        context.add_diagnostic(INVALID_VIDEO_MESSAGE)
        return _literal_token(context, "youtube") + content + _literal_token(context, "youtube", closing=True)
    src = YOUTUBE_EMBED_URL.format(video_id=video_id)
    return f'<iframe src="{src}" frameborder="0" width="496" height="279" allowfullscreen></iframe>'


# ----------------------------------------------------------------------------
# Blocks
# ----------------------------------------------------------------------------


def _open_hider(params: Optional[str], content: str, context: RenderContext) -> str:
    title = params.strip() if params and params.strip() else "Hider"
    return (
        '<div class="hider-panel">'
        '<div class="hider-heading">'
        f'<button type="button" class="btn btn-default btn-xs hider-button" data-name="{title}">'
        f"{title} {OPEN_BRACKET_ENTITY}+{CLOSE_BRACKET_ENTITY}"
        "</button>"
        "</div>"
        '<div class="hider-body" style="display: none">'
    )


def _close_quote(params: Optional[str], content: str, context: RenderContext) -> str:
    source = params.strip() if params else ""
    if source.startswith("@") and len(source) > 1:
        # Rendered as a mention by the mentions post-processor
        footer = f"<footer>{OPEN_BRACKET_ENTITY}{source}{CLOSE_BRACKET_ENTITY}</footer>"
    elif source:
        footer = f"<footer>{source}</footer>"
    else:
        footer = ""
    return footer + "</blockquote>"


def _open_abbr(params: Optional[str], content: str, context: RenderContext) -> str:
    return f'<abbr class="bb-abbr" title="{(params or "").strip()}">'


# ----------------------------------------------------------------------------
# Tables
# ----------------------------------------------------------------------------


def _is_header_row(context: RenderContext, level: int) -> bool:
    """Whether the tag ``level`` steps up is a ``row`` and the first row of its own table."""
    container = context.container(level)
    return isinstance(container, Tag) and container.name == "table" and context.is_first_of_kind(level)


def _open_table(params: Optional[str], content: str, context: RenderContext) -> str:
    classes = "bb-table table table-bordered" if (params or "").strip() == "bordered" else "bb-table table"
    return f'<div class="table-responsive"><table class="{classes}">'


def _open_row(params: Optional[str], content: str, context: RenderContext) -> str:
    if _is_header_row(context, 0):
        return '<thead class="bb-thead"><tr class="bb-tr">'
    classes = " ".join(["bb-tr", *_status_classes(params)])
    return f'<tr class="{classes}">'


def _close_row(params: Optional[str], content: str, context: RenderContext) -> str:
    return "</tr></thead>" if _is_header_row(context, 0) else "</tr>"


def _in_header_row(context: RenderContext) -> bool:
    parent = context.parent
    return isinstance(parent, Tag) and parent.name == "row" and _is_header_row(context, 1)


def _open_cell(params: Optional[str], content: str, context: RenderContext) -> str:
    if _in_header_row(context):
        classes = " ".join(["bb-th", *_status_classes(params)])
        return f'<th class="{classes}">'
    classes = " ".join(["bb-td", *_status_classes(params)])
    return f'<td class="{classes}">'


def _close_cell(params: Optional[str], content: str, context: RenderContext) -> str:
    return "</th>" if _in_header_row(context) else "</td>"


# ----------------------------------------------------------------------------
# Registry contents
# ----------------------------------------------------------------------------

_CENTER = TagDefinition.simple(
    "center", '<div class="bb-center">', "</div>", trim_contents=True, description="Centered block"
)
_COLOR = TagDefinition(
    name="color",
    render_open=_open_color,
    render_close=_close_color,
    description="Text color: a CSS color name or 6-digit hex code",
)

BUILTIN_TAGS: tuple[TagDefinition, ...] = (
    # Inline formatting
    TagDefinition.simple("b", '<span class="bb-b">', "</span>", description="Bold"),
    TagDefinition.simple("i", '<span class="bb-i">', "</span>", description="Italic"),
    TagDefinition.simple("u", '<span class="bb-u">', "</span>", description="Underline"),
    TagDefinition.simple("s", '<span class="bb-s">', "</span>", description="Strike-through"),
    TagDefinition.simple("sub", "<sub>", "</sub>", description="Subscript"),
    TagDefinition.simple("sup", "<sup>", "</sup>", description="Superscript"),
    TagDefinition.simple("mark", '<span class="bb-mark">', "</span>", description="Highlighted text"),
    TagDefinition(
        name="abbr",
        render_open=_open_abbr,
        render_close=lambda params, content, context: "</abbr>",
        description="Abbreviation with its expansion as the parameter",
    ),
    _COLOR,
    _COLOR.renamed("colour"),
    TagDefinition(
        name="font",
        render_open=_open_font,
        render_close=lambda params, content, context: "</span>",
        description="Font family",
    ),
    # Blocks
    TagDefinition.simple("indent", '<div class="bb-indent">', "</div>", trim_contents=True, description="Indent"),
    TagDefinition.simple("h1", '<div class="bb-h1">', "</div>", trim_contents=True, description="Heading 1"),
    TagDefinition.simple("h2", '<div class="bb-h2">', "</div>", trim_contents=True, description="Heading 2"),
    TagDefinition.simple("h3", '<div class="bb-h3">', "</div>", trim_contents=True, description="Heading 3"),
    _CENTER,
    _CENTER.renamed("centre"),
    TagDefinition.simple("right", '<div class="bb-right">', "</div>", trim_contents=True, description="Right aligned"),
    TagDefinition.simple("justify", '<div class="bb-justify">', "</div>", trim_contents=True, description="Justified"),
    TagDefinition(
        name="hider",
        render_open=_open_hider,
        render_close=lambda params, content, context: "</div></div>",
        trim_contents=True,
        description="Collapsible panel titled by the parameter",
    ),
    TagDefinition(
        name="quote",
        render_open=lambda params, content, context: '<blockquote class="bb-quote">',
        render_close=_close_quote,
        trim_contents=True,
        description="Quotation, optionally attributed with =source or =@user",
    ),
    # Lists
    TagDefinition.simple(
        LIST_TAG_NAME,
        '<ul class="bb-list" style="white-space: normal;">',
        "</ul>",
        allowed_children=frozenset({STAR_TAG_NAME}),
        description="Bulleted list of [*] items",
    ),
    TagDefinition.simple(
        STAR_TAG_NAME,
        "<li>",
        "</li>",
        allowed_parents=frozenset({LIST_TAG_NAME}),
        trim_contents=True,
        description="List item; closed automatically",
    ),
    # Tables
    TagDefinition(
        name="table",
        render_open=_open_table,
        render_close=lambda params, content, context: "</table></div>",
        allowed_children=frozenset({"row"}),
        description="Table; =bordered adds borders. The first row is the header",
    ),
    TagDefinition(
        name="row",
        render_open=_open_row,
        render_close=_close_row,
        allowed_parents=frozenset({"table"}),
        allowed_children=frozenset({"cell"}),
        description="Table row; optional status: active, success, warning, danger, info",
    ),
    TagDefinition(
        name="cell",
        render_open=_open_cell,
        render_close=_close_cell,
        allowed_parents=frozenset({"row"}),
        description="Table cell; optional status like row",
    ),
    # Links and media
    TagDefinition(
        name="url",
        render_open=_open_url,
        render_close=_close_url,
        trim_contents=True,
        description="Link to the parameter, or to the content when there is none",
    ),
    TagDefinition(
        name="img",
        render_open=_open_img,
        no_parse=True,
        display_content=False,
        description="Image from the URL in the content",
    ),
    TagDefinition(
        name="youtube",
        render_open=_open_youtube,
        no_parse=True,
        display_content=False,
        description="Embedded YouTube video from the URL in the content",
    ),
    # Literal content
    TagDefinition.simple("code", "<code>", "</code>", no_parse=True, trim_contents=True, description="Inline code"),
    TagDefinition.simple("pre", "<pre>", "</pre>", no_parse=True, trim_contents=True, description="Preformatted"),
    TagDefinition.simple("noparse", "", "", no_parse=True, description="Content shown without tag processing"),
    # Self-closing
    TagDefinition.simple("hr", '<hr class="bb-hr">', self_closing=True, description="Horizontal rule"),
    TagDefinition.simple("br", "<br>", self_closing=True, description="Line break"),
)
