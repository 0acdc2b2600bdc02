#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/utils/urls.py
"""URL checks shared by the ``url``, ``img`` and ``youtube`` tags and autolinking.

The URLs handled here come out of already-escaped markup, so they never
contain a raw ``<``, ``>`` or ``"`` and can be placed in an attribute as is.
"""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urlsplit

from bbhtml.constants import MAX_URL_LENGTH, URL_PATTERN, URL_SCHEMES, YOUTUBE_ID_PATTERN


def add_default_scheme(url: str) -> str:
    """Prefix ``http://`` unless the URL starts with a supported scheme.

    Examples
    --------
    >>> add_default_scheme("example.com/page")
    'http://example.com/page'
    >>> add_default_scheme("https://example.com")
    'https://example.com'

    """
    if url.lower().startswith(URL_SCHEMES):
        return url
    return "http://" + url


def is_valid_url(url: str) -> bool:
    """Check that a URL has a supported scheme and a public host.

    Private and loopback IPv4 ranges and bare host names without a TLD are
    rejected.

    Examples
    --------
    >>> is_valid_url("https://example.com/a?b=1")
    True
    >>> is_valid_url("http://127.0.0.1/admin")
    False
    >>> is_valid_url("javascript:alert(1)")
    False

    """
    if not url or len(url) > MAX_URL_LENGTH:
        return False
    return URL_PATTERN.match(url) is not None


def is_internal_url(url: str, internal_hosts: Iterable[str]) -> bool:
    """Check whether a URL points at one of ``internal_hosts`` or a subdomain of one."""
    hosts = tuple(internal_hosts)
    if not hosts:
        return False
    try:
        hostname = urlsplit(add_default_scheme(url)).hostname
    except ValueError:
        return False
    if not hostname:
        return False
    return any(hostname == host or hostname.endswith("." + host) for host in hosts)


def extract_youtube_id(url: str) -> Optional[str]:
    """Return the 11-character video id of a YouTube URL, or None.

    Examples
    --------
    >>> extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    'dQw4w9WgXcQ'
    >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
    'dQw4w9WgXcQ'

    """
    match = YOUTUBE_ID_PATTERN.match(url)
    return match.group(1) if match else None
