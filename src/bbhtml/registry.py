#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/registry.py
"""Tag registry for BBCode definitions and plugin discovery.

The registry maps tag names to ``TagDefinition`` objects and derives the
lookup tables the parser needs: the set of no-parse tags, the set of
self-closing tags, the per-tag nesting restrictions and a compiled matcher
for recognized tag tokens. Those tables live in an immutable
``RegistrySnapshot`` which is rebuilt on every registration change and
swapped in atomically, so concurrent renders always see a consistent set of
tags.

Examples
--------
Register a tag on the default registry:

    >>> from bbhtml.registry import tag_registry
    >>> from bbhtml.tags import TagDefinition
    >>> tag_registry.register(TagDefinition.simple("spoiler", '<span class="spoiler">', "</span>"))

Inspect the registered tags:

    >>> sorted(tag_registry.list_tags())[:3]
    ['*', 'abbr', 'b']

Third-party packages can contribute tags through the ``bbhtml.tags`` entry
point group; call ``tag_registry.discover_plugins()`` to load them.

"""

from __future__ import annotations

import importlib.metadata
import logging
import re
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Union

from bbhtml.exceptions import DuplicateTagError
from bbhtml.tags.builtin import BUILTIN_TAGS
from bbhtml.tags.definition import TagDefinition, normalize_tag_name

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "bbhtml.tags"

TagDefinitions = Union[Mapping[str, TagDefinition], Iterable[TagDefinition]]


def _alternation(names: Iterable[str]) -> str:
    # Longest names first so that "colour" is not matched as "color" + "ur"
    escaped = [re.escape(name) for name in sorted(names, key=lambda name: (-len(name), name))]
    return "|".join(escaped) if escaped else "(?!)"


def _build_token_pattern(definitions: Mapping[str, TagDefinition]) -> Optional[re.Pattern[str]]:
    if not definitions:
        return None
    open_names = _alternation(definitions)
    close_names = _alternation(name for name, definition in definitions.items() if not definition.self_closing)
    return re.compile(
        r"\[(?:/(?P<close>" + close_names + r")|(?P<open>" + open_names + r")(?:[= ](?P<params>[^\[\]]*))?)\]",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class RegistrySnapshot:
    """Immutable view of a registry's tags and derived lookup tables.

    Parameters
    ----------
    definitions : Mapping[str, TagDefinition]
        Read-only mapping of lower-cased tag name to definition
    no_parse : frozenset of str
        Names of tags whose body is not parsed
    valid_child_lookup : Mapping[str, frozenset of str]
        Allowed child names per tag; tags without restrictions are absent
    valid_parent_lookup : Mapping[str, frozenset of str]
        Allowed parent names per tag; tags without restrictions are absent
    token_pattern : re.Pattern or None
        Matcher for recognized ``[name]``, ``[name=params]`` and ``[/name]``
        tokens; None when no tags are registered
    no_parse_close_patterns : Mapping[str, re.Pattern]
        Matcher for the closing token of each no-parse tag

    """

    definitions: Mapping[str, TagDefinition] = field(default_factory=lambda: MappingProxyType({}))
    no_parse: frozenset[str] = frozenset()
    valid_child_lookup: Mapping[str, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))
    valid_parent_lookup: Mapping[str, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))
    token_pattern: Optional[re.Pattern[str]] = None
    no_parse_close_patterns: Mapping[str, re.Pattern[str]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, definitions: Mapping[str, TagDefinition]) -> RegistrySnapshot:
        """Derive all lookup tables from a name-to-definition mapping."""
        frozen = dict(definitions)
        no_parse = frozenset(name for name, definition in frozen.items() if definition.no_parse)
        return cls(
            definitions=MappingProxyType(frozen),
            no_parse=no_parse,
            valid_child_lookup=MappingProxyType(
                {name: definition.allowed_children for name, definition in frozen.items() if definition.allowed_children}
            ),
            valid_parent_lookup=MappingProxyType(
                {name: definition.allowed_parents for name, definition in frozen.items() if definition.allowed_parents}
            ),
            token_pattern=_build_token_pattern(frozen),
            no_parse_close_patterns=MappingProxyType(
                {name: re.compile(r"\[/" + re.escape(name) + r"\]", re.IGNORECASE) for name in no_parse}
            ),
        )

    def resolve(self, name: str) -> Optional[TagDefinition]:
        """Return the definition for ``name`` (case-insensitive), or None."""
        return self.definitions.get(name.lower())

    def is_no_parse(self, name: str) -> bool:
        return name.lower() in self.no_parse

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.definitions

    def __len__(self) -> int:
        return len(self.definitions)


class TagRegistry:
    """Registry of BBCode tag definitions.

    Reads go through ``snapshot()``, which returns the current immutable
    snapshot without locking. Registration changes are serialized by a
    re-entrant lock; each change builds a complete new snapshot before it
    replaces the old one.

    Parameters
    ----------
    definitions : iterable of TagDefinition or mapping, optional
        Tags to register initially

    Examples
    --------
    An isolated registry with a single tag:

        >>> registry = TagRegistry([TagDefinition.simple("b", "<strong>", "</strong>")])
        >>> registry.resolve("B").name
        'b'

    """

    def __init__(self, definitions: TagDefinitions = ()) -> None:
        self._lock = threading.RLock()
        self._definitions: dict[str, TagDefinition] = {}
        self._snapshot = RegistrySnapshot.build(self._definitions)
        if definitions:
            self.register_tags(definitions)

    def register(self, definition: TagDefinition, *, override: bool = False) -> None:
        """Register a single tag definition.

        Parameters
        ----------
        definition : TagDefinition
            Definition to register under ``definition.name``
        override : bool, default = False
            Replace an existing definition of the same name

        Raises
        ------
        DuplicateTagError
            If the name is already registered and ``override`` is False

        """
        self.register_tags([definition], override=override)

    def register_tags(self, definitions: TagDefinitions, *, override: bool = False) -> None:
        """Register several tag definitions at once.

        Either every definition is registered or, on a name collision, none
        is. The snapshot is rebuilt once.

        Parameters
        ----------
        definitions : Mapping[str, TagDefinition] or iterable of TagDefinition
            Definitions to register. For a mapping, the key is the name the
            definition is registered under.
        override : bool, default = False
            Replace existing definitions of the same names

        Raises
        ------
        DuplicateTagError
            If a name is already registered (and ``override`` is False) or
            appears twice in ``definitions``
        TypeError
            If an item is not a TagDefinition

        """
        if isinstance(definitions, Mapping):
            items = [(normalize_tag_name(name), definition) for name, definition in definitions.items()]
        else:
            items = [(getattr(definition, "name", None), definition) for definition in definitions]

        batch: dict[str, TagDefinition] = {}
        for name, definition in items:
            if not isinstance(definition, TagDefinition):
                raise TypeError(f"Expected TagDefinition, got {type(definition).__name__}")
            if definition.name != name:
                definition = definition.renamed(name)
            if definition.name in batch:
                raise DuplicateTagError(definition.name, f"Tag '{definition.name}' appears more than once")
            batch[definition.name] = definition

        with self._lock:
            for name in batch:
                if name in self._definitions:
                    if not override:
                        raise DuplicateTagError(name)
                    logger.warning(f"Tag '{name}' already registered, overwriting")

            updated = {**self._definitions, **batch}
            self._swap(updated)

        for name in batch:
            logger.debug(f"Registered tag: {name}")

    def unregister(self, name: str) -> bool:
        """Remove a tag.

        Parameters
        ----------
        name : str
            Tag name (case-insensitive)

        Returns
        -------
        bool
            True if the tag was removed, False if it was not registered

        """
        key = name.lower()
        with self._lock:
            if key not in self._definitions:
                return False
            updated = dict(self._definitions)
            del updated[key]
            self._swap(updated)
        logger.debug(f"Unregistered tag: {key}")
        return True

    def resolve(self, name: str) -> Optional[TagDefinition]:
        """Return the definition registered for ``name``, or None."""
        return self._snapshot.resolve(name)

    def is_no_parse(self, name: str) -> bool:
        """Return True if ``name`` is a registered no-parse tag."""
        return self._snapshot.is_no_parse(name)

    def list_tags(self) -> Mapping[str, TagDefinition]:
        """Return a read-only mapping of every registered tag."""
        return self._snapshot.definitions

    def snapshot(self) -> RegistrySnapshot:
        """Return the current immutable snapshot."""
        return self._snapshot

    def discover_plugins(self) -> int:
        """Discover and register tags from entry points.

        Each entry point in the ``bbhtml.tags`` group must load to a
        ``TagDefinition``, a mapping of names to definitions, or an iterable
        of definitions. Entry points that fail to load or collide with an
        existing tag are logged and skipped.

        Returns
        -------
        int
            Number of tags registered

        Examples
        --------
        In the plugin's ``pyproject.toml``::

            [project.entry-points."bbhtml.tags"]
            spoiler = "my_plugin.tags:SPOILER"

        """
        discovered_count = 0

        try:
            tag_eps = importlib.metadata.entry_points().select(group=PLUGIN_ENTRY_POINT_GROUP)
        except Exception as e:
            logger.warning(f"Failed to discover tag plugins: {e}")
            return 0

        for ep in tag_eps:
            try:
                loaded = ep.load()
                definitions = [loaded] if isinstance(loaded, TagDefinition) else loaded
                before = len(self._definitions)
                self.register_tags(definitions)
                discovered_count += len(self._definitions) - before
                logger.debug(f"Discovered tags from entry point: {ep.name}")
            except Exception as e:
                logger.warning(f"Failed to load tag entry point '{ep.name}': {e}")
                continue

        logger.info(f"Discovered {discovered_count} tag(s) from entry points")
        return discovered_count

    def _swap(self, definitions: dict[str, TagDefinition]) -> None:
        snapshot = RegistrySnapshot.build(definitions)
        self._definitions = definitions
        self._snapshot = snapshot
        logger.debug(f"Rebuilt tag registry snapshot with {len(definitions)} tag(s)")

    def __contains__(self, name: object) -> bool:
        return name in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)


tag_registry = TagRegistry(BUILTIN_TAGS)
"""Default registry holding the built-in forum tags."""
