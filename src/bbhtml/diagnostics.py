#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbhtml/diagnostics.py
"""Non-fatal diagnostics collected while parsing and rendering markup.

Diagnostics describe problems in user markup (misaligned tags, nesting
violations, invalid tag parameters). They never abort a render; callers
receive them next to the HTML and decide whether to surface them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from bbhtml.constants import MISALIGNED_TAGS_MESSAGE, DiagnosticCategory


@dataclass(frozen=True)
class Diagnostic:
    """A single warning about the rendered markup.

    Parameters
    ----------
    message : str
        Human-readable description, suitable for showing to the post author
    category : {"misaligned", "nesting", "tag"}
        What kind of problem was found

    """

    message: str
    category: DiagnosticCategory = "tag"

    def __str__(self) -> str:
        return self.message


class DiagnosticCollector:
    """Ordered, de-duplicated accumulator of diagnostics.

    A message is only kept the first time it is reported, so a post with ten
    invalid colors yields a single "invalid color" entry per distinct value.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []
        self._seen: set[str] = set()

    def add(self, message: str, category: DiagnosticCategory = "tag") -> None:
        if message in self._seen:
            return
        self._seen.add(message)
        self._items.append(Diagnostic(message=message, category=category))

    def misaligned(self) -> None:
        self.add(MISALIGNED_TAGS_MESSAGE, "misaligned")

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic.message, diagnostic.category)

    @property
    def items(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    @property
    def messages(self) -> list[str]:
        return [item.message for item in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
