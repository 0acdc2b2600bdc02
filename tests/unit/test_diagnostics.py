#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_diagnostics.py
"""Unit tests for Diagnostic and DiagnosticCollector."""

import pytest

from bbhtml.constants import MISALIGNED_TAGS_MESSAGE
from bbhtml.diagnostics import Diagnostic, DiagnosticCollector


@pytest.mark.unit
class TestDiagnosticCollector:
    def test_empty(self):
        collector = DiagnosticCollector()

        assert not collector
        assert len(collector) == 0
        assert collector.messages == []

    def test_order_and_deduplication(self):
        collector = DiagnosticCollector()
        collector.add("first")
        collector.add("second", "nesting")
        collector.add("first", "nesting")

        assert collector.messages == ["first", "second"]
        assert collector.items == (Diagnostic("first", "tag"), Diagnostic("second", "nesting"))

    def test_misaligned(self):
        collector = DiagnosticCollector()
        collector.misaligned()
        collector.misaligned()

        assert list(collector) == [Diagnostic(MISALIGNED_TAGS_MESSAGE, "misaligned")]

    def test_extend(self):
        collector = DiagnosticCollector()
        collector.add("a")
        collector.extend([Diagnostic("a"), Diagnostic("b", "nesting")])

        assert collector.messages == ["a", "b"]
        assert collector.items[1].category == "nesting"

    def test_str(self):
        assert str(Diagnostic("Oops")) == "Oops"
