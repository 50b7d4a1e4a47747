"""Unit tests for the error ledger."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from sharing_hub.workspace import ErrorLedger, ErrorNote


class TestErrorLedger:
    """Tests for ErrorLedger replace/clear semantics."""

    def setup_method(self):
        self.ledger = ErrorLedger()

    def test_empty(self):
        assert self.ledger.snapshot() == []
        assert len(self.ledger) == 0

    def test_set_replaces_category(self):
        """A second set for the same category leaves exactly one note."""
        self.ledger.set("Share", "Share failed: first")
        self.ledger.set("Share", "Share failed: second")

        assert self.ledger.snapshot() == ["Share failed: second"]
        assert len(self.ledger) == 1

    def test_set_moves_note_to_end(self):
        self.ledger.set("A", "a1")
        self.ledger.set("B", "b1")
        self.ledger.set("A", "a2")

        assert self.ledger.snapshot() == ["b1", "a2"]

    def test_clear_removes_only_that_category(self):
        self.ledger.set("A", "a")
        self.ledger.set("B", "b")
        self.ledger.clear("A")

        assert self.ledger.snapshot() == ["b"]
        assert "A" not in self.ledger
        assert "B" in self.ledger

    def test_clear_missing_category_is_noop(self):
        self.ledger.set("A", "a")
        self.ledger.clear("missing")
        assert self.ledger.snapshot() == ["a"]

    def test_uncategorized_notes_never_collapse(self):
        """Identical uncategorized messages are kept as separate notes."""
        self.ledger.set_uncategorized("Please provide a folder name")
        self.ledger.set_uncategorized("Please provide a folder name")

        assert self.ledger.snapshot() == [
            "Please provide a folder name",
            "Please provide a folder name",
        ]
        assert self.ledger.notes()[0] == ErrorNote(None, "Please provide a folder name")

    def test_uncategorized_notes_survive_clear(self):
        self.ledger.set_uncategorized("oops")
        self.ledger.set("A", "a")
        self.ledger.clear("A")
        assert self.ledger.snapshot() == ["oops"]

    def test_copy_is_independent(self):
        self.ledger.set("A", "a")
        self.ledger.set_uncategorized("u")

        duplicate = self.ledger.copy()
        duplicate.clear("A")
        duplicate.set_uncategorized("v")

        assert self.ledger.snapshot() == ["a", "u"]
        assert duplicate.snapshot() == ["u", "v"]

    def test_contains_ignores_non_strings(self):
        self.ledger.set_uncategorized("u")
        assert ("uncategorized", 0) not in self.ledger
        assert None not in self.ledger
