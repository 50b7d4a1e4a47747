"""Category-keyed collection of user-facing failure notices."""
import itertools
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Dict, Hashable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorNote:
    """A single failure notice. ``category`` is None for uncategorized notes."""

    category: Optional[str]
    message: str


class ErrorLedger:
    """
    Holds at most one live note per category, in display order.

    ``set`` replaces a category's note and moves it to the end of the display
    order. Uncategorized notes are appended and never collapse into each
    other, even when their messages are identical.
    """

    def __init__(self) -> None:
        self._notes: Dict[Hashable, ErrorNote] = {}
        self._uncategorized_ids = itertools.count()
        self._lock = RLock()

    def clear(self, category: str) -> None:
        """Remove the note for ``category`` if present."""
        with self._lock:
            if self._notes.pop(category, None) is not None:
                logger.debug("Cleared error note; category:%s", category)

    def set(self, category: str, message: str) -> None:
        """Replace the note for ``category``."""
        with self._lock:
            self._notes.pop(category, None)
            self._notes[category] = ErrorNote(category, message)
        logger.debug("Recorded error note; category:%s", category)

    def set_uncategorized(self, message: str) -> None:
        """Append a note that has no retry category."""
        with self._lock:
            key: Tuple[str, int] = ("uncategorized", next(self._uncategorized_ids))
            self._notes[key] = ErrorNote(None, message)

    def copy(self) -> "ErrorLedger":
        """A new ledger holding the same notes in the same order."""
        duplicate = ErrorLedger()
        with self._lock:
            duplicate._notes = dict(self._notes)
            duplicate._uncategorized_ids = itertools.count(next(self._uncategorized_ids))
        return duplicate

    def notes(self) -> List[ErrorNote]:
        with self._lock:
            return list(self._notes.values())

    def snapshot(self) -> List[str]:
        """Rendered messages, for display only."""
        return [note.message for note in self.notes()]

    def __contains__(self, category: object) -> bool:
        with self._lock:
            return isinstance(category, str) and category in self._notes

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)
