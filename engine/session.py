# engine/session.py
"""
QuizSession: the one object a front end talks to.

Holds the catalog, the authoritative in-memory ledger, the cursor, the view
mode, the search query and the transient status message. Everything else
(visible indices, navigation targets, summary) is computed on read.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from catalog import Question
from engine import cursor as nav
from engine import ledger as ledger_ops
from engine.errors import ModeUnavailableError, PersistenceError, ValidationError
from engine.ledger import LEDGER_KEY, AnswerRecord, Ledger, MigrationStrategy
from engine.summary import Summary, summarize
from engine.view import QuestionStatus, ViewMode, search_indices, status_of, visible_indices

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def read_persisted(backend: StorageBackend, key: str = LEDGER_KEY) -> Optional[Ledger]:
    """Stored ledger, or None when absent or unreadable."""
    try:
        return ledger_ops.load_ledger(backend.get(key))
    except PersistenceError:
        logger.exception("stored ledger unreadable; starting fresh")
    except Exception:
        logger.exception("storage read failed for %r; starting fresh", key)
    return None


class QuizSession:
    def __init__(
        self,
        catalog: Sequence[Question],
        backend: StorageBackend,
        *,
        ledger: Optional[Ledger] = None,
        storage_key: str = LEDGER_KEY,
    ) -> None:
        self._catalog = tuple(catalog)
        self._backend = backend
        self._key = storage_key
        self._ledger: Ledger = (
            ledger if ledger is not None else ledger_ops.fresh_ledger(len(self._catalog))
        )
        self._cursor = 0
        self._mode = ViewMode.ALL
        self._query = ""
        self._status: Optional[str] = None

    @classmethod
    def start(
        cls,
        catalog: Sequence[Question],
        backend: StorageBackend,
        *,
        storage_key: str = LEDGER_KEY,
        migration: MigrationStrategy = ledger_ops.migrate,
    ) -> "QuizSession":
        persisted = read_persisted(backend, storage_key)
        ledger = migration(persisted, len(catalog))
        return cls(catalog, backend, ledger=ledger, storage_key=storage_key)

    # --- Read accessors ----------------------------------------------------------

    @property
    def catalog(self) -> Tuple[Question, ...]:
        return self._catalog

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def view_mode(self) -> ViewMode:
        return self._mode

    @property
    def search_query(self) -> str:
        return self._query

    @property
    def status_message(self) -> Optional[str]:
        return self._status

    @property
    def summary(self) -> Summary:
        return summarize(self._catalog, self._ledger)

    @property
    def wrong_indices(self) -> List[int]:
        return ledger_ops.wrong_indices(self._ledger)

    @property
    def search_indices(self) -> List[int]:
        return search_indices(self._catalog, self._query)

    @property
    def visible_indices(self) -> List[int]:
        return visible_indices(self._catalog, self._ledger, self._mode, self._query)

    @property
    def position(self) -> int:
        return nav.position(self._cursor, self.visible_indices)

    @property
    def previous_target(self) -> Optional[int]:
        return nav.previous_target(self._cursor, self.visible_indices)

    @property
    def next_target(self) -> Optional[int]:
        return nav.next_target(self._cursor, self.visible_indices)

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self._cursor < len(self._catalog):
            return self._catalog[self._cursor]
        return None

    @property
    def current_answer(self) -> Optional[AnswerRecord]:
        if 0 <= self._cursor < len(self._ledger):
            return self._ledger[self._cursor]
        return None

    @property
    def is_submitted(self) -> bool:
        rec = self.current_answer
        return bool(rec and rec.is_submitted)

    @property
    def statuses(self) -> List[Tuple[int, QuestionStatus]]:
        """(index, status) for each visible question, for a navigator strip."""
        return [(i, status_of(self._ledger[i])) for i in self.visible_indices]

    def status_at(self, i: int) -> QuestionStatus:
        return status_of(self._ledger[i])

    # --- Ledger actions ----------------------------------------------------------

    def _target(self, index: Optional[int]) -> int:
        return self._cursor if index is None else index

    def select(self, choice: str, index: Optional[int] = None) -> None:
        # the wrong set is unchanged, so the cursor stays where the user put it
        self._commit(
            ledger_ops.select(self._ledger, self._target(index), choice), autocorrect=False
        )
        self._status = None

    def submit(self, index: Optional[int] = None) -> None:
        try:
            new = ledger_ops.submit(self._ledger, self._catalog, self._target(index))
        except ValidationError as e:
            self._status = str(e)
            raise
        self._commit(new)

    def reset(self, index: Optional[int] = None) -> None:
        self._commit(ledger_ops.reset(self._ledger, self._target(index)))
        self._status = None

    def clear_all(self) -> None:
        self._ledger = ledger_ops.fresh_ledger(len(self._catalog))
        self._status = None
        try:
            self._backend.remove(self._key)
        except Exception:
            logger.exception("failed to remove stored ledger %r", self._key)
        self._autocorrect()

    def _commit(self, new: Ledger, *, autocorrect: bool = True) -> None:
        self._ledger = new
        self._persist()
        if autocorrect:
            self._autocorrect()

    def _persist(self) -> None:
        try:
            self._backend.set(self._key, ledger_ops.dump_ledger(self._ledger))
        except Exception:
            # in-memory state stays authoritative; only durability is lost
            logger.exception("failed to persist ledger %r", self._key)

    # --- Navigation --------------------------------------------------------------

    def go_previous(self) -> None:
        target = self.previous_target
        if target is None:
            return
        self._cursor = target
        self._status = None

    def go_next(self) -> None:
        target = self.next_target
        if target is None:
            return
        self._cursor = target
        self._status = None

    def jump(self, index: int) -> None:
        if not 0 <= index < len(self._catalog):
            raise IndexError(f"question index {index} out of range (0..{len(self._catalog) - 1})")
        self._cursor = index
        self._status = None

    def _autocorrect(self) -> None:
        if self._mode == ViewMode.WRONG_ONLY:
            self._cursor = nav.correct_for_wrong_mode(self._cursor, self.wrong_indices)

    # --- View controls -----------------------------------------------------------

    def toggle_mode(self) -> ViewMode:
        if self._mode == ViewMode.WRONG_ONLY:
            self._mode = ViewMode.ALL
            return self._mode
        if not self.wrong_indices:
            raise ModeUnavailableError("No wrong answers to review yet.")
        self._mode = ViewMode.WRONG_ONLY
        self._autocorrect()
        return self._mode

    def set_search_query(self, query: str) -> None:
        self._query = query

    def clear_search(self) -> None:
        self._query = ""
        self._status = None
