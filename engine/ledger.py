# engine/ledger.py
"""
Answer ledger: one AnswerRecord per catalog position.

Every mutation is a pure function returning a new tuple; callers replace
their reference. Records are matched to questions by position, not by id.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from typing import Callable, Optional, Sequence, Tuple

from catalog import Question
from engine.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

# storage key of the serialized ledger blob
LEDGER_KEY = "quiz_user_answers"

NO_SELECTION_MSG = "Select an option first."


@dataclass(frozen=True)
class AnswerRecord:
    choice: Optional[str] = None
    correct: Optional[bool] = None

    @property
    def is_submitted(self) -> bool:
        return self.correct is not None


Ledger = Tuple[AnswerRecord, ...]
MigrationStrategy = Callable[[Optional[Sequence[AnswerRecord]], int], Ledger]

FRESH = AnswerRecord()


def fresh_ledger(size: int) -> Ledger:
    return (FRESH,) * size


def migrate(persisted: Optional[Sequence[AnswerRecord]], catalog_size: int) -> Ledger:
    """
    Fit a stored ledger to the current catalog size.

    Grows by appending fresh records, shrinks by dropping the tail. Catalog
    reordering is not detected.
    """
    if persisted is None:
        return fresh_ledger(catalog_size)
    n = len(persisted)
    if n == catalog_size:
        return tuple(persisted)
    if n < catalog_size:
        logger.info("ledger grown from %d to %d entries", n, catalog_size)
        return tuple(persisted) + fresh_ledger(catalog_size - n)
    logger.warning(
        "catalog shrank: dropping %d stored answer(s) past index %d",
        n - catalog_size,
        catalog_size - 1,
    )
    return tuple(persisted[:catalog_size])


def _check_index(ledger: Ledger, i: int) -> None:
    if not 0 <= i < len(ledger):
        raise IndexError(f"question index {i} out of range (0..{len(ledger) - 1})")


def _put(ledger: Ledger, i: int, record: AnswerRecord) -> Ledger:
    return ledger[:i] + (record,) + ledger[i + 1 :]


def select(ledger: Ledger, i: int, choice: str) -> Ledger:
    # grading stays fixed until an explicit reset
    _check_index(ledger, i)
    return _put(ledger, i, replace(ledger[i], choice=choice))


def submit(ledger: Ledger, catalog: Sequence[Question], i: int) -> Ledger:
    _check_index(ledger, i)
    record = ledger[i]
    if record.choice is None:
        raise ValidationError(NO_SELECTION_MSG)
    correct = record.choice == catalog[i].correct_answer.label
    return _put(ledger, i, AnswerRecord(choice=record.choice, correct=correct))


def reset(ledger: Ledger, i: int) -> Ledger:
    _check_index(ledger, i)
    return _put(ledger, i, FRESH)


def wrong_indices(ledger: Sequence[AnswerRecord]) -> list[int]:
    return [i for i, rec in enumerate(ledger) if rec.correct is False]


# --- Serialization ----------------------------------------------------------------


def dump_ledger(ledger: Sequence[AnswerRecord]) -> str:
    return json.dumps([asdict(rec) for rec in ledger])


def _record_from_obj(obj: object) -> AnswerRecord:
    if not isinstance(obj, dict):
        raise PersistenceError(f"stored answer is not an object: {obj!r}")
    choice = obj.get("choice")
    correct = obj.get("correct")
    if choice is not None and not isinstance(choice, str):
        raise PersistenceError(f"stored choice is not a string: {choice!r}")
    if correct is not None and not isinstance(correct, bool):
        raise PersistenceError(f"stored correctness is not a boolean: {correct!r}")
    return AnswerRecord(choice=choice, correct=correct)


def load_ledger(raw: Optional[str]) -> Optional[Ledger]:
    """Decode a stored blob. None means nothing was stored."""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"stored ledger is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise PersistenceError("stored ledger is not a list")
    return tuple(_record_from_obj(obj) for obj in data)
