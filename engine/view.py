# engine/view.py

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from catalog import Question
from engine.ledger import AnswerRecord, wrong_indices


class ViewMode(str, Enum):
    ALL = "all"
    WRONG_ONLY = "wrong"


class QuestionStatus(str, Enum):
    PENDING = "pending"
    CORRECT = "correct"
    WRONG = "wrong"


def status_of(record: AnswerRecord) -> QuestionStatus:
    if record.correct is None:
        return QuestionStatus.PENDING
    return QuestionStatus.CORRECT if record.correct else QuestionStatus.WRONG


def question_matches(question: Question, query: str) -> bool:
    """Case-insensitive substring match on the question text or its joined option texts."""
    needle = query.strip().lower()
    if not needle:
        return True
    options_text = " ".join(opt.text.lower() for opt in question.options)
    return needle in question.text.lower() or needle in options_text


def search_indices(catalog: Sequence[Question], query: str) -> List[int]:
    if not query.strip():
        return list(range(len(catalog)))
    return [i for i, q in enumerate(catalog) if question_matches(q, query)]


def visible_indices(
    catalog: Sequence[Question],
    ledger: Sequence[AnswerRecord],
    mode: ViewMode,
    query: str,
) -> List[int]:
    hits = search_indices(catalog, query)
    base = wrong_indices(ledger) if mode == ViewMode.WRONG_ONLY else hits

    # narrow wrong-only results by the search as well
    if query.strip():
        allowed = set(hits)
        base = [i for i in base if i in allowed]
    return base
