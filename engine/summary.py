# engine/summary.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from catalog import Question
from engine.ledger import AnswerRecord


@dataclass(frozen=True)
class Summary:
    answered_count: int
    correct_count: int
    wrong_count: int
    total_score: float
    full_score: float


def summarize(catalog: Sequence[Question], ledger: Sequence[AnswerRecord]) -> Summary:
    answered = correct = wrong = 0
    total = 0.0
    for i, rec in enumerate(ledger):
        if rec.correct is None:
            continue
        answered += 1
        if rec.correct:
            correct += 1
            total += catalog[i].score or 0
        else:
            wrong += 1
    full = sum(q.score or 0 for q in catalog)
    return Summary(
        answered_count=answered,
        correct_count=correct,
        wrong_count=wrong,
        total_score=total,
        full_score=full,
    )
