from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from deps.quiz import QuizRuntime, get_quiz, get_runtime
from engine.session import QuizSession
from engine.view import question_matches
from routers.quiz import question_out
from schemas.questions import OptionOut, QuestionDetailOut, QuestionOut

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=List[QuestionOut])
def list_questions(
    q: Optional[str] = Query(default=None, description="Case-insensitive text search"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    quiz: QuizSession = Depends(get_quiz),
):
    qs = list(quiz.catalog)

    if q:
        qs = [qq for qq in qs if question_matches(qq, q)]

    if limit is not None:
        qs = qs[:limit]

    return [question_out(qq) for qq in qs]


@router.get("/questions/{qid}", response_model=QuestionDetailOut)
def get_question_detail(
    qid: int,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    idx = next((i for i, qq in enumerate(quiz.catalog) if qq.id == qid), None)
    if idx is None:
        raise HTTPException(status_code=404, detail="question not found")
    question = quiz.catalog[idx]
    detail = QuestionDetailOut(**question_out(question).model_dump())
    with runtime.lock:
        graded = quiz.ledger[idx].is_submitted
    if graded:
        detail.answer = OptionOut(
            label=question.correct_answer.label, text=question.correct_answer.text
        )
    return detail
