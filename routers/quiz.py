# routers/quiz.py

from __future__ import annotations

from typing import Callable, List

from fastapi import APIRouter, Depends, HTTPException

from deps.quiz import QuizRuntime, get_quiz, get_runtime
from engine.errors import ModeUnavailableError, ValidationError
from engine.session import QuizSession
from schemas.questions import OptionOut, QuestionOut
from schemas.quiz import (
    ActionResponse,
    AnswerRecordOut,
    ClearRequest,
    JumpRequest,
    NavigatorItem,
    QuizStateOut,
    SearchRequest,
    SelectRequest,
    SummaryOut,
    TargetRequest,
)

router = APIRouter(prefix="/quiz", tags=["quiz"])


def question_out(q) -> QuestionOut:
    return QuestionOut(
        id=q.id,
        question=q.text,
        score=q.score,
        options=[OptionOut(label=o.label, text=o.text) for o in q.options],
    )


def quiz_state(quiz: QuizSession) -> QuizStateOut:
    s = quiz.summary
    question = quiz.current_question
    answer = quiz.current_answer
    expected = None
    if question is not None and quiz.is_submitted:
        expected = OptionOut(
            label=question.correct_answer.label, text=question.correct_answer.text
        )
    return QuizStateOut(
        cursor=quiz.cursor,
        position=quiz.position,
        previous_index=quiz.previous_target,
        next_index=quiz.next_target,
        view_mode=quiz.view_mode,
        search_query=quiz.search_query,
        visible=quiz.visible_indices,
        search_hits=len(quiz.search_indices),
        summary=SummaryOut(
            answered_count=s.answered_count,
            correct_count=s.correct_count,
            wrong_count=s.wrong_count,
            total_score=s.total_score,
            full_score=s.full_score,
            total_questions=len(quiz.catalog),
        ),
        question=question_out(question) if question is not None else None,
        answer=AnswerRecordOut(choice=answer.choice, correct=answer.correct) if answer else None,
        is_submitted=quiz.is_submitted,
        expected=expected,
        status_message=quiz.status_message,
        navigator=[
            NavigatorItem(index=i, id=quiz.catalog[i].id, status=status)
            for i, status in quiz.statuses
        ],
    )


def _run(runtime: QuizRuntime, quiz: QuizSession, action: Callable[[], None]) -> ActionResponse:
    """Apply one action under the session lock and report the resulting state."""
    with runtime.lock:
        try:
            action()
        except ValidationError as e:
            return ActionResponse(ok=False, feedback=str(e), state=quiz_state(quiz))
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ModeUnavailableError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return ActionResponse(ok=True, state=quiz_state(quiz))


@router.get("/state", response_model=QuizStateOut)
def get_state(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    with runtime.lock:
        return quiz_state(quiz)


@router.get("/ledger", response_model=List[AnswerRecordOut])
def get_ledger(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    with runtime.lock:
        ledger = quiz.ledger
    return [AnswerRecordOut(choice=r.choice, correct=r.correct) for r in ledger]


@router.post("/select", response_model=ActionResponse)
def select_option(
    req: SelectRequest,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    return _run(runtime, quiz, lambda: quiz.select(req.choice, req.index))


@router.post("/submit", response_model=ActionResponse)
def submit_answer(
    req: TargetRequest | None = None,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    index = req.index if req else None
    return _run(runtime, quiz, lambda: quiz.submit(index))


@router.post("/reset", response_model=ActionResponse)
def reset_answer(
    req: TargetRequest | None = None,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    index = req.index if req else None
    return _run(runtime, quiz, lambda: quiz.reset(index))


@router.post("/previous", response_model=ActionResponse)
def go_previous(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    return _run(runtime, quiz, quiz.go_previous)


@router.post("/next", response_model=ActionResponse)
def go_next(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    return _run(runtime, quiz, quiz.go_next)


@router.post("/jump", response_model=ActionResponse)
def jump(
    req: JumpRequest,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    return _run(runtime, quiz, lambda: quiz.jump(req.index))


@router.post("/mode/toggle", response_model=ActionResponse)
def toggle_mode(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    return _run(runtime, quiz, quiz.toggle_mode)


@router.put("/search", response_model=ActionResponse)
def set_search(
    req: SearchRequest,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    return _run(runtime, quiz, lambda: quiz.set_search_query(req.query))


@router.delete("/search", response_model=ActionResponse)
def clear_search(quiz: QuizSession = Depends(get_quiz), runtime: QuizRuntime = Depends(get_runtime)):
    return _run(runtime, quiz, quiz.clear_search)


@router.post("/clear", response_model=ActionResponse)
def clear_records(
    req: ClearRequest,
    quiz: QuizSession = Depends(get_quiz),
    runtime: QuizRuntime = Depends(get_runtime),
):
    # destructive: the client must have asked the user first
    if not req.confirm:
        raise HTTPException(status_code=400, detail="clearing all records requires confirm=true")
    return _run(runtime, quiz, quiz.clear_all)
