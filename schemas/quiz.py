# schemas/quiz.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from engine.view import QuestionStatus, ViewMode
from schemas.questions import OptionOut, QuestionOut

# ---------- Requests ----------


class SelectRequest(BaseModel):
    choice: str = Field(min_length=1)
    index: Optional[int] = None


class TargetRequest(BaseModel):
    index: Optional[int] = None


class JumpRequest(BaseModel):
    index: int


class SearchRequest(BaseModel):
    query: str = ""


class ClearRequest(BaseModel):
    confirm: bool = False


# ---------- Responses ----------


class AnswerRecordOut(BaseModel):
    choice: Optional[str] = None
    correct: Optional[bool] = None


class SummaryOut(BaseModel):
    answered_count: int
    correct_count: int
    wrong_count: int
    total_score: float
    full_score: float
    total_questions: int


class NavigatorItem(BaseModel):
    index: int
    id: int
    status: QuestionStatus


class QuizStateOut(BaseModel):
    cursor: int
    position: int
    previous_index: Optional[int] = None
    next_index: Optional[int] = None
    view_mode: ViewMode
    search_query: str
    visible: List[int]
    search_hits: int
    summary: SummaryOut
    question: Optional[QuestionOut] = None
    answer: Optional[AnswerRecordOut] = None
    is_submitted: bool
    # present only after grading, so the key is not leaked early
    expected: Optional[OptionOut] = None
    status_message: Optional[str] = None
    navigator: List[NavigatorItem]


class ActionResponse(BaseModel):
    ok: bool
    feedback: Optional[str] = None
    state: QuizStateOut
