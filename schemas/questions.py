# schemas/questions.py
from typing import List, Optional

from pydantic import BaseModel


class OptionOut(BaseModel):
    label: str
    text: str


class QuestionOut(BaseModel):
    id: int
    question: str
    score: Optional[float] = None
    options: List[OptionOut]


class QuestionDetailOut(QuestionOut):
    # only revealed once the question has been graded
    answer: Optional[OptionOut] = None
