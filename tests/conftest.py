import os
import tempfile

# Point the app at a throwaway database before db.py is imported
_DB_DIR = tempfile.mkdtemp(prefix="quiz-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["QUIZ_STORAGE"] = "sql"
os.environ.pop("QUIZ_CATALOG_SOURCE", None)

import pytest  # noqa: E402

import models  # noqa: E402
from catalog import Question  # noqa: E402
from db import Base, engine  # noqa: E402
from deps.quiz import QuizRuntime  # noqa: E402
from main import app  # noqa: E402

Base.metadata.create_all(engine)


def make_question(qid, text, options, answer, score=None):
    opts = [{"label": label, "text": t} for label, t in options]
    right = next(o for o in opts if o["label"] == answer)
    return Question.model_validate(
        {"id": qid, "question": text, "score": score, "options": opts, "answer": right}
    )


@pytest.fixture
def catalog():
    """Three questions scored [1, 2, None]; correct labels A, C, B."""
    return [
        make_question(1, "Capital of France?", [("A", "Paris"), ("B", "Rome"), ("C", "Oslo")], "A", 1),
        make_question(2, "Largest ocean?", [("A", "Indian"), ("B", "Arctic"), ("C", "Pacific")], "C", 2),
        make_question(3, "Striped animal?", [("A", "Lion"), ("B", "Zebra"), ("C", "Bear")], "B", None),
    ]


@pytest.fixture(autouse=True)
def fresh_app_state():
    with engine.begin() as conn:
        conn.execute(models.StoredBlob.__table__.delete())
    app.state.quiz = QuizRuntime()
    yield
    app.state.quiz.abort()
