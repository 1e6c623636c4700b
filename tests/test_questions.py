# tests/test_questions.py
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_list_questions():
    r = client.get("/questions")
    assert r.status_code == 200
    data = r.json()
    assert isinstance(data, list) and len(data) == 5
    q = data[0]
    assert {"id", "question", "score", "options"}.issubset(q.keys())
    assert "answer" not in q


def test_list_questions_search_and_limit():
    r = client.get("/questions", params={"q": "git"})
    assert [q["id"] for q in r.json()] == [4]

    r = client.get("/questions", params={"limit": 2})
    assert len(r.json()) == 2


def test_get_question_detail_ok():
    r = client.get("/questions/1")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == 1
    assert body["answer"] is None


def test_get_question_detail_reveals_answer_after_grading():
    client.post("/quiz/select", json={"choice": "C", "index": 0})
    client.post("/quiz/submit", json={"index": 0})
    body = client.get("/questions/1").json()
    assert body["answer"] == {"label": "A", "text": "def"}


def test_get_question_detail_404():
    r = client.get("/questions/999")
    assert r.status_code == 404
