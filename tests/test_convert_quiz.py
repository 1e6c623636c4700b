import json

import pytest

from tools.convert_quiz import convert, main, normalize_question, parse_options, parse_score

SAMPLE = """1. Which planet is largest? (2分)
选项: A. Mars B. Jupiter
C. Venus D. Earth
答案: B. Jupiter

2. Pick the even number （1.5分）
A. 3 B. 8
答案：B. 8

3. too short
答案: A. x
"""


def test_question_line_is_normalized():
    assert normalize_question("12. What is 2 + 2? (3分)") == "What is 2 + 2?"
    assert parse_score("12. What is 2 + 2? (3分)") == 3
    assert parse_score("What is 2 + 2?") is None


def test_options_split_on_labels():
    assert parse_options("A. red B. dark blue C. green") == [
        {"label": "A", "text": "red"},
        {"label": "B", "text": "dark blue"},
        {"label": "C", "text": "green"},
    ]


def test_convert_blocks():
    qs = convert(SAMPLE)
    assert [q["id"] for q in qs] == [1, 2]
    first = qs[0]
    assert first["question"] == "Which planet is largest?"
    assert first["score"] == 2
    assert [o["label"] for o in first["options"]] == ["A", "B", "C", "D"]
    assert first["answer"] == {"label": "B", "text": "Jupiter"}
    assert qs[1]["score"] == 1.5


def test_block_without_answer_line():
    with pytest.raises(ValueError, match="no answer line"):
        convert("1. Q?\nA. x B. y\nC. z D. w\n")


def test_unparsable_answer_line():
    with pytest.raises(ValueError, match="Could not parse answer"):
        convert("1. Q?\nA. x B. y\n答案: maybe x\n")


def test_main_writes_loadable_catalog(tmp_path):
    src = tmp_path / "quiz.txt"
    src.write_text(SAMPLE, encoding="utf-8")
    out = tmp_path / "out" / "quiz.json"
    assert main([str(src), str(out)]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data) == 2
    assert data[0]["options"][1]["text"] == "Jupiter"


def test_main_reports_bad_input(tmp_path):
    assert main([str(tmp_path / "missing.txt"), str(tmp_path / "out.json")]) == 1
