import pytest

from engine.ledger import AnswerRecord, fresh_ledger, select, submit
from engine.summary import summarize


def test_summary_of_fresh_ledger(catalog):
    s = summarize(catalog, fresh_ledger(3))
    assert (s.answered_count, s.correct_count, s.wrong_count) == (0, 0, 0)
    assert s.total_score == 0
    assert s.full_score == 3


def test_summary_after_one_correct_answer(catalog):
    ledger = submit(select(fresh_ledger(3), 0, "A"), catalog, 0)
    s = summarize(catalog, ledger)
    assert s.answered_count == 1
    assert s.correct_count == 1
    assert s.wrong_count == 0
    assert s.total_score == 1
    assert s.full_score == 3


def test_selected_but_unsubmitted_is_not_answered(catalog):
    s = summarize(catalog, select(fresh_ledger(3), 1, "C"))
    assert s.answered_count == 0


def test_null_score_counts_as_zero(catalog):
    ledger = (AnswerRecord("A", True), AnswerRecord("C", True), AnswerRecord("B", True))
    s = summarize(catalog, ledger)
    assert s.total_score == 3
    assert s.total_score == s.full_score


@pytest.mark.parametrize(
    "ledger",
    [
        (AnswerRecord("A", True), AnswerRecord("B", False), AnswerRecord()),
        (AnswerRecord("B", False), AnswerRecord("A", False), AnswerRecord("B", True)),
        (AnswerRecord("A", None), AnswerRecord(), AnswerRecord("C", False)),
    ],
)
def test_counts_are_consistent(catalog, ledger):
    s = summarize(catalog, ledger)
    assert s.answered_count == s.correct_count + s.wrong_count
    assert s.total_score <= s.full_score
