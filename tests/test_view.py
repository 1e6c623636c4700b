from engine.cursor import correct_for_wrong_mode, next_target, position, previous_target
from engine.ledger import AnswerRecord, fresh_ledger
from engine.view import (
    QuestionStatus,
    ViewMode,
    question_matches,
    search_indices,
    status_of,
    visible_indices,
)

GRADED = (AnswerRecord("A", True), AnswerRecord("B", False), AnswerRecord("A", False))


def test_all_mode_empty_query_is_everything(catalog):
    assert visible_indices(catalog, fresh_ledger(3), ViewMode.ALL, "") == [0, 1, 2]
    assert visible_indices(catalog, GRADED, ViewMode.ALL, "   ") == [0, 1, 2]


def test_wrong_mode_only_shows_wrong(catalog):
    out = visible_indices(catalog, GRADED, ViewMode.WRONG_ONLY, "")
    assert out == [1, 2]
    assert all(GRADED[i].correct is False for i in out)


def test_search_matches_option_text_only_question(catalog):
    assert visible_indices(catalog, fresh_ledger(3), ViewMode.ALL, "zebra") == [2]
    assert visible_indices(catalog, GRADED, ViewMode.ALL, "zebra") == [2]


def test_search_is_trimmed_and_case_insensitive(catalog):
    assert search_indices(catalog, "  OCEAN ") == [1]
    assert search_indices(catalog, "nothing like this") == []


def test_search_narrows_wrong_mode(catalog):
    assert visible_indices(catalog, GRADED, ViewMode.WRONG_ONLY, "ocean") == [1]
    assert visible_indices(catalog, GRADED, ViewMode.WRONG_ONLY, "paris") == []


def test_options_are_joined_with_single_space(catalog):
    # "Indian Arctic Pacific" spans option boundaries
    assert question_matches(catalog[1], "arctic pac")
    assert not question_matches(catalog[1], "arcticpac")


def test_status_of_records():
    assert status_of(AnswerRecord()) == QuestionStatus.PENDING
    assert status_of(AnswerRecord("A", None)) == QuestionStatus.PENDING
    assert status_of(AnswerRecord("A", True)) == QuestionStatus.CORRECT
    assert status_of(AnswerRecord("A", False)) == QuestionStatus.WRONG


def test_cursor_targets_inside_view():
    visible = [1, 4, 7]
    assert position(4, visible) == 1
    assert previous_target(4, visible) == 1
    assert next_target(4, visible) == 7


def test_cursor_targets_at_edges():
    visible = [1, 4, 7]
    assert previous_target(1, visible) is None
    assert next_target(7, visible) is None


def test_cursor_outside_view_has_no_targets():
    visible = [1, 4, 7]
    assert position(3, visible) == -1
    assert previous_target(3, visible) is None
    assert next_target(3, visible) is None
    assert next_target(0, []) is None


def test_wrong_mode_correction():
    assert correct_for_wrong_mode(0, [2, 5]) == 2
    assert correct_for_wrong_mode(5, [2, 5]) == 5
    assert correct_for_wrong_mode(3, []) == 3
