"""Tests for per-area question sets and answer validation."""

import pytest

from sunboard.core.vocabulary import ASSESSMENT_SCALES, PRIORITY, REVIEWER_AREA
from sunboard.review.questions import (
    QUESTION_SETS,
    QuestionType,
    find_question,
    question_count,
    questions_for,
)
from sunboard.utils.exceptions import InvalidAnswerError, ValidationError


def test_every_area_has_a_question_set():
    assert set(QUESTION_SETS) == set(REVIEWER_AREA)
    for area in REVIEWER_AREA:
        assert question_count(area) == len(questions_for(area)) > 0


def test_question_sets_are_immutable():
    with pytest.raises(TypeError):
        QUESTION_SETS["management"] = ()


def test_question_ids_unique_within_area():
    for area, questions in QUESTION_SETS.items():
        ids = [q.id for q in questions]
        assert len(ids) == len(set(ids)), area


def test_assessment_questions_use_field_scale_in_order():
    question = find_question("product_tech", "data_readiness")
    assert question.type is QuestionType.SELECT
    assert question.field_ref == "data_readiness"
    assert question.options == ASSESSMENT_SCALES["data_readiness"].options


def test_priority_question_uses_priority_rank_order():
    question = find_question("management", "priority")
    assert question.options == PRIORITY.options


def test_select_answer_validation():
    question = find_question("operations_sales", "adoption_risk")
    assert question.validate_answer("low_risk") == "low_risk"
    with pytest.raises(InvalidAnswerError):
        question.validate_answer("catastrophic")


def test_boolean_answers():
    question = find_question("management", "should_continue")
    assert question.options == ("yes", "no")
    with pytest.raises(InvalidAnswerError):
        question.validate_answer("maybe")


def test_text_answers_accept_anything():
    question = find_question("product_tech", "tech_notes")
    assert question.options == ()
    assert question.validate_answer("Needs a queue in front of the CRM API")


def test_unknown_area_raises():
    with pytest.raises(ValidationError):
        questions_for("finance")


def test_find_question_unknown_id():
    assert find_question("management", "data_readiness") is None


def test_to_dict_shape():
    data = find_question("management", "priority").to_dict()
    assert data["id"] == "priority"
    assert data["type"] == "select"
    assert data["options"] == ["critical", "high", "medium", "low"]
    assert data["field_ref"] == "priority"
