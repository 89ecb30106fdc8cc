"""Reviewer-side workflow: question sets, preferences and the review walkthrough."""

from sunboard.review.preferences import ReviewerPreferences
from sunboard.review.questions import (
    QUESTION_SETS,
    Question,
    QuestionType,
    find_question,
    question_count,
    questions_for,
)
from sunboard.review.workflow import ReviewWorkflow, WorkflowState

__all__ = [
    "QUESTION_SETS",
    "Question",
    "QuestionType",
    "ReviewWorkflow",
    "ReviewerPreferences",
    "WorkflowState",
    "find_question",
    "question_count",
    "questions_for",
]
