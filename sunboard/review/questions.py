"""Per-area review question sets.

Each reviewer area asks a fixed, ordered list of questions. Select questions
that reference a project field (``field_ref``) use the question id as the
feedback ``field_name``, so the stored answer lines up with the project
attribute it proposes a value for.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from sunboard.core.vocabulary import ASSESSMENT_SCALES, DIFFICULTY, PRIORITY, REVIEWER_AREA, Rating
from sunboard.utils.exceptions import InvalidAnswerError, ValidationError

BOOLEAN_ANSWERS = ("yes", "no")


class QuestionType(str, Enum):
    SELECT = "select"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True)
class Question:
    id: str
    prompt: str
    description: str
    type: QuestionType
    scale: Rating | None = None
    field_ref: str | None = None

    @property
    def options(self) -> tuple[str, ...]:
        if self.type is QuestionType.SELECT and self.scale is not None:
            return self.scale.options
        if self.type is QuestionType.BOOLEAN:
            return BOOLEAN_ANSWERS
        return ()

    def validate_answer(self, value: str) -> str:
        """Return the answer if it fits this question, else raise InvalidAnswerError."""
        if not isinstance(value, str):
            raise InvalidAnswerError(f"Answer to '{self.id}' must be a string")
        if self.type is QuestionType.TEXT:
            return value
        if value not in self.options:
            raise InvalidAnswerError(
                f"'{value}' is not a valid answer to '{self.id}'. "
                f"Expected one of: {', '.join(self.options)}"
            )
        return value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.prompt,
            "description": self.description,
            "type": self.type.value,
            "options": list(self.options),
            "field_ref": self.field_ref,
        }


def _assessment(field: str, prompt: str, description: str) -> Question:
    return Question(
        id=field,
        prompt=prompt,
        description=description,
        type=QuestionType.SELECT,
        scale=ASSESSMENT_SCALES[field],
        field_ref=field,
    )


QUESTION_SETS: MappingProxyType[str, tuple[Question, ...]] = MappingProxyType(
    {
        "management": (
            Question(
                id="priority",
                prompt="Is the priority right?",
                description="Given everything else on the roadmap, how urgent is this project?",
                type=QuestionType.SELECT,
                scale=PRIORITY,
                field_ref="priority",
            ),
            _assessment(
                "strategic_alignment",
                "How well does this fit company strategy?",
                "Alignment with the pillars and this year's objectives.",
            ),
            _assessment(
                "roi_confidence",
                "How confident are you in the return?",
                "Consider both hard savings and revenue upside.",
            ),
            _assessment(
                "resource_justified",
                "Is the investment justified?",
                "Estimated hours versus expected impact.",
            ),
            _assessment(
                "time_horizon",
                "When should this deliver value?",
                "Short-term wins versus long-term foundations.",
            ),
            Question(
                id="should_continue",
                prompt="Should we keep investing in this project?",
                description="A plain go / no-go call.",
                type=QuestionType.BOOLEAN,
            ),
            Question(
                id="management_notes",
                prompt="Anything leadership should know?",
                description="Risks, dependencies or context not captured above.",
                type=QuestionType.TEXT,
            ),
        ),
        "operations_sales": (
            _assessment(
                "pain_point_level",
                "How painful is the problem today?",
                "Impact on SDRs, closers and installers in their daily work.",
            ),
            _assessment(
                "adoption_risk",
                "Will the team actually adopt this?",
                "Think about habits, training load and tool fatigue.",
            ),
            _assessment(
                "timeline_realistic",
                "Is the timeline realistic?",
                "Given operational constraints and peak seasons.",
            ),
            Question(
                id="process_documented",
                prompt="Is the current process documented?",
                description="Can someone new follow today's process without help?",
                type=QuestionType.BOOLEAN,
            ),
            Question(
                id="ops_notes",
                prompt="What would make this work on the floor?",
                description="Concrete suggestions from an operations or sales perspective.",
                type=QuestionType.TEXT,
            ),
        ),
        "product_tech": (
            Question(
                id="difficulty",
                prompt="How hard is this to build?",
                description="Overall technical difficulty as currently scoped.",
                type=QuestionType.SELECT,
                scale=DIFFICULTY,
                field_ref="difficulty",
            ),
            _assessment(
                "task_list_quality",
                "Is the task list good enough to start?",
                "Are tasks concrete, sequenced and sized?",
            ),
            _assessment(
                "tech_debt_risk",
                "How much tech debt could this create?",
                "Shortcuts, integrations and maintenance burden.",
            ),
            _assessment(
                "data_readiness",
                "Is the data ready?",
                "Availability and quality of the data this project depends on.",
            ),
            Question(
                id="feasible_as_scoped",
                prompt="Is it feasible as scoped?",
                description="Could the team deliver this without changing scope?",
                type=QuestionType.BOOLEAN,
            ),
            Question(
                id="tech_notes",
                prompt="Technical notes",
                description="Architecture concerns, suggested approach, missing tasks.",
                type=QuestionType.TEXT,
            ),
        ),
    }
)


def questions_for(area: str) -> tuple[Question, ...]:
    if area not in REVIEWER_AREA:
        raise ValidationError(
            f"Unknown reviewer area '{area}'. Expected one of: {', '.join(REVIEWER_AREA)}"
        )
    return QUESTION_SETS[area]


def question_count(area: str) -> int:
    return len(questions_for(area))


def find_question(area: str, question_id: str) -> Question | None:
    for question in questions_for(area):
        if question.id == question_id:
            return question
    return None
