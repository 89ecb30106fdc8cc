"""Closed vocabularies for every enumerated field.

Each vocabulary is a ``Rating``: an ordered tuple of option values. The order
is meaningful; the query engine sorts by position, not alphabetically, and
the review question sets present options in this order.
"""

from collections.abc import Iterator

from sunboard.utils.exceptions import ValidationError


class Rating:
    """An ordered, closed set of string options."""

    __slots__ = ("name", "options")

    def __init__(self, name: str, options: tuple[str, ...]) -> None:
        if len(set(options)) != len(options):
            raise ValueError(f"Duplicate options in {name}")
        self.name = name
        self.options = options

    def __contains__(self, value: object) -> bool:
        return value in self.options

    def __iter__(self) -> Iterator[str]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)

    def __repr__(self) -> str:
        return f"Rating({self.name!r}, {self.options!r})"

    def rank(self, value: object) -> int | None:
        """Position of ``value`` in the scale, or None if it isn't an option."""
        try:
            return self.options.index(value)
        except ValueError:
            return None

    @property
    def pattern(self) -> str:
        """Regex accepted by pydantic ``Field(pattern=...)``."""
        return "^(" + "|".join(self.options) + ")$"

    def validate(self, value: str) -> str:
        if value not in self.options:
            raise ValidationError(
                f"Invalid {self.name} '{value}'. Expected one of: {', '.join(self.options)}"
            )
        return value


PROJECT_STATUS = Rating(
    "status", ("idea", "planning", "in_progress", "on_hold", "completed", "cancelled")
)
PRIORITY = Rating("priority", ("critical", "high", "medium", "low"))
DIFFICULTY = Rating("difficulty", ("easy", "medium", "hard"))

TASK_PHASE = Rating(
    "phase",
    ("discovery", "planning", "development", "testing", "training", "rollout", "monitoring"),
)
TASK_STATUS = Rating(
    "status", ("not_started", "in_progress", "blocked", "in_review", "completed")
)
AI_POTENTIAL = Rating("ai_potential", ("high", "medium", "low", "none"))

REVIEWER_AREA = Rating("reviewer_area", ("management", "operations_sales", "product_tech"))
SESSION_STATUS = Rating("session status", ("in_progress", "completed"))

# Project assessment fields: null means "not yet assessed"
ASSESSMENT_SCALES: dict[str, Rating] = {
    scale.name: scale
    for scale in (
        Rating("time_horizon", ("short", "medium", "long")),
        Rating("task_list_quality", ("needs_work", "acceptable", "well_structured")),
        Rating("pain_point_level", ("low", "medium", "high")),
        Rating("adoption_risk", ("high_risk", "medium_risk", "low_risk")),
        Rating("roi_confidence", ("low", "medium", "high")),
        Rating("strategic_alignment", ("weak", "moderate", "strong")),
        Rating("resource_justified", ("poor", "acceptable", "strong")),
        Rating("timeline_realistic", ("too_aggressive", "realistic", "conservative")),
        Rating("tech_debt_risk", ("high", "medium", "low")),
        Rating("data_readiness", ("not_ready", "partial", "ready")),
    )
}

ASSESSMENT_FIELDS = tuple(ASSESSMENT_SCALES)
