"""Reviewer preferences persisted between runs of the review CLI."""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from pathlib import Path

from sunboard.core.vocabulary import REVIEWER_AREA

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".sunboard" / "reviewer.json"


@dataclass
class ReviewerPreferences:
    reviewer_area: str | None = None
    streak: int = 0
    last_review_date: str | None = None

    @classmethod
    def load(cls, path: Path = DEFAULT_PATH) -> "ReviewerPreferences":
        """Read preferences from ``path``; a missing or unreadable file gives defaults."""
        try:
            data = json.loads(path.read_text())
        except FileNotFoundError:
            return cls()
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", path, exc)
            return cls()

        if not isinstance(data, dict):
            logger.warning("Ignoring preferences at %s: expected a JSON object", path)
            return cls()

        try:
            streak = int(data.get("streak", 0))
            last_review_date = data.get("last_review_date")
            if last_review_date is not None:
                last_review_date = date.fromisoformat(last_review_date).isoformat()
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed preferences at %s: %s", path, exc)
            return cls()

        area = data.get("reviewer_area")
        if area not in REVIEWER_AREA:
            area = None
        return cls(reviewer_area=area, streak=max(streak, 0), last_review_date=last_review_date)

    def save(self, path: Path = DEFAULT_PATH) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), indent=2))

    def record_completion(self, today: date | None = None) -> int:
        """Update the daily streak for a completed review and return it.

        Reviewing again on the same day keeps the streak; reviewing on the day
        after the last review extends it; any longer gap starts over at 1.
        """
        today = today or date.today()
        try:
            last = date.fromisoformat(self.last_review_date) if self.last_review_date else None
        except ValueError:
            last = None

        if last == today:
            self.streak = max(self.streak, 1)
        elif last is not None and today - last == timedelta(days=1):
            self.streak += 1
        else:
            self.streak = 1

        self.last_review_date = today.isoformat()
        return self.streak
