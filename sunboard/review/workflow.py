"""Reviewer-side walkthrough of the pending-project queue.

The reviewer picks an area, gets the server-ordered list of projects still
pending for them, and steps through it with a cursor. Answers and comments
update local state immediately and are written to the API in the background.
A failed write is logged and dropped; nothing is retried, and nothing the
reviewer does waits on a write except ``complete()``.
"""

import asyncio
import logging
from collections.abc import Coroutine
from enum import Enum
from pathlib import Path
from typing import Any

from sunboard.client.http import SunboardHTTPClient
from sunboard.core.vocabulary import REVIEWER_AREA
from sunboard.review.preferences import DEFAULT_PATH, ReviewerPreferences
from sunboard.review.questions import find_question, question_count
from sunboard.utils.exceptions import TransientIOError, ValidationError

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    IDLE = "idle"
    REVIEWING = "reviewing"
    FINISHED = "finished"


class ReviewWorkflow:
    """Queue cursor, per-project session and optimistic answers for one reviewer."""

    def __init__(
        self,
        client: SunboardHTTPClient,
        reviewer_id: str,
        preferences: ReviewerPreferences | None = None,
        preferences_path: Path = DEFAULT_PATH,
    ) -> None:
        self._client = client
        self.reviewer_id = reviewer_id
        self.preferences = preferences or ReviewerPreferences()
        self._preferences_path = preferences_path

        self.state = WorkflowState.IDLE
        self.projects: list[dict] = []
        self.stats: dict[str, int] = {}
        self._cursor = 0

        self.session_id: str | None = None
        self.answers: dict[str, dict[str, Any]] = {}
        self.comments: list[dict[str, Any]] = []

        self._session_lock = asyncio.Lock()
        self._pending_writes: set[asyncio.Task] = set()

    # --- Queue ---

    @property
    def area(self) -> str | None:
        return self.preferences.reviewer_area

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_project(self) -> dict | None:
        if self.state is not WorkflowState.REVIEWING:
            return None
        if 0 <= self._cursor < len(self.projects):
            return self.projects[self._cursor]
        return None

    @property
    def is_finished(self) -> bool:
        return self.state is WorkflowState.FINISHED

    async def select_area(self, area: str) -> None:
        """Switch reviewer area and reload the queue from the start."""
        REVIEWER_AREA.validate(area)
        self.preferences.reviewer_area = area
        self.preferences.save(self._preferences_path)
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the pending queue for the current area and rewind to its start."""
        if self.area is None:
            raise ValidationError("Select a reviewer area before loading reviews")

        data = await self._client.get(
            "/reviews",
            params={"reviewer_id": self.reviewer_id, "reviewer_area": self.area},
        )
        self.projects = list(data.get("pendingReview", []))
        self.stats = dict(data.get("stats", {}))
        self._cursor = 0
        self._leave_project()
        self.state = WorkflowState.REVIEWING if self.projects else WorkflowState.FINISHED
        logger.info(
            "Loaded %d pending projects",
            len(self.projects),
            extra={"reviewer_id": self.reviewer_id, "reviewer_area": self.area},
        )

    def _leave_project(self) -> None:
        # An abandoned session stays in_progress server-side and is resumed on revisit
        self.session_id = None
        self.answers = {}
        self.comments = []

    def _move_to(self, index: int) -> None:
        if index != self._cursor:
            self._cursor = index
            self._leave_project()

    def next(self) -> bool:
        """Move to the next project; does nothing on the last one."""
        if self.current_project is None or self._cursor >= len(self.projects) - 1:
            return False
        self._move_to(self._cursor + 1)
        return True

    skip = next

    def previous(self) -> bool:
        """Move to the previous project; does nothing on the first one."""
        if self.current_project is None or self._cursor == 0:
            return False
        self._move_to(self._cursor - 1)
        return True

    # --- Session ---

    async def ensure_session(self) -> str | None:
        """Find or create the session for the current project.

        Returns None if there is no current project or the API call failed.
        """
        async with self._session_lock:
            if self.session_id:
                return self.session_id
            project = self.current_project
            if project is None:
                return None

            try:
                data = await self._client.post(
                    "/reviews",
                    {
                        "project_id": project["id"],
                        "reviewer_id": self.reviewer_id,
                        "reviewer_area": self.area,
                    },
                )
            except TransientIOError as exc:
                logger.warning(
                    "Could not start review session: %s",
                    exc,
                    extra={"project_id": project["id"], "reviewer_id": self.reviewer_id},
                )
                return None

            # The reviewer may have moved on while the request was in flight
            if self.current_project is project:
                self.session_id = data["id"]
            return data["id"]

    # --- Answers and comments ---

    async def answer(self, question_id: str, value: str, comment: str | None = None) -> None:
        """Record an answer locally and write it to the API in the background."""
        question = find_question(self.area, question_id)
        if question is None:
            raise ValidationError(f"Unknown question '{question_id}' for area '{self.area}'")
        question.validate_answer(value)

        project = self.current_project
        if project is None:
            return
        self.answers[question_id] = {"value": value, "comment": comment}

        session_id = await self.ensure_session()
        if session_id is None:
            logger.warning(
                "No review session; answer to %s kept locally only",
                question_id,
                extra={"project_id": project["id"]},
            )
            return

        current = project.get(question.field_ref) if question.field_ref else None
        self._dispatch(
            self._write(
                "/reviews/feedback",
                {
                    "review_session_id": session_id,
                    "field_name": question_id,
                    "current_value": None if current in (None, "") else str(current),
                    "proposed_value": value,
                    "comment": comment,
                },
            )
        )

    async def comment(self, content: str, task_id: str | None = None) -> None:
        """Add a comment on the current project, or on one of its tasks."""
        content = content.strip()
        project = self.current_project
        if not content or project is None:
            return
        self.comments.append({"content": content, "task_id": task_id})

        session_id = await self.ensure_session()
        if session_id is None:
            logger.warning(
                "No review session; comment kept locally only",
                extra={"project_id": project["id"]},
            )
            return

        self._dispatch(
            self._write(
                "/reviews/comments",
                {
                    "review_session_id": session_id,
                    "project_id": project["id"],
                    "task_id": task_id,
                    "content": content,
                },
            )
        )

    def answered_fraction(self) -> float:
        if self.area is None:
            return 0.0
        return len(self.answers) / question_count(self.area)

    def _dispatch(self, write: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(write)
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, path: str, payload: dict[str, Any]) -> None:
        try:
            await self._client.post(path, payload)
        except TransientIOError as exc:
            logger.warning(
                "Review write to %s failed: %s",
                path,
                exc,
                extra={"session_id": payload.get("review_session_id")},
            )

    async def drain(self) -> None:
        """Wait for every background write dispatched so far."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    # --- Completion ---

    async def complete(self) -> bool:
        """Mark the current project's review completed and advance.

        Unanswered questions do not block completion. Returns False if there
        is nothing to complete or the API rejected the request.
        """
        project = self.current_project
        if project is None:
            return False
        session_id = await self.ensure_session()
        if session_id is None:
            return False
        await self.drain()

        try:
            await self._client.put("/reviews", {"id": session_id, "status": "completed"})
        except TransientIOError as exc:
            logger.warning(
                "Could not complete review session: %s",
                exc,
                extra={"session_id": session_id, "project_id": project["id"]},
            )
            return False

        # The session is already completed server-side from here on
        streak = self.preferences.record_completion()
        try:
            self.preferences.save(self._preferences_path)
        except OSError as exc:
            logger.warning("Could not save reviewer preferences: %s", exc)
        logger.info(
            "Completed review (streak %d)",
            streak,
            extra={"session_id": session_id, "project_id": project["id"]},
        )

        reviewed = self.stats.get("reviewedProjects", 0) + 1
        total = self.stats.get("totalProjects", 0)
        self.stats.update(
            reviewedProjects=reviewed,
            pendingProjects=max(self.stats.get("pendingProjects", 0) - 1, 0),
            progress=round(reviewed * 100 / total) if total else 0,
        )

        if self._cursor < len(self.projects) - 1:
            self._move_to(self._cursor + 1)
        else:
            self._leave_project()
            self.state = WorkflowState.FINISHED
        return True
