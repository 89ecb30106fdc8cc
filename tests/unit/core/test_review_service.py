"""Service-level tests for ReviewService against a real in-memory database."""

import uuid

import pytest

from sunboard.core.repositories import ProjectRepository, TaskRepository
from sunboard.core.repositories.review import (
    ReviewCommentRepository,
    ReviewFeedbackRepository,
    ReviewSessionRepository,
)
from sunboard.core.schemas import ProjectCreate
from sunboard.core.schemas.review import FeedbackCreate, ReviewSessionCreate
from sunboard.core.services.review import ReviewService
from sunboard.utils.exceptions import (
    InvalidAnswerError,
    ProjectNotFoundError,
    ReviewSessionNotFoundError,
    ValidationError,
)


@pytest.fixture
def service(db_session, bus):
    return ReviewService(
        ReviewSessionRepository(db_session),
        ReviewFeedbackRepository(db_session),
        ReviewCommentRepository(db_session),
        ProjectRepository(db_session),
        TaskRepository(db_session),
        events=bus,
    )


@pytest.fixture
async def project(db_session):
    return await ProjectRepository(db_session).create(
        ProjectCreate(title="SDR Portal"), slug="sdr-portal"
    )


def _session_data(project_id, area="product_tech"):
    return ReviewSessionCreate(project_id=project_id, reviewer_id="ana", reviewer_area=area)


async def test_start_session_creates_then_resumes(service, project, bus):
    first, created = await service.start_session(_session_data(project.id))
    second, created_again = await service.start_session(_session_data(project.id))

    assert created is True
    assert created_again is False
    assert second.id == first.id
    assert [e["type"] for e in bus.get_recent_events()] == ["review.started"]


async def test_concurrent_start_returns_the_winning_session(service, project, monkeypatch):
    winner, _ = await service.start_session(_session_data(project.id))

    # Simulate a request that read before the winner's insert committed
    real_get_open = service._sessions.get_open
    calls = []

    async def stale_then_real(*args):
        calls.append(args)
        if len(calls) == 1:
            return None
        return await real_get_open(*args)

    monkeypatch.setattr(service._sessions, "get_open", stale_then_real)

    loser, created = await service.start_session(_session_data(project.id))

    assert created is False
    assert loser.id == winner.id
    assert len(calls) == 2


async def test_start_session_unknown_project(service):
    with pytest.raises(ProjectNotFoundError):
        await service.start_session(_session_data(uuid.uuid4()))


async def test_complete_then_restart_returns_completed(service, project):
    review_session, _ = await service.start_session(_session_data(project.id))
    completed = await service.complete_session(review_session.id)
    assert completed.status == "completed"
    assert completed.completed_at is not None

    again, created = await service.start_session(_session_data(project.id))
    assert created is False
    assert again.id == review_session.id
    assert again.status == "completed"


async def test_complete_unknown_session(service):
    with pytest.raises(ReviewSessionNotFoundError):
        await service.complete_session(uuid.uuid4())


async def test_feedback_is_validated_against_the_session_area(service, project):
    review_session, _ = await service.start_session(_session_data(project.id, "management"))

    with pytest.raises(InvalidAnswerError):
        await service.submit_feedback(
            FeedbackCreate(
                review_session_id=review_session.id,
                field_name="priority",
                proposed_value="urgent",
            )
        )

    row, created = await service.submit_feedback(
        FeedbackCreate(
            review_session_id=review_session.id, field_name="priority", proposed_value="low"
        )
    )
    assert created is True
    assert row.proposed_value == "low"


async def test_feedback_overwrite_keeps_one_row(service, project):
    review_session, _ = await service.start_session(_session_data(project.id))
    for value in ("easy", "medium", "hard"):
        await service.submit_feedback(
            FeedbackCreate(
                review_session_id=review_session.id,
                field_name="difficulty",
                proposed_value=value,
            )
        )

    rows = await service.list_feedback(session_id=review_session.id)
    assert [r.proposed_value for r in rows] == ["hard"]


async def test_listing_needs_session_or_project(service):
    with pytest.raises(ValidationError):
        await service.list_feedback()
    with pytest.raises(ValidationError):
        await service.list_comments()


async def test_pending_rejects_unknown_area(service):
    with pytest.raises(ValidationError):
        await service.get_pending("ana", "finance")


async def test_progress_without_reviewer(service, project):
    progress = await service.get_progress()
    assert progress["totalProjects"] == 1
    assert progress["notReviewed"] == 1
    assert progress["reviewer"]["completedReviews"] == 0
    assert progress["progress"] == 0
