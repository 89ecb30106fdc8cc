"""Review workflow API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from sunboard.api.dependencies import get_review_service
from sunboard.core.schemas.review import (
    FeedbackCreate,
    FeedbackResponse,
    PendingReviewResponse,
    ReviewCommentCreate,
    ReviewCommentResponse,
    ReviewSessionCreate,
    ReviewSessionResponse,
    ReviewSessionUpdate,
)
from sunboard.core.services import ReviewService
from sunboard.core.vocabulary import REVIEWER_AREA
from sunboard.review.questions import QUESTION_SETS, questions_for
from sunboard.utils.exceptions import (
    FeedbackNotFoundError,
    NotFoundError,
    ProjectNotFoundError,
    ReviewSessionNotFoundError,
)

router = APIRouter()


@router.get("/", response_model=PendingReviewResponse)
async def get_pending_reviews(
    reviewer_id: str = Query(..., min_length=1),
    reviewer_area: str | None = Query(None, pattern=REVIEWER_AREA.pattern),
    review_service: ReviewService = Depends(get_review_service),
) -> dict:
    """Projects split into pending and completed for one reviewer.

    Order is stable across calls, newest project first.
    """
    return await review_service.get_pending(reviewer_id, reviewer_area)


@router.post("/", response_model=ReviewSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_review_session(
    session_data: ReviewSessionCreate,
    response: Response,
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewSessionResponse:
    """Find or create the review session for (reviewer, project, area).

    Returns 201 when a session was created and 200 when an existing one
    was returned.
    """
    try:
        review_session, created = await review_service.start_session(session_data)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {session_data.project_id} not found",
        )
    if not created:
        response.status_code = status.HTTP_200_OK
    return ReviewSessionResponse.model_validate(review_session)


@router.put("/", response_model=ReviewSessionResponse)
async def complete_review_session(
    session_data: ReviewSessionUpdate,
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewSessionResponse:
    """Mark a review session completed."""
    try:
        review_session = await review_service.complete_session(session_data.id)
    except ReviewSessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Review session {session_data.id} not found",
        )
    return ReviewSessionResponse.model_validate(review_session)


@router.get("/questions")
async def get_questions(
    reviewer_area: str | None = Query(None, pattern=REVIEWER_AREA.pattern),
) -> dict:
    """Question set for one area, or every area when none is given."""
    if reviewer_area:
        return {
            "reviewer_area": reviewer_area,
            "questions": [q.to_dict() for q in questions_for(reviewer_area)],
        }
    return {
        area: [q.to_dict() for q in questions]
        for area, questions in QUESTION_SETS.items()
    }


@router.get("/progress")
async def get_review_progress(
    reviewer_id: str | None = Query(None),
    reviewer_area: str | None = Query(None, pattern=REVIEWER_AREA.pattern),
    review_service: ReviewService = Depends(get_review_service),
) -> dict:
    return await review_service.get_progress(reviewer_id, reviewer_area)


@router.get("/admin")
async def get_review_overview(
    recent_limit: int = Query(default=20, ge=1, le=100),
    review_service: ReviewService = Depends(get_review_service),
) -> dict:
    """Review coverage across every reviewer, for the admin dashboard."""
    return await review_service.get_admin_overview(recent_limit)


@router.get("/feedback", response_model=list[FeedbackResponse])
async def list_feedback(
    review_session_id: UUID | None = Query(None),
    project_id: UUID | None = Query(None),
    review_service: ReviewService = Depends(get_review_service),
) -> list[FeedbackResponse]:
    """Feedback for one session, or for every session on a project."""
    feedback = await review_service.list_feedback(review_session_id, project_id)
    return [FeedbackResponse.model_validate(f) for f in feedback]


@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    feedback_data: FeedbackCreate,
    response: Response,
    review_service: ReviewService = Depends(get_review_service),
) -> FeedbackResponse:
    """Record an answer. Resubmitting the same field overwrites it."""
    try:
        feedback, created = await review_service.submit_feedback(feedback_data)
    except ReviewSessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Review session {feedback_data.review_session_id} not found",
        )
    if not created:
        response.status_code = status.HTTP_200_OK
    return FeedbackResponse.model_validate(feedback)


@router.delete("/feedback/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback(
    feedback_id: UUID,
    review_service: ReviewService = Depends(get_review_service),
) -> None:
    try:
        await review_service.delete_feedback(feedback_id)
    except FeedbackNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feedback {feedback_id} not found",
        )


@router.get("/comments", response_model=list[ReviewCommentResponse])
async def list_comments(
    review_session_id: UUID | None = Query(None),
    project_id: UUID | None = Query(None),
    review_service: ReviewService = Depends(get_review_service),
) -> list[ReviewCommentResponse]:
    comments = await review_service.list_comments(review_session_id, project_id)
    return [ReviewCommentResponse.model_validate(c) for c in comments]


@router.post(
    "/comments", response_model=ReviewCommentResponse, status_code=status.HTTP_201_CREATED
)
async def add_comment(
    comment_data: ReviewCommentCreate,
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewCommentResponse:
    """Add a comment to a review session, optionally about one task."""
    try:
        comment = await review_service.add_comment(comment_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ReviewCommentResponse.model_validate(comment)
