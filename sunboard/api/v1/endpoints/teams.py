"""Team API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from sunboard.api.dependencies import get_team_repository
from sunboard.core.repositories import TeamRepository
from sunboard.core.schemas.team import TeamCreate, TeamResponse, TeamUpdate

router = APIRouter()


@router.get("/", response_model=list[TeamResponse])
async def list_teams(
    repo: TeamRepository = Depends(get_team_repository),
) -> list[TeamResponse]:
    """List teams by name."""
    return [TeamResponse.model_validate(t) for t in await repo.get_ordered()]


@router.post("/", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(
    team_data: TeamCreate,
    repo: TeamRepository = Depends(get_team_repository),
) -> TeamResponse:
    """Create a new team."""
    return TeamResponse.model_validate(await repo.create(team_data))


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: UUID,
    repo: TeamRepository = Depends(get_team_repository),
) -> TeamResponse:
    team = await repo.get_by_id(team_id)
    if not team:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {team_id} not found",
        )
    return TeamResponse.model_validate(team)


@router.patch("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: UUID,
    team_data: TeamUpdate,
    repo: TeamRepository = Depends(get_team_repository),
) -> TeamResponse:
    team = await repo.update(team_id, team_data)
    if not team:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {team_id} not found",
        )
    return TeamResponse.model_validate(team)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: UUID,
    repo: TeamRepository = Depends(get_team_repository),
) -> None:
    """Delete a team. Owned projects and tasks become unowned."""
    if not await repo.delete(team_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {team_id} not found",
        )
