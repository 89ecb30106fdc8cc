"""Pillar API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from sunboard.api.dependencies import get_pillar_repository
from sunboard.core.repositories import PillarRepository
from sunboard.core.schemas.pillar import PillarCreate, PillarResponse, PillarUpdate

router = APIRouter()


@router.get("/", response_model=list[PillarResponse])
async def list_pillars(
    repo: PillarRepository = Depends(get_pillar_repository),
) -> list[PillarResponse]:
    """List pillars in display order."""
    return [PillarResponse.model_validate(p) for p in await repo.get_ordered()]


@router.post("/", response_model=PillarResponse, status_code=status.HTTP_201_CREATED)
async def create_pillar(
    pillar_data: PillarCreate,
    repo: PillarRepository = Depends(get_pillar_repository),
) -> PillarResponse:
    """Create a new pillar."""
    return PillarResponse.model_validate(await repo.create(pillar_data))


@router.get("/{pillar_id}", response_model=PillarResponse)
async def get_pillar(
    pillar_id: UUID,
    repo: PillarRepository = Depends(get_pillar_repository),
) -> PillarResponse:
    pillar = await repo.get_by_id(pillar_id)
    if not pillar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pillar {pillar_id} not found",
        )
    return PillarResponse.model_validate(pillar)


@router.patch("/{pillar_id}", response_model=PillarResponse)
async def update_pillar(
    pillar_id: UUID,
    pillar_data: PillarUpdate,
    repo: PillarRepository = Depends(get_pillar_repository),
) -> PillarResponse:
    pillar = await repo.update(pillar_id, pillar_data)
    if not pillar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pillar {pillar_id} not found",
        )
    return PillarResponse.model_validate(pillar)


@router.delete("/{pillar_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pillar(
    pillar_id: UUID,
    repo: PillarRepository = Depends(get_pillar_repository),
) -> None:
    """Delete a pillar. Its projects keep existing without one."""
    if not await repo.delete(pillar_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pillar {pillar_id} not found",
        )
