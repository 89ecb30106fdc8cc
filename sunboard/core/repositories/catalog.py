"""Pillar and team repositories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sunboard.core.models.pillar import Pillar
from sunboard.core.models.team import Team
from sunboard.core.repositories.base import BaseRepository, SlugRepositoryMixin
from sunboard.core.schemas.pillar import PillarCreate, PillarUpdate
from sunboard.core.schemas.team import TeamCreate, TeamUpdate


class PillarRepository(SlugRepositoryMixin, BaseRepository[Pillar, PillarCreate, PillarUpdate]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Pillar)

    async def get_ordered(self) -> list[Pillar]:
        stmt = select(Pillar).order_by(Pillar.order_index, Pillar.name)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class TeamRepository(SlugRepositoryMixin, BaseRepository[Team, TeamCreate, TeamUpdate]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Team)

    async def get_ordered(self) -> list[Team]:
        stmt = select(Team).order_by(Team.name)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
