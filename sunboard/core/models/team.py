"""Team model."""

from sqlalchemy import Column, String, Text

from sunboard.core.database.base import Base


class Team(Base):
    __tablename__ = "teams"

    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=False, default="#3B82F6")

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, slug='{self.slug}')>"
