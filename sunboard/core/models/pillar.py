"""Pillar model: a strategic grouping tag for projects."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from sunboard.core.database.base import Base


class Pillar(Base):
    __tablename__ = "pillars"

    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=False, default="#6366F1")
    icon = Column(String(50), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    projects = relationship("Project", back_populates="pillar", lazy="select")

    def __repr__(self) -> str:
        return f"<Pillar(id={self.id}, slug='{self.slug}')>"
