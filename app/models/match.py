"""Modelo Match"""
from sqlalchemy import Column, Integer, DateTime, func
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class Match(BaseModel):
    """Modelo de Partida"""
    __tablename__ = "matches"

    white_team_score = Column(Integer, nullable=False)
    black_team_score = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Relationships
    players = relationship(
        "MatchPlayer",
        back_populates="match",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MatchPlayer.player_id",
    )

    def __repr__(self):
        return (
            f"<Match(id={self.id}, white={self.white_team_score}, "
            f"black={self.black_team_score})>"
        )
