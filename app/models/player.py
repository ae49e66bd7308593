"""Modelo Player"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

# Contadores agregados mantidos exclusivamente pelo StatisticsLedger
COUNTER_COLUMNS = (
    "goals_scored_white",
    "goals_conceded_white",
    "goals_scored_black",
    "goals_conceded_black",
    "gamelles_scored",
    "own_goals_scored",
    "player_of_the_match",
)


class Player(BaseModel):
    """Modelo de Jogador"""
    __tablename__ = "players"

    name = Column(String(255), nullable=False)

    goals_scored_white = Column(Integer, default=0, server_default="0", nullable=False)
    goals_conceded_white = Column(Integer, default=0, server_default="0", nullable=False)
    goals_scored_black = Column(Integer, default=0, server_default="0", nullable=False)
    goals_conceded_black = Column(Integer, default=0, server_default="0", nullable=False)
    gamelles_scored = Column(Integer, default=0, server_default="0", nullable=False)
    own_goals_scored = Column(Integer, default=0, server_default="0", nullable=False)
    player_of_the_match = Column(Integer, default=0, server_default="0", nullable=False)

    # Relationships
    matches = relationship(
        "MatchPlayer",
        back_populates="player",
        cascade="all",
        passive_deletes=True,
    )

    def counters(self) -> dict:
        """Snapshot dos contadores agregados"""
        return {column: getattr(self, column) or 0 for column in COUNTER_COLUMNS}

    def __repr__(self):
        return f"<Player(id={self.id}, name='{self.name}', potm={self.player_of_the_match})>"
