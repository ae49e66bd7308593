"""Modelo MatchPlayer"""
from sqlalchemy import Column, Integer, Boolean, ForeignKey, false
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import TimestampMixin


class MatchPlayer(TimestampMixin, Base):
    """Participação de um jogador em uma partida"""
    __tablename__ = "match_players"

    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), primary_key=True)
    player_id = Column(Integer, ForeignKey("players.id", ondelete="CASCADE"), primary_key=True, index=True)

    # True = time branco, False = time preto
    team = Column(Boolean, nullable=False)
    gamelles_scored = Column(Integer, default=0, server_default="0", nullable=False)
    own_goals_scored = Column(Integer, default=0, server_default="0", nullable=False)
    is_player_of_the_match = Column(Boolean, default=False, server_default=false(), nullable=False)

    # Relationships
    match = relationship("Match", back_populates="players")
    player = relationship("Player", back_populates="matches")

    def __repr__(self):
        return (
            f"<MatchPlayer(match_id={self.match_id}, player_id={self.player_id}, "
            f"team={'white' if self.team else 'black'})>"
        )
