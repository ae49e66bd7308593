"""Models - modelos SQLAlchemy"""
from app.models.player import Player
from app.models.match import Match
from app.models.match_player import MatchPlayer

__all__ = [
    "Player",
    "Match",
    "MatchPlayer",
]
