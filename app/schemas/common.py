"""Representações resumidas compartilhadas entre jogadores e partidas"""
from datetime import datetime
from app.schemas.base import CamelModel


class PlayerSummary(CamelModel):
    """Jogador com seus contadores agregados"""
    id: int
    name: str
    goals_scored_white: int
    goals_conceded_white: int
    goals_scored_black: int
    goals_conceded_black: int
    gamelles_scored: int
    own_goals_scored: int
    player_of_the_match: int


class MatchSummary(CamelModel):
    """Partida sem os participantes"""
    id: int
    white_team_score: int
    black_team_score: int
    date: datetime


class ParticipationFields(CamelModel):
    """Campos de uma linha MatchPlayer"""
    match_id: int
    player_id: int
    team: bool
    gamelles_scored: int
    own_goals_scored: int
    is_player_of_the_match: bool
