"""Schemas de estatísticas derivadas"""
from typing import List
from datetime import datetime
from app.schemas.base import CamelModel
from app.schemas.common import PlayerSummary, MatchSummary
from app.schemas.match import MatchResponse


class PlayerRanking(PlayerSummary):
    """Jogador com números derivados das participações"""
    matches_played: int
    wins: int
    losses: int
    draws: int
    win_loss_ratio: float
    win_percentage: float
    goals_scored: int
    goals_conceded: int
    goal_ratio: float


class RecentMatch(MatchSummary):
    """Partida vista pelo lado de um jogador"""
    player_team: str
    result: str
    gamelles_scored: int
    own_goals_scored: int
    is_player_of_the_match: bool


class PlayerStatsResponse(PlayerRanking):
    """Ficha completa do jogador"""
    recent_matches: List[RecentMatch] = []


class MatchStatsResponse(CamelModel):
    """Resumo das partidas"""
    total_matches: int
    recent_matches: List[MatchResponse] = []


class CounterDrift(CamelModel):
    """Contador armazenado divergente do recalculado"""
    player_id: int
    name: str
    field: str
    stored: int
    expected: int


class IntegrityReport(CamelModel):
    """Resultado da reconciliação dos contadores"""
    timestamp: datetime
    status: str
    players_checked: int
    issues_found: int
    repaired: bool
    issues: List[CounterDrift] = []
