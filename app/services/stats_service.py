"""Service de estatísticas derivadas (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, Dict, List
from app.core.exceptions import NotFoundError, ValidationError
from app.models.player import Player
from app.repositories.match_repository import MatchRepository
from app.repositories.player_repository import PlayerRepository
from app.schemas.common import PlayerSummary
from app.schemas.match import MatchResponse
from app.schemas.stats import (
    PlayerRanking,
    PlayerStatsResponse,
    RecentMatch,
    MatchStatsResponse,
)

RECENT_MATCHES_LIMIT = 10

# Critérios de ordenação do ranking
SORT_KEYS: Dict[str, Callable[[PlayerRanking], tuple]] = {
    "playerOfTheMatch": lambda r: (r.player_of_the_match, r.gamelles_scored),
    "gamelles": lambda r: (r.gamelles_scored,),
    "ownGoals": lambda r: (r.own_goals_scored,),
    "winrate": lambda r: (r.win_loss_ratio,),
    "goalRatio": lambda r: (r.goal_ratio,),
}


def match_result(white_team_score: int, black_team_score: int, team: bool) -> str:
    """'win', 'loss' ou 'draw' do ponto de vista do time informado"""
    if white_team_score == black_team_score:
        return "draw"
    white_won = white_team_score > black_team_score
    return "win" if white_won == team else "loss"


def ratio(numerator: int, denominator: int) -> float:
    """numerator/denominator com 2 casas; sem denominador vale o próprio numerador"""
    if denominator > 0:
        return round(numerator / denominator, 2)
    return float(numerator)


def build_ranking(player: Player) -> PlayerRanking:
    """Números derivados das participações e contadores do jogador"""
    results = [
        match_result(mp.match.white_team_score, mp.match.black_team_score, mp.team)
        for mp in player.matches
    ]
    wins = results.count("win")
    losses = results.count("loss")
    draws = results.count("draw")
    played = len(results)

    goals_scored = player.goals_scored_white + player.goals_scored_black
    goals_conceded = player.goals_conceded_white + player.goals_conceded_black

    return PlayerRanking(
        **PlayerSummary.model_validate(player).model_dump(),
        matches_played=played,
        wins=wins,
        losses=losses,
        draws=draws,
        win_loss_ratio=ratio(wins, losses),
        win_percentage=round(wins / played * 100, 1) if played else 0.0,
        goals_scored=goals_scored,
        goals_conceded=goals_conceded,
        goal_ratio=ratio(goals_scored, goals_conceded),
    )


class StatsService:
    """Service async para rankings e resumos"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.players = PlayerRepository(db)
        self.matches = MatchRepository(db)

    async def get_leaderboard(
        self,
        sort: str = "playerOfTheMatch",
        direction: str = "desc",
    ) -> List[PlayerRanking]:
        """Ranking dos jogadores; padrão: jogador da partida e gamelles, decrescente"""
        if sort not in SORT_KEYS:
            raise ValidationError(f"Invalid sort field. Allowed: {sorted(SORT_KEYS)}")
        if direction not in ("asc", "desc"):
            raise ValidationError("Invalid direction. Allowed: asc, desc")

        rankings = [build_ranking(player) for player in await self.players.get_all()]
        return sorted(rankings, key=SORT_KEYS[sort], reverse=direction == "desc")

    async def get_player_stats(self, player_id: int) -> PlayerStatsResponse:
        """Ficha do jogador com as partidas mais recentes"""
        player = await self.players.get_by_id(player_id)
        if not player:
            raise NotFoundError("Player not found")

        participations = sorted(
            player.matches,
            key=lambda mp: (mp.match.date, mp.match.id),
            reverse=True,
        )[:RECENT_MATCHES_LIMIT]

        recent = [
            RecentMatch(
                id=mp.match.id,
                white_team_score=mp.match.white_team_score,
                black_team_score=mp.match.black_team_score,
                date=mp.match.date,
                player_team="white" if mp.team else "black",
                result=match_result(mp.match.white_team_score, mp.match.black_team_score, mp.team),
                gamelles_scored=mp.gamelles_scored,
                own_goals_scored=mp.own_goals_scored,
                is_player_of_the_match=mp.is_player_of_the_match,
            )
            for mp in participations
        ]
        return PlayerStatsResponse(**build_ranking(player).model_dump(), recent_matches=recent)

    async def get_match_stats(self) -> MatchStatsResponse:
        """Total de partidas e as mais recentes"""
        recent = await self.matches.get_recent(RECENT_MATCHES_LIMIT)
        return MatchStatsResponse(
            total_matches=await self.matches.count(),
            recent_matches=[MatchResponse.model_validate(match) for match in recent],
        )
