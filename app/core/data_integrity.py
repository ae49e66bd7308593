"""Verificação de integridade dos contadores agregados"""
from sqlalchemy.orm import Session
from sqlalchemy import func, case
from pydantic.alias_generators import to_camel
from typing import Dict, Any, List
from datetime import datetime, timezone
import logging
from app.models.player import Player, COUNTER_COLUMNS
from app.models.match import Match
from app.models.match_player import MatchPlayer

logger = logging.getLogger(__name__)


class DataIntegrityChecker:
    """Recalcula os contadores de cada jogador a partir das participações"""

    def __init__(self, db: Session):
        self.db = db

    def expected_counters(self) -> List[tuple]:
        """Retorna (Player, {coluna: valor esperado}) para todos os jogadores"""
        white = MatchPlayer.team == True  # noqa: E712
        black = MatchPlayer.team == False  # noqa: E712
        potm = MatchPlayer.is_player_of_the_match == True  # noqa: E712

        def total(expression):
            return func.coalesce(func.sum(expression), 0)

        rows = (
            self.db.query(
                Player,
                total(case((white, Match.white_team_score), else_=0)),
                total(case((white, Match.black_team_score), else_=0)),
                total(case((black, Match.black_team_score), else_=0)),
                total(case((black, Match.white_team_score), else_=0)),
                total(MatchPlayer.gamelles_scored),
                total(MatchPlayer.own_goals_scored),
                total(case((potm, 1), else_=0)),
            )
            .outerjoin(MatchPlayer, MatchPlayer.player_id == Player.id)
            .outerjoin(Match, Match.id == MatchPlayer.match_id)
            .group_by(Player.id)
            .order_by(Player.id)
            .populate_existing()
            .all()
        )

        return [
            (player, dict(zip(COUNTER_COLUMNS, (int(value) for value in values))))
            for player, *values in rows
        ]

    def check_player_counters(self, repair: bool = False) -> Dict[str, Any]:
        """
        Compara contadores armazenados com a soma das participações.

        Com `repair=True` os contadores divergentes são sobrescritos pelos
        valores recalculados (o commit fica com quem chamou).
        """
        issues = []
        expected_rows = self.expected_counters()

        for player, expected in expected_rows:
            stored = player.counters()
            for column in COUNTER_COLUMNS:
                if stored[column] == expected[column]:
                    continue
                issues.append({
                    "player_id": player.id,
                    "name": player.name,
                    "field": to_camel(column),
                    "stored": stored[column],
                    "expected": expected[column],
                })
                if repair:
                    setattr(player, column, expected[column])

        if issues:
            logger.warning(
                f"{len(issues)} contadores divergentes em {len(expected_rows)} jogadores"
                f"{' (corrigidos)' if repair else ''}"
            )
            if repair:
                self.db.flush()

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": "ok" if not issues else ("repaired" if repair else "issues_found"),
            "players_checked": len(expected_rows),
            "issues_found": len(issues),
            "repaired": repair and bool(issues),
            "issues": issues,
        }
