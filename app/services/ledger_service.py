"""
Ledger de estatísticas dos jogadores.

Único ponto de escrita dos contadores agregados de Player. Cada operação
roda em uma transação: ou todas as escritas (partida, participações e
contadores) são confirmadas, ou nenhuma.

A contribuição de um participante é sempre calculada a partir dos valores
gravados na partida e na linha MatchPlayer, de modo que `reverse` desfaz
exatamente o que `apply` fez.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Iterable, Union
import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.data_integrity import DataIntegrityChecker
from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.models.match import Match
from app.models.match_player import MatchPlayer
from app.repositories.match_repository import MatchRepository
from app.repositories.player_repository import PlayerRepository
from app.schemas.match import MatchCreate, MatchUpdate, MatchPlayerUpdate

logger = logging.getLogger(__name__)


def contribution(
    white_team_score: int,
    black_team_score: int,
    team: bool,
    gamelles_scored: int = 0,
    own_goals_scored: int = 0,
    is_player_of_the_match: bool = False,
) -> Dict[str, int]:
    """Quanto uma participação soma a cada contador do jogador"""
    deltas = {
        "gamelles_scored": gamelles_scored or 0,
        "own_goals_scored": own_goals_scored or 0,
        "player_of_the_match": 1 if is_player_of_the_match else 0,
    }
    if team:
        deltas["goals_scored_white"] = white_team_score
        deltas["goals_conceded_white"] = black_team_score
    else:
        deltas["goals_scored_black"] = black_team_score
        deltas["goals_conceded_black"] = white_team_score
    return deltas


def participation_contribution(match: Match, match_player: MatchPlayer) -> Dict[str, int]:
    """Contribuição de uma linha MatchPlayer já gravada"""
    return contribution(
        match.white_team_score,
        match.black_team_score,
        match_player.team,
        match_player.gamelles_scored,
        match_player.own_goals_scored,
        match_player.is_player_of_the_match,
    )


def negate(deltas: Dict[str, int]) -> Dict[str, int]:
    return {column: -value for column, value in deltas.items()}


def difference(new: Dict[str, int], old: Dict[str, int]) -> Dict[str, int]:
    """new - old, coluna a coluna (colunas ausentes valem 0)"""
    return {
        column: new.get(column, 0) - old.get(column, 0)
        for column in set(new) | set(old)
    }


class StatisticsLedger:
    """Mantém os contadores agregados consistentes com as participações"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.players = PlayerRepository(db)
        self.matches = MatchRepository(db)

    @staticmethod
    def _validate(schema, payload: Union[BaseModel, dict, None], label: str):
        if isinstance(payload, schema):
            return payload
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
                for error in e.errors()
            )
            raise ValidationError(f"Invalid {label}: {reasons}") from e

    @asynccontextmanager
    async def _transaction(self, operation: str):
        """Confirma ao final do bloco; qualquer erro desfaz tudo"""
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Violação de restrição em {operation}: {e.orig}")
            raise ConflictError(f"Constraint violation during {operation}") from e
        except Exception:
            await self.db.rollback()
            raise

    async def _shift(self, player_id: int, deltas: Dict[str, int]) -> None:
        updated = await self.players.shift_counters(player_id, deltas)
        if not updated:
            raise NotFoundError(f"Player {player_id} not found")

    async def _require_players(self, player_ids: Iterable[int]) -> None:
        player_ids = set(player_ids)
        missing = player_ids - await self.players.get_existing_ids(player_ids)
        if missing:
            raise NotFoundError(
                f"Player(s) not found: {', '.join(str(pid) for pid in sorted(missing))}"
            )

    async def apply(self, payload: Union[MatchCreate, dict]) -> Match:
        """
        Registra uma partida com seus participantes e soma a contribuição
        de cada um aos contadores do jogador.

        Raises:
            ValidationError: placar ou lista de jogadores ausente/inválida
            NotFoundError: algum playerId não existe
        """
        data = self._validate(MatchCreate, payload, "match data")

        async with self._transaction("match creation"):
            await self._require_players(p.player_id for p in data.players)

            match = Match(
                white_team_score=data.white_team_score,
                black_team_score=data.black_team_score,
                date=data.date or datetime.now(timezone.utc),
                players=[
                    MatchPlayer(
                        player_id=participant.player_id,
                        team=participant.team,
                        gamelles_scored=participant.gamelles_scored,
                        own_goals_scored=participant.own_goals_scored,
                        is_player_of_the_match=participant.is_player_of_the_match,
                    )
                    for participant in data.players
                ],
            )
            await self.matches.add(match)

            for participant in data.players:
                await self._shift(
                    participant.player_id,
                    contribution(
                        data.white_team_score,
                        data.black_team_score,
                        participant.team,
                        participant.gamelles_scored,
                        participant.own_goals_scored,
                        participant.is_player_of_the_match,
                    ),
                )
            match_id = match.id

        logger.info(
            f"Partida {match_id} registrada: {data.white_team_score} x "
            f"{data.black_team_score}, {len(data.players)} jogadores"
        )
        return await self.matches.get_by_id(match_id)

    async def reverse(self, match_id: int) -> None:
        """
        Desfaz a contribuição de cada participante (valores gravados na
        partida) e remove a partida; as participações saem em cascata.

        Raises:
            NotFoundError: partida inexistente
        """
        async with self._transaction("match deletion"):
            match = await self.matches.get_by_id(match_id)
            if not match:
                raise NotFoundError("Match not found")

            participants = list(match.players)
            for match_player in participants:
                await self._shift(
                    match_player.player_id,
                    negate(participation_contribution(match, match_player)),
                )
            await self.matches.delete(match)

        logger.info(f"Partida {match_id} e {len(participants)} participações removidas")

    async def rescore(self, match_id: int, payload: Union[MatchUpdate, dict]) -> Match:
        """Altera placar/data e ajusta os contadores de todos os participantes"""
        data = self._validate(MatchUpdate, payload, "match data")
        changes = data.model_dump(exclude_none=True)

        async with self._transaction("match update"):
            match = await self.matches.get_by_id(match_id)
            if not match:
                raise NotFoundError("Match not found")

            white = changes.get("white_team_score", match.white_team_score)
            black = changes.get("black_team_score", match.black_team_score)

            for match_player in match.players:
                old = participation_contribution(match, match_player)
                new = contribution(
                    white,
                    black,
                    match_player.team,
                    match_player.gamelles_scored,
                    match_player.own_goals_scored,
                    match_player.is_player_of_the_match,
                )
                await self._shift(match_player.player_id, difference(new, old))

            match.white_team_score = white
            match.black_team_score = black
            if "date" in changes:
                match.date = changes["date"]
            await self.db.flush()

        logger.info(f"Partida {match_id} atualizada: {white} x {black}")
        return await self.matches.get_by_id(match_id)

    async def update_participant(
        self,
        match_id: int,
        player_id: int,
        payload: Union[MatchPlayerUpdate, dict],
    ) -> MatchPlayer:
        """Edita uma participação trocando a contribuição antiga pela nova"""
        data = self._validate(MatchPlayerUpdate, payload, "match player data")
        changes = data.model_dump(exclude_none=True)

        async with self._transaction("match player update"):
            match_player = await self.matches.get_participation(match_id, player_id)
            if not match_player:
                raise NotFoundError("Match player relationship not found")

            old = participation_contribution(match_player.match, match_player)
            for key, value in changes.items():
                setattr(match_player, key, value)
            new = participation_contribution(match_player.match, match_player)

            await self._shift(player_id, difference(new, old))
            await self.db.flush()

        logger.info(f"Participação ({match_id}, {player_id}) atualizada: {sorted(changes)}")
        return await self.matches.get_participation(match_id, player_id)

    async def remove_participant(self, match_id: int, player_id: int) -> None:
        """Remove um jogador da partida descontando sua contribuição"""
        async with self._transaction("match player deletion"):
            match_player = await self.matches.get_participation(match_id, player_id)
            if not match_player:
                raise NotFoundError("Match player relationship not found")

            await self._shift(
                player_id,
                negate(participation_contribution(match_player.match, match_player)),
            )
            await self.db.delete(match_player)
            await self.db.flush()

        logger.info(f"Jogador {player_id} removido da partida {match_id}")

    async def reconcile(self, repair: bool = False) -> dict:
        """
        Recalcula os contadores a partir das participações e reporta
        divergências; com `repair=True` grava os valores recalculados.
        """
        async with self._transaction("reconciliation"):
            report = await self.db.run_sync(
                lambda session: DataIntegrityChecker(session).check_player_counters(repair=repair)
            )
        return report
