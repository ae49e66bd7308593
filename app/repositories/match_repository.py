"""Repository de Match (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select, func
from typing import List, Optional
from app.models.match import Match
from app.models.match_player import MatchPlayer

# Partida com participações e os jogadores
WITH_PLAYERS = selectinload(Match.players).selectinload(MatchPlayer.player)


class MatchRepository:
    """Repository async para operações de banco com Match e MatchPlayer"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List[Match]:
        """Obtém todas as partidas em ordem cronológica"""
        result = await self.db.execute(
            select(Match)
            .options(WITH_PLAYERS)
            .order_by(Match.date.asc(), Match.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_id(self, match_id: int) -> Optional[Match]:
        """Obtém partida por ID"""
        result = await self.db.execute(
            select(Match)
            .options(WITH_PLAYERS)
            .filter(Match.id == match_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_recent(self, limit: int = 10) -> List[Match]:
        """Obtém as partidas mais recentes"""
        result = await self.db.execute(
            select(Match)
            .options(WITH_PLAYERS)
            .order_by(Match.date.desc(), Match.id.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        """Total de partidas"""
        result = await self.db.execute(select(func.count(Match.id)))
        return result.scalar() or 0

    async def get_participation(self, match_id: int, player_id: int) -> Optional[MatchPlayer]:
        """Obtém a participação (match_id, player_id) com partida e jogador"""
        result = await self.db.execute(
            select(MatchPlayer)
            .options(selectinload(MatchPlayer.match), selectinload(MatchPlayer.player))
            .filter(MatchPlayer.match_id == match_id, MatchPlayer.player_id == player_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, match: Match) -> Match:
        """Insere partida e participações na transação corrente"""
        self.db.add(match)
        await self.db.flush()
        return match

    async def delete(self, match: Match) -> None:
        """Remove partida; participações saem em cascata"""
        await self.db.delete(match)
        await self.db.flush()
