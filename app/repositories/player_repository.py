"""Repository de Player (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select, update
from typing import Dict, Iterable, List, Optional, Set
from app.models.player import Player
from app.models.match_player import MatchPlayer

# Jogador com suas participações e as respectivas partidas
WITH_MATCHES = selectinload(Player.matches).selectinload(MatchPlayer.match)


class PlayerRepository:
    """Repository async para operações de banco com Player"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, with_matches: bool = True) -> List[Player]:
        """Obtém todos os jogadores ordenados por nome"""
        query = select(Player).order_by(Player.name.asc(), Player.id.asc())
        if with_matches:
            query = query.options(WITH_MATCHES)
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def get_by_id(self, player_id: int, with_matches: bool = True) -> Optional[Player]:
        """Obtém jogador por ID"""
        query = select(Player).filter(Player.id == player_id)
        if with_matches:
            query = query.options(WITH_MATCHES)
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_existing_ids(self, player_ids: Iterable[int]) -> Set[int]:
        """Retorna o subconjunto de IDs que existem"""
        result = await self.db.execute(
            select(Player.id).filter(Player.id.in_(set(player_ids)))
        )
        return set(result.scalars().all())

    async def create(self, player_data: dict) -> Player:
        """Cria novo jogador"""
        player = Player(**player_data)
        self.db.add(player)
        await self.db.commit()
        await self.db.refresh(player)
        return player

    async def update(self, player: Player, player_data: dict) -> Player:
        """Atualiza jogador"""
        for key, value in player_data.items():
            setattr(player, key, value)
        await self.db.commit()
        await self.db.refresh(player)
        return player

    async def delete(self, player: Player) -> bool:
        """Deleta jogador (participações removidas em cascata)"""
        await self.db.delete(player)
        await self.db.commit()
        return True

    async def shift_counters(self, player_id: int, deltas: Dict[str, int]) -> int:
        """
        Soma `deltas` aos contadores do jogador com um único UPDATE
        (`coluna = coluna + delta`), sem ler o valor atual.

        Não faz commit: roda dentro da transação do ledger.
        """
        values = {
            column: getattr(Player, column) + delta
            for column, delta in deltas.items()
            if delta
        }
        if not values:
            return 1
        result = await self.db.execute(
            update(Player)
            .where(Player.id == player_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
