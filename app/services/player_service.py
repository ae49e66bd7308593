"""Service de Jogador (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging
from app.core.exceptions import NotFoundError
from app.models.player import Player
from app.repositories.player_repository import PlayerRepository
from app.schemas.player import PlayerCreate, PlayerUpdate

logger = logging.getLogger(__name__)


class PlayerService:
    """Service async para operações com jogadores"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = PlayerRepository(db)

    async def get_all_players(self) -> List[Player]:
        """Obtém todos os jogadores com suas partidas"""
        return await self.repository.get_all()

    async def get_player(self, player_id: int) -> Player:
        """Obtém jogador por ID"""
        player = await self.repository.get_by_id(player_id)
        if not player:
            raise NotFoundError("Player not found")
        return player

    async def create_player(self, data: PlayerCreate) -> Player:
        """Cria jogador com todos os contadores zerados"""
        player = await self.repository.create({"name": data.name})
        logger.info(f"Jogador criado: {player.id} ({player.name})")
        return await self.get_player(player.id)

    async def rename_player(self, player_id: int, data: PlayerUpdate) -> Player:
        """Atualiza o nome; contadores só mudam pelo ledger"""
        player = await self.get_player(player_id)
        await self.repository.update(player, {"name": data.name})
        return await self.get_player(player_id)

    async def delete_player(self, player_id: int) -> None:
        """
        Remove o jogador e, em cascata, suas participações.

        Os contadores dos demais jogadores das mesmas partidas não são
        alterados: eles continuam batendo com as participações deles.
        """
        player = await self.get_player(player_id)
        removed = len(player.matches)
        await self.repository.delete(player)
        logger.info(f"Jogador {player_id} removido com {removed} participações")
