"""Endpoints de Jogadores"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.database import get_db
from app.core.cache import cache
from app.schemas.player import PlayerCreate, PlayerUpdate, PlayerResponse
from app.services.player_service import PlayerService

router = APIRouter()


@router.get("/", response_model=List[PlayerResponse])
async def list_players(db: AsyncSession = Depends(get_db)):
    """Lista os jogadores em ordem alfabética, com suas partidas"""
    service = PlayerService(db)
    players = await service.get_all_players()
    return [PlayerResponse.model_validate(player) for player in players]


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(player_id: int, db: AsyncSession = Depends(get_db)):
    """Obtém um jogador por ID"""
    service = PlayerService(db)
    return PlayerResponse.model_validate(await service.get_player(player_id))


@router.post("/", response_model=PlayerResponse, status_code=201)
async def create_player(player: PlayerCreate, db: AsyncSession = Depends(get_db)):
    """Cria um jogador"""
    service = PlayerService(db)
    created = await service.create_player(player)
    await cache.invalidate_stats()
    return PlayerResponse.model_validate(created)


@router.put("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: int,
    player: PlayerUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Renomeia um jogador (contadores não são editáveis por aqui)"""
    service = PlayerService(db)
    updated = await service.rename_player(player_id, player)
    await cache.invalidate_stats()
    return PlayerResponse.model_validate(updated)


@router.delete("/{player_id}", status_code=204)
async def delete_player(player_id: int, db: AsyncSession = Depends(get_db)):
    """Remove um jogador e suas participações"""
    service = PlayerService(db)
    await service.delete_player(player_id)
    await cache.invalidate_stats()
    return Response(status_code=204)
