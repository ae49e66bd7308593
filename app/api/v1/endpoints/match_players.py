"""Endpoints de participações (jogador em uma partida)"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.cache import cache
from app.schemas.match import MatchPlayerUpdate, MatchPlayerDetail
from app.services.ledger_service import StatisticsLedger

router = APIRouter()


@router.put("/{match_id}/{player_id}", response_model=MatchPlayerDetail)
async def update_match_player(
    match_id: int,
    player_id: int,
    changes: MatchPlayerUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Edita time, gamelles, gols contra ou jogador da partida"""
    ledger = StatisticsLedger(db)
    match_player = await ledger.update_participant(match_id, player_id, changes)
    await cache.invalidate_stats()
    return MatchPlayerDetail.model_validate(match_player)


@router.delete("/{match_id}/{player_id}", status_code=204)
async def delete_match_player(
    match_id: int,
    player_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Remove o jogador da partida"""
    ledger = StatisticsLedger(db)
    await ledger.remove_participant(match_id, player_id)
    await cache.invalidate_stats()
    return Response(status_code=204)
