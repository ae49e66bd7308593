"""Endpoints de estatísticas"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.database import get_db
from app.core.cache import cache, STATS_PREFIX
from app.schemas.stats import PlayerRanking, PlayerStatsResponse, MatchStatsResponse
from app.services.stats_service import StatsService

router = APIRouter()


@router.get("/leaderboard", response_model=List[PlayerRanking])
async def get_leaderboard(
    sort: str = Query("playerOfTheMatch", description="playerOfTheMatch, gamelles, ownGoals, winrate ou goalRatio"),
    direction: str = Query("desc", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db)
):
    """Ranking dos jogadores"""
    cache_key = f"{STATS_PREFIX}:leaderboard:{sort}:{direction}"
    cached_result = await cache.get(cache_key)
    if cached_result:
        return cached_result

    service = StatsService(db)
    rankings = await service.get_leaderboard(sort=sort, direction=direction)

    result = [ranking.model_dump(mode="json", by_alias=True) for ranking in rankings]
    await cache.set(cache_key, result)
    return result


@router.get("/players/{player_id}", response_model=PlayerStatsResponse)
async def get_player_stats(player_id: int, db: AsyncSession = Depends(get_db)):
    """Ficha de estatísticas de um jogador"""
    cache_key = f"{STATS_PREFIX}:player:{player_id}"
    cached_result = await cache.get(cache_key)
    if cached_result:
        return cached_result

    service = StatsService(db)
    stats = await service.get_player_stats(player_id)

    result = stats.model_dump(mode="json", by_alias=True)
    await cache.set(cache_key, result)
    return result


@router.get("/matches", response_model=MatchStatsResponse)
async def get_match_stats(db: AsyncSession = Depends(get_db)):
    """Total de partidas e as mais recentes"""
    cache_key = f"{STATS_PREFIX}:matches"
    cached_result = await cache.get(cache_key)
    if cached_result:
        return cached_result

    service = StatsService(db)
    stats = await service.get_match_stats()

    result = stats.model_dump(mode="json", by_alias=True)
    await cache.set(cache_key, result)
    return result
