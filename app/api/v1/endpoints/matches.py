"""Endpoints de Partidas"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.config import settings
from app.core.database import get_db
from app.core.cache import cache
from app.core.exceptions import NotFoundError
from app.core.rate_limit import limiter
from app.repositories.match_repository import MatchRepository
from app.schemas.match import MatchCreate, MatchUpdate, MatchResponse
from app.services.ledger_service import StatisticsLedger

router = APIRouter()


@router.get("/", response_model=List[MatchResponse])
async def list_matches(db: AsyncSession = Depends(get_db)):
    """Lista as partidas em ordem cronológica"""
    matches = await MatchRepository(db).get_all()
    return [MatchResponse.model_validate(match) for match in matches]


@router.get("/{match_id}", response_model=MatchResponse)
async def get_match(match_id: int, db: AsyncSession = Depends(get_db)):
    """Obtém uma partida por ID"""
    match = await MatchRepository(db).get_by_id(match_id)
    if not match:
        raise NotFoundError("Match not found")
    return MatchResponse.model_validate(match)


@router.post("/", response_model=MatchResponse, status_code=201)
@limiter.limit(settings.MATCH_WRITE_RATE_LIMIT)
async def create_match(
    request: Request,
    match: MatchCreate,
    db: AsyncSession = Depends(get_db)
):
    """Registra uma partida e atualiza as estatísticas dos jogadores"""
    ledger = StatisticsLedger(db)
    created = await ledger.apply(match)
    await cache.invalidate_stats()
    return MatchResponse.model_validate(created)


@router.put("/{match_id}", response_model=MatchResponse)
@limiter.limit(settings.MATCH_WRITE_RATE_LIMIT)
async def update_match(
    request: Request,
    match_id: int,
    match: MatchUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Altera placar/data de uma partida reajustando as estatísticas"""
    ledger = StatisticsLedger(db)
    updated = await ledger.rescore(match_id, match)
    await cache.invalidate_stats()
    return MatchResponse.model_validate(updated)


@router.delete("/{match_id}", status_code=204)
@limiter.limit(settings.MATCH_WRITE_RATE_LIMIT)
async def delete_match(
    request: Request,
    match_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Remove uma partida desfazendo seu efeito nas estatísticas"""
    ledger = StatisticsLedger(db)
    await ledger.reverse(match_id)
    await cache.invalidate_stats()
    return Response(status_code=204)
