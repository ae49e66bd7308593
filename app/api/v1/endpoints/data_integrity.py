"""Endpoints de verificação de integridade dos contadores"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.cache import cache
from app.schemas.stats import IntegrityReport
from app.services.ledger_service import StatisticsLedger

router = APIRouter()


@router.get("/check", response_model=IntegrityReport)
async def check_data_integrity(db: AsyncSession = Depends(get_db)):
    """Compara os contadores dos jogadores com a soma das participações"""
    ledger = StatisticsLedger(db)
    return await ledger.reconcile(repair=False)


@router.post("/repair", response_model=IntegrityReport)
async def repair_data_integrity(db: AsyncSession = Depends(get_db)):
    """Regrava os contadores divergentes com os valores recalculados"""
    ledger = StatisticsLedger(db)
    report = await ledger.reconcile(repair=True)
    if report["repaired"]:
        await cache.invalidate_stats()
    return report
