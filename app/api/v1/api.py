"""Router principal da API v1"""
from fastapi import APIRouter
from app.api.v1.endpoints import players, matches, match_players, stats, data_integrity

api_router = APIRouter()

api_router.include_router(players.router, prefix="/players", tags=["players"])
api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
api_router.include_router(match_players.router, prefix="/match-players", tags=["match-players"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(data_integrity.router, prefix="/data-integrity", tags=["data-integrity"])
