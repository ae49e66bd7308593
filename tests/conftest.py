"""Fixtures compartilhadas: banco SQLite temporário e cliente HTTP in-process"""
import os
import tempfile
from pathlib import Path

# Precisa valer antes de qualquer import de `app`
_TEST_DB = Path(tempfile.mkdtemp(prefix="babyfoot-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func

from app.core.database import AsyncSessionLocal, init_db, drop_db
from app.main import app
from app.models import Player, Match, MatchPlayer
from app.repositories.player_repository import PlayerRepository

API = "/api/v1"


@pytest.fixture(autouse=True)
async def database():
    """Tabelas novas para cada teste"""
    await init_db()
    yield
    await drop_db()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_player(db):
    """Cria jogadores direto no banco (contadores opcionais)"""
    async def _make(name: str = "Player", **counters) -> Player:
        player = Player(name=name, **counters)
        db.add(player)
        await db.commit()
        return player
    return _make


@pytest.fixture
def counters(db):
    """Lê os contadores atuais de um jogador"""
    async def _counters(player_id: int) -> dict:
        player = await PlayerRepository(db).get_by_id(player_id, with_matches=False)
        return player.counters()
    return _counters


@pytest.fixture
def row_counts(db):
    """Quantidade de linhas em matches e match_players"""
    async def _row_counts() -> tuple:
        matches = await db.scalar(select(func.count()).select_from(Match))
        match_players = await db.scalar(select(func.count()).select_from(MatchPlayer))
        return matches, match_players
    return _row_counts


ZERO = {
    "goals_scored_white": 0,
    "goals_conceded_white": 0,
    "goals_scored_black": 0,
    "goals_conceded_black": 0,
    "gamelles_scored": 0,
    "own_goals_scored": 0,
    "player_of_the_match": 0,
}
