"""Configuração do banco de dados async e sync"""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool
from sqlalchemy import create_engine, event
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


def get_sync_database_url() -> str:
    """Converte URL async para sync"""
    url = settings.database_url
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg2://")
    elif url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://")
    elif url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite+aiosqlite://", "sqlite://")
    return url


def get_async_database_url() -> str:
    """Garante URL async (asyncpg para PostgreSQL, aiosqlite para SQLite)"""
    url = settings.database_url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif url.startswith("postgresql+psycopg2://"):
        return url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
    elif url.startswith("sqlite://") and not url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_options(url: str, pool_size: int, max_overflow: int) -> dict:
    """Opções de pool por dialeto (SQLite não aceita pool_size)"""
    if _is_sqlite(url):
        # Uma conexão por uso: evita compartilhar conexões entre event loops
        return {"poolclass": NullPool, "echo": settings.DEBUG}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "echo": settings.DEBUG,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite só aplica ON DELETE CASCADE com foreign_keys ligado"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Engine async (API)
async_url = get_async_database_url()
engine = create_async_engine(async_url, **_engine_options(async_url, pool_size=20, max_overflow=10))

# Engine sync para operações síncronas (tasks Celery e scripts)
sync_url = get_sync_database_url()
sync_engine = create_engine(sync_url, **_engine_options(sync_url, pool_size=5, max_overflow=5))

if _is_sqlite(async_url):
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
if _is_sqlite(sync_url):
    event.listen(sync_engine, "connect", _enable_sqlite_foreign_keys)

# Session factory async
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Session factory sync (para tasks Celery e scripts)
SessionLocal = sessionmaker(
    bind=sync_engine,
    class_=Session,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    Dependency async para obter sessão do banco de dados.
    Uso: db: AsyncSession = Depends(get_db)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Inicializa o banco de dados criando todas as tabelas"""
    import app.models  # noqa: F401  registra os modelos no metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Banco de dados inicializado")


async def drop_db():
    """Remove todas as tabelas (usado nos testes)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def close_db():
    """Fecha todas as conexões do banco"""
    await engine.dispose()
    sync_engine.dispose()
    logger.info("Conexões do banco de dados fechadas")
