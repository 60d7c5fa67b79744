# backend/app/core/database.py
"""
Moteur SQLAlchemy async + session par requête.

get_db() est la seule porte d'entrée des routers vers la DB :
injecté via DbDep (shared/deps.py), jamais appelé directement.
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

ASYNC_DRIVER = "+asyncpg"


def sync_database_url(url: str) -> str:
    """URL synchrone (psycopg2) pour Alembic : postgresql+asyncpg://… → postgresql://…"""
    return url.replace(ASYNC_DRIVER, "", 1)


engine = create_async_engine(settings.DATABASE_URL, echo=False, pool_pre_ping=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session
