from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from task_api.domain.errors import StorageError

logger = logging.getLogger("taskapi.db")


class Base(DeclarativeBase):
    pass


def make_sqlite_url(db_path: str) -> str:
    # db_path like "./data/tasks.db"
    p = Path(db_path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{p.as_posix()}"

def make_engine(sqlite_url: str) -> AsyncEngine:
    return create_async_engine(sqlite_url)

def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def storage_session(sessionmaker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Session that rolls back and raises StorageError on any SQLAlchemy failure."""
    session = sessionmaker()
    try:
        yield session
    except IntegrityError as e:
        await session.rollback()
        logger.error("db.integrity_error", extra={"category": "db", "event": "db.integrity_error", "error": str(e)})
        raise StorageError("Integrity constraint violated", "commit", http_status=400) from e
    except OperationalError as e:
        await session.rollback()
        logger.error("db.operational_error", extra={"category": "db", "event": "db.operational_error", "error": str(e)})
        raise StorageError("Storage unavailable", "execute") from e
    except DBAPIError as e:
        await session.rollback()
        logger.error("db.driver_error", extra={"category": "db", "event": "db.driver_error", "error": str(e)})
        raise StorageError("Storage driver error", "query") from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("db.error", extra={"category": "db", "event": "db.error", "error": str(e)})
        raise StorageError("Storage operation failed", "unknown") from e
    finally:
        await session.close()
