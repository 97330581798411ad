"""Shared fixtures: per-test SQLite file, app wired through create_app, httpx client.

ASGITransport does not run the lifespan, so tables are created here.
"""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from task_api.app.main import create_app
from task_api.config import Settings
from task_api.infra.db.sqlite import init_models, make_engine, make_sessionmaker, make_sqlite_url
from task_api.infra.db.task_repo_memory import InMemoryTaskRepo
from task_api.infra.db.task_repo_sqlite import SQLiteTaskRepo


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        db_path=str(tmp_path / "tasks.db"),
        log_dir=str(tmp_path / "logs"),
        log_level="DEBUG",
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture(params=["memory", "sqlite"])
async def repo(request, tmp_path):
    """Both repository implementations, for tests that pin shared semantics."""
    if request.param == "memory":
        yield InMemoryTaskRepo()
        return
    engine = make_engine(make_sqlite_url(str(tmp_path / "repo.db")))
    await init_models(engine)
    yield SQLiteTaskRepo(make_sessionmaker(engine))
    await engine.dispose()

