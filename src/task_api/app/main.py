import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from task_api.app.routes import tasks
from task_api.app.error_handlers import register_error_handlers
from task_api.app.middleware.access_log import AccessLogMiddleware
from task_api.config import Settings
from task_api.infra.db.sqlite import make_sqlite_url, make_engine, make_sessionmaker, init_models
from task_api.infra.db.task_repo_memory import InMemoryTaskRepo
from task_api.infra.db.task_repo_sqlite import SQLiteTaskRepo
from task_api.services.task_service import TaskService
from task_api.observability.logging import setup_logging

logger = logging.getLogger("taskapi.system")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info("system.start", extra={"category": "system", "event": "system.start", "storage": settings.storage_backend})

    engine = None
    if settings.storage_backend == "memory":
        repo = InMemoryTaskRepo()
    elif settings.storage_backend == "sqlite":
        engine = make_engine(make_sqlite_url(settings.db_path))
        repo = SQLiteTaskRepo(make_sessionmaker(engine))
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.storage_backend!r}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create tables on startup
        if engine is not None:
            await init_models(engine)
            logger.info(
                "db.ready",
                extra={"category": "system", "event": "db.ready", "db_path": settings.db_path},
            )
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("system.stop", extra={"category": "system", "event": "system.stop"})

    app = FastAPI(title="Task API", lifespan=lifespan)
    app.add_middleware(AccessLogMiddleware)
    register_error_handlers(app)

    app.state.settings = settings
    app.state.engine = engine
    app.state.task_service = TaskService(repo)

    app.include_router(tasks.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def run() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info(
        "server.listening",
        extra={"category": "system", "event": "server.listening", "url": f"http://{settings.host}:{settings.port}"},
    )
    uvicorn.run(
        "task_api.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
