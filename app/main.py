import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.session import Database, get_database
from app.routers import auth, expenses

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    # One pool per process, owned by the app and injected into every store
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            database.create_all()
        logger.info("%s %s ready", settings.PROJECT_NAME, settings.PROJECT_VERSION)
        yield
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Include our backend logic
    app.include_router(auth.router)
    app.include_router(expenses.router)

    @app.get("/health")
    def health_check(db: Database = Depends(get_database)):
        try:
            db.ping()
            return {"status": "online", "database": "connected"}
        except Exception as e:
            return {"status": "online", "database": f"disconnected: {str(e)}"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=default_settings.HOST, port=default_settings.PORT)
