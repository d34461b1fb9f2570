"""
Bookstore catalog API — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.books import router as books_router
from api.middleware import register_exception_handlers, register_middleware
from auth.routes import router as auth_router
from config.settings import config
from database.session import create_tables, dispose_engine, init_engine
from utils.validators import validate_settings

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "aiosqlite", "uvicorn.access"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bookstore Catalog API",
        version="1.0.0",
        description="User signup/login and CRUD over a book catalog.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(books_router, prefix="/api/books")

    @app.on_event("startup")
    async def on_startup():
        validate_settings(config)

        logger.info("Connecting to database…")
        init_engine(config.database_url, echo=config.database_echo)
        await create_tables()

        logger.info("Application ready to accept requests on port %d.", config.port)

    @app.on_event("shutdown")
    async def on_shutdown():
        await dispose_engine()
        logger.info("Database connections closed.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
