"""
FastAPI application factory shared by the microservices.
"""
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import ServiceSettings
from .db import create_db_engine, create_session_factory, init_db
from .errors import install_error_handlers

VERSION = "1.0.0"


def build_app(title: str, settings: ServiceSettings, routers: Iterable[APIRouter]) -> FastAPI:
    """
    Build a service app around an explicit settings object.

    The settings, engine and session factory are kept on ``app.state``; the
    tables are created on startup.
    """
    engine = create_db_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(title=title, version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    install_error_handlers(app)

    for router in routers:
        app.include_router(router)

    return app
