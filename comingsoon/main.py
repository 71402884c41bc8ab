import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from comingsoon import __version__
from comingsoon.api import admin, health, site_config, subscriptions
from comingsoon.core import config
from comingsoon.core.database import Base, SessionLocal, engine
from comingsoon.core.errors import register_error_handlers
from comingsoon.models import site_config as _site_config_model  # noqa: F401
from comingsoon.models import subscriber as _subscriber_model  # noqa: F401
from comingsoon.services import site_config_service
from comingsoon.services.session_store import SessionStore

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _init_database() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        site_config_service.bootstrap(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        _init_database()
    except Exception:
        logger.exception("Could not initialize the database at %s", engine.url)
        engine.dispose()
        raise
    logger.info("Subscription service ready (database: %s)", engine.url)

    yield

    engine.dispose()
    logger.info("Database connections closed")


def create_app(session_store: SessionStore | None = None) -> FastAPI:
    app = FastAPI(title="Coming Soon API", version=__version__, lifespan=lifespan)
    if session_store is None:
        session_store = SessionStore(ttl=config.session_ttl())
    app.state.sessions = session_store

    register_error_handlers(app)

    # Routers
    app.include_router(health.router, prefix="/api")
    app.include_router(subscriptions.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(site_config.router, prefix="/api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "comingsoon.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )
