import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlalchemy.engine import make_url

from api.errors import register_error_handlers
from config import Settings
from database import Base, create_db_engine, create_session_factory
from handlers import cars, rentals
from handlers.images import IMAGES_ROUTE


def log_database_target(url: str):
    url = make_url(url)
    logger.info("Database config:")
    logger.info(f"driver: {url.drivername}")
    logger.info(f"host: {url.host}")
    logger.info(f"user: {url.username}")
    logger.info(f"database: {url.database}")
    logger.info(f"port: {url.port}")
    logger.info(f"password: {'***SET***' if url.password else 'NOT SET'}")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    log_database_target(settings.database_url)
    engine = create_db_engine(settings.database_url, settings.pool_size, settings.max_overflow)

    # Tables are created once, on start
    Base.metadata.create_all(bind=engine)
    os.makedirs(settings.images_dir, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        engine.dispose()
        logger.info("Database pool closed")

    app = FastAPI(title="Car Rental API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.SessionLocal = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def index():
        return "Backend is running."

    cars.register_cars_handlers(app)
    rentals.register_rentals_handlers(app)

    app.mount(IMAGES_ROUTE, StaticFiles(directory=settings.images_dir), name="images")
    # Front-end assets, matched after every API route
    if os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
    return app
