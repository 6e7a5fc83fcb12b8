from dataclasses import dataclass
from typing import Any

from fastapi import Request
from loguru import logger
from sqlalchemy.orm import sessionmaker

from core import config
from database import Base, build_engine, build_session_factory
from models.entitlement_model import EntitlementModel  # noqa: F401
from services.google_play_service import GooglePlayService


@dataclass
class AppContext:
    """Process-wide clients, built once at startup and closed at shutdown."""

    google_play: Any
    session_factory: sessionmaker
    package_name: str
    engine: Any = None
    catalog_max_workers: int = config.CATALOG_MAX_WORKERS

    @classmethod
    def from_settings(cls) -> "AppContext":
        engine = build_engine(config.DATABASE_URL, pool_pre_ping=True)
        Base.metadata.create_all(bind=engine)

        logger.info(f"Record store ready, Google Play package: {config.GOOGLE_PLAY_PACKAGE_NAME}")

        return cls(
            google_play=GooglePlayService(credentials_path=config.GOOGLE_PLAY_CREDENTIALS_FILE),
            session_factory=build_session_factory(engine),
            package_name=config.GOOGLE_PLAY_PACKAGE_NAME,
            engine=engine,
            catalog_max_workers=config.CATALOG_MAX_WORKERS
        )

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Record store connections released")


def get_context(request: Request) -> AppContext:
    return request.app.state.context
