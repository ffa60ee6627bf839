"""Wiring of the service to its database-backed collaborators, plus process startup."""

from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from src.core.config import Settings, get_settings
from src.core.logging_config import configure_logging
from src.db.database import engine, init_db
from src.db.sql_notifications import SQLNotificationSink
from src.db.sql_players import SQLPlayerDirectory
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessService


def create_service(db: Session, settings: Optional[Settings] = None) -> ChessService:
    """One service per request, sharing the request's database session (ex. the one yielded by get_db)."""
    return ChessService(
        SQLGameRepository(db),
        SQLPlayerDirectory(db),
        SQLNotificationSink(db),
        settings=settings,
    )


def startup(settings: Optional[Settings] = None, bind: Optional[Engine] = None) -> None:
    """Configure logging and make sure the tables exist. Call once per process."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    init_db(bind if bind is not None else engine)
    logger.info("Chess service ready")
