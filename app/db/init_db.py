"""
Database initialization.

Creates all tables and the default preferences row.
"""

import logging

from sqlmodel import Session, SQLModel

from app.db.session import engine
from app.services.preferences_service import PreferencesService

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables
    - Stores the default user preferences (from settings)
    """

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")

    with Session(engine) as session:
        preferences = PreferencesService(session).get()
        logger.info("Preferences ready (bedtime %s, limit %.0f mg, timezone %s)",
                    preferences.bedtime, preferences.daily_limit_mg, preferences.timezone)

    logger.info("Database initialization complete!")


if __name__ == "__main__":
    from app.core.logging import setup_logging

    setup_logging()
    init_db()
