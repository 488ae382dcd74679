"""Create all tables for the configured database."""

import logging

from app.database import Base, init_engine
import app.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables() -> None:
    engine = init_engine()
    logger.info("Creating database tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    create_tables()
