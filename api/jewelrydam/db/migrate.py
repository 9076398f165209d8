"""Apply schema migrations.

Migrations are an ordered Alembic revision list; the applied revision is
tracked in the ``alembic_version`` table, so each one runs exactly once.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_MIGRATIONS_PATH = PROJECT_ROOT / "migrations"


def get_alembic_config(database_url: str, script_location: Optional[str] = None) -> Config:
    """Build an Alembic config without relying on alembic.ini being in cwd."""
    config = Config()
    config.set_main_option(
        "script_location",
        script_location or os.getenv("JEWELRYDAM_MIGRATIONS_PATH", str(DEFAULT_MIGRATIONS_PATH)),
    )
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def run_migrations(database_url: str, revision: str = "head") -> None:
    """Upgrade the database schema to ``revision``."""
    logger.info(f"Applying database migrations up to {revision}")
    command.upgrade(get_alembic_config(database_url), revision)
    logger.info("Database schema is up to date")


if __name__ == "__main__":
    from jewelrydam.config import settings

    logging.basicConfig(level=settings.log_level)
    run_migrations(settings.database_url)
