import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

# alembic.ini lives at the project root, next to the migrations directory
ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def apply_migrations(revision: str = "head"):
    alembic_logger = logging.getLogger("alembic")
    alembic_logger.propagate = True
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_INI.parent / "migrations"))
    command.upgrade(alembic_cfg, revision)
