from pathlib import Path
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Engine

# Shipped inside the package so installed copies can migrate too
MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"

def alembic_config(connection=None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg

def upgrade_database(engine: Engine, revision: str = "head") -> None:
    with engine.begin() as connection:
        command.upgrade(alembic_config(connection), revision)

def downgrade_database(engine: Engine, revision: str = "base") -> None:
    with engine.begin() as connection:
        command.downgrade(alembic_config(connection), revision)
