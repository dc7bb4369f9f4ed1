"""
db/init_db.py
-------------
Creates the tables from the declarative models if they do not exist and seeds
the priority reference table. Run directly to initialize a fresh database:
    python -m db.init_db
"""

from sqlalchemy.engine import Engine

from db.executor import Param, ParamType, QueryExecutor
from models import Base
from models.user import User  # noqa: F401  registers the table
from models.priority import Priority  # noqa: F401
from models.project import Project  # noqa: F401
from models.todo import Todo  # noqa: F401
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PRIORITIES = [(1, "Low"), (2, "Medium"), (3, "High")]


def create_tables(engine: Engine) -> None:
    """Safe to call multiple times."""
    Base.metadata.create_all(engine)
    logger.info("Database schema initialized successfully.")


def seed_priorities(executor: QueryExecutor) -> None:
    """Insert the default priorities when the table is empty."""
    if executor.run_one("SELECT pr_id FROM pr_priority"):
        return
    for pr_id, name in DEFAULT_PRIORITIES:
        executor.run(
            "INSERT INTO pr_priority (pr_id, pr_name) VALUES (:id, :name)",
            [Param("id", ParamType.INT, pr_id), Param("name", ParamType.TEXT, name)],
        )
    logger.info(f"Seeded {len(DEFAULT_PRIORITIES)} priorities.")


if __name__ == "__main__":
    from config import load_config
    from db.executor import build_engine

    settings = load_config()
    engine = build_engine(settings["DATABASE_URL"], settings["DB_CONNECT_TIMEOUT"])
    create_tables(engine)
    seed_priorities(QueryExecutor(engine))
