from loguru import logger
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from src.core import config

# Render/Supabase provide postgres:// URLs, but SQLAlchemy needs postgresql://
# Also ensure we're using the psycopg driver (not psycopg2)
database_url = config.DATABASE_URL
if database_url.startswith("postgres://"):
    database_url = database_url.replace("postgres://", "postgresql+psycopg://", 1)
elif database_url.startswith("postgresql://") and "+psycopg" not in database_url:
    database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)

_is_sqlite = database_url.startswith("sqlite")

logger.info(f"Initializing database engine with URL: {database_url.split('@')[-1]}")
engine = create_engine(
    database_url,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
    """Turn on FK enforcement so ON DELETE CASCADE works on SQLite too."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables() -> None:
    """Create database tables from SQLModel metadata."""
    # Import models so their tables are registered on the metadata
    import src.models.models  # noqa: F401, PLC0415

    logger.info("Creating database tables from SQLModel metadata...")
    SQLModel.metadata.create_all(engine)
    logger.success("Database tables created successfully")
