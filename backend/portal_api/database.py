from pathlib import Path
from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from portal_api import config

DATABASE_URL = config.database_url()

_is_sqlite = DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
_pool_args = {} if _is_sqlite else {"pool_size": config.DB_POOL_SIZE, "max_overflow": config.DB_MAX_OVERFLOW}

if _is_sqlite and ":memory:" not in DATABASE_URL:
    db_path = DATABASE_URL.replace("sqlite:///", "", 1)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ships with FK enforcement off; turn it on for every new connection"""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine: Engine = create_engine(
    DATABASE_URL,
    echo=config.SQL_ECHO,
    connect_args=_connect_args,
    pool_pre_ping=not _is_sqlite,
    **_pool_args,
)

if _is_sqlite:
    enable_sqlite_foreign_keys(engine)


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Initialize database - create all tables"""
    # Import all models to ensure they're registered with SQLModel metadata
    from portal_api.models.customer import Customer  # noqa: F401
    from portal_api.models.payment import Payment  # noqa: F401
    from portal_api.models.product import Product  # noqa: F401
    from portal_api.models.session import CustomerSession  # noqa: F401
    from portal_api.models.verification import Verification  # noqa: F401

    SQLModel.metadata.create_all(engine)
