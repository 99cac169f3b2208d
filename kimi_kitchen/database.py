"""Database connection and session management."""
import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from kimi_kitchen.config import get_settings

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Build database URL from settings.

    An explicit DATABASE_URL wins; otherwise a PostgreSQL URL is assembled
    from the DB_* settings.
    """
    settings = get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    user = settings.DB_USER
    password = settings.DB_PASSWORD
    host = settings.DB_HOST
    port = settings.DB_PORT
    database = settings.DB_NAME
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


class Database:
    """Handle to the data store with an explicit connect/disconnect lifecycle.

    One instance is built at application startup and passed down to request
    handlers through the `get_db` dependency.
    """

    def __init__(self, url: str | None = None, engine: Engine | None = None):
        self.url = url or get_database_url()
        self._engine = engine
        self._sessionmaker: sessionmaker | None = None
        if engine is not None:
            self._sessionmaker = sessionmaker(bind=engine)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._sessionmaker is not None

    def connect(self) -> None:
        """Create the engine and session factory."""
        if self.is_connected:
            return
        kwargs = {"pool_pre_ping": True}
        if not self.url.startswith("sqlite"):
            kwargs.update(pool_size=5, max_overflow=10)
        self._engine = create_engine(self.url, **kwargs)
        self._sessionmaker = sessionmaker(bind=self._engine)
        logger.info(f"Connected to database at {self._engine.url.render_as_string(hide_password=True)}")

    def disconnect(self) -> None:
        """Dispose of pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Disconnected from database")
        self._engine = None
        self._sessionmaker = None

    def session(self) -> Session:
        """Create a new session bound to this database."""
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()


def get_db(request: Request):
    """Dependency for FastAPI routes that need a database session."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
