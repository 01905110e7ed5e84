from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from loguru import logger
import threading

from config import Settings
from exceptions import ConfigurationError, UpstreamStoreError
from models import Base

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")
POSTGRES_DRIVER_SCHEME = "postgresql+psycopg2://"


def normalize_database_url(database_url: str) -> str:
    # Vercel/Heroku style URLs use the "postgres" scheme, which SQLAlchemy rejects.
    # Pin the psycopg2 driver; an explicit "+driver" is left alone.
    for scheme in ("postgres://", "postgresql://"):
        if database_url.startswith(scheme):
            return POSTGRES_DRIVER_SCHEME + database_url[len(scheme):]
    return database_url


def create_db_engine(database_url: str) -> Engine:
    database_url = normalize_database_url(database_url)

    if database_url.startswith("postgresql"):
        # No pooling across serverless invocations; verify connections before using them
        return create_engine(
            database_url,
            poolclass=NullPool,
            pool_pre_ping=True,
            echo=False
        )

    if database_url in IN_MEMORY_SQLITE_URLS:
        # One shared connection, otherwise each thread sees its own empty database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )

    # Fallback for other databases (e.g., SQLite for local dev)
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {}
    )


class Database:
    """The relational store: an engine, its session factory and the schema bootstrap."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self._schema_ready = False
        self._schema_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        if not settings.database_url:
            raise ConfigurationError("POSTGRES_URL")
        return cls(create_db_engine(settings.database_url))

    @property
    def schema_ready(self) -> bool:
        return self._schema_ready

    def ensure_schema(self):
        """Create the products table if it is absent.

        Runs at most once successfully per process. A failed attempt is left
        unmarked so the next caller tries again.
        """
        if self._schema_ready:
            return

        with self._schema_lock:
            if self._schema_ready:
                return
            try:
                Base.metadata.create_all(bind=self.engine, checkfirst=True)
            except SQLAlchemyError as e:
                logger.exception("Schema bootstrap failed")
                raise UpstreamStoreError(f"Database error (schema): {e}") from e
            self._schema_ready = True
            logger.info("Schema bootstrap complete")

    def dispose(self):
        self.engine.dispose()
