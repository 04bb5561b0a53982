"""
Refocus Pet - Database Connection Management
SQLite database setup using SQLAlchemy 2.0.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

# Default database location
DEFAULT_DB_PATH = Path("~/.refocus-pet/pet.db").expanduser()


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


class Database:
    """
    Database manager for the pet's saved state.

    The engine is synchronous: the simulation tick never suspends, and a
    single-row SQLite write is cheap enough to run inline.

    Usage:
        db = Database()
        db.initialize()

        with db.session() as session:
            # do work
            session.commit()

        db.close()
    """

    def __init__(self, db_path: Path | str | None = None) -> None:
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file. Defaults to ~/.refocus-pet/pet.db
        """
        self._db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def db_path(self) -> Path:
        """Get the database file path."""
        return self._db_path

    @property
    def is_initialized(self) -> bool:
        """Check if database is initialized."""
        return self._engine is not None

    def initialize(self) -> None:
        """Initialize database connection and create tables."""
        # Ensure directory exists
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_engine(
            f"sqlite:///{self._db_path}",
            echo=False,  # Set True for SQL debugging
        )

        self._session_factory = sessionmaker(
            self._engine,
            class_=Session,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self._engine)

    def close(self) -> None:
        """Close database connection."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Get a database session.

        Usage:
            with db.session() as session:
                result = session.execute(query)
        """
        if not self._session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        with self._session_factory() as session:
            yield session
