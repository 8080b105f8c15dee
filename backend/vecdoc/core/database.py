"""
SQLAlchemy 2.0 database configuration.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from vecdoc.core.config import settings


def normalize_database_url(database_url: str) -> str:
    """Hosted Postgres hands out postgres://, SQLAlchemy needs postgresql+psycopg2://."""
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+psycopg2://", 1)
    return database_url


def create_db_engine(database_url: str) -> Engine:
    """Builds an engine with pool settings tuned per backend."""
    database_url = normalize_database_url(database_url)
    engine_kwargs: dict = {"echo": False}

    if database_url.startswith("postgresql"):
        engine_kwargs.update(
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    elif database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    return create_engine(database_url, **engine_kwargs)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def get_db():
    """Session generator for FastAPI dependency injection."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
