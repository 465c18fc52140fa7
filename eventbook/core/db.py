"""
Database engine, session factory and declarative base
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from eventbook.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache(maxsize=1)
def init_db() -> None:
    """Create tables once per process; repeated calls are no-ops."""
    # models must be imported so they register with Base.metadata
    from eventbook import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
