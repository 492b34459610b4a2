"""Database session. SQLite by default, any SQLAlchemy URL works."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pharmacy_pos.core.config import settings


def make_engine(url: str):
    if url.startswith("sqlite"):
        # Single writer; NullPool keeps connections off shared threads
        from sqlalchemy.pool import NullPool
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=NullPool)
    return create_engine(url, pool_pre_ping=True, pool_recycle=3600)


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
