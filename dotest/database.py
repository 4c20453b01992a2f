"""Database utilities and setup."""
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from dotest.config import DATABASE_URL, DB_TIMEOUT_SECONDS


def _connect_args(url: str) -> dict[str, object]:
    """SQLite needs cross-thread access and a busy timeout."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": DB_TIMEOUT_SECONDS}
    return {}


# Create engine
engine = create_engine(DATABASE_URL, connect_args=_connect_args(DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database (create all tables)."""
    # Register all mapped classes before create_all
    import dotest.models.db  # noqa: F401

    Base.metadata.create_all(bind=engine)
