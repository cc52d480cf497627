from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for ``url`` with pool settings suited to the backend.

    SQLite connections are shared with FastAPI's threadpool, so
    ``check_same_thread`` is turned off there; server databases get a
    pre-pinged pool.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
            future=True,
        )

    return create_engine(
        url,
        pool_pre_ping=True,      # Test connections before using
        pool_size=10,            # Base connection pool size
        max_overflow=20,         # Max connections beyond pool_size
        pool_timeout=30,         # Timeout for getting connection (seconds)
        pool_recycle=3600,       # Recycle connections after 1 hour
        echo=False,              # Set to True for debugging SQL logs
        future=True,
    )


engine = create_db_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    future=True,
)

# Import and use logger
from app.core.logging_config import logger
logger.info(f"Database engine configured for {engine.url.get_backend_name()}")

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, func

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Base(DeclarativeBase):
    pass

class TimestampMixin:
    # Python-side defaults keep sub-second ordering on SQLite
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

def init_db(bind: Engine = engine) -> None:
    """Create all tables. Alembic owns the schema in production."""
    import app.models  # noqa: F401  registers mappers on Base.metadata
    Base.metadata.create_all(bind=bind)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
