"""Database engine, session factory and schema bootstrap.

Provides database connectivity and session management for the eMunicipality
backend. One session is opened per request through the get_db dependency.
"""

from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from .config import get_settings
from .models.base import Base
from .observability.logging_config import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str, **overrides: Any) -> Engine:
    """Create an engine with pool, isolation and timeout settings applied.

    Pool sizing only applies to server databases (not SQLite).
    """
    settings = get_settings()

    engine_kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": settings.DB_ECHO,
        "isolation_level": settings.DB_ISOLATION_LEVEL,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.DB_CONNECT_TIMEOUT,
        }
    else:
        engine_kwargs["pool_size"] = settings.DB_POOL_SIZE
        engine_kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
        engine_kwargs["connect_args"] = {"connect_timeout": settings.DB_CONNECT_TIMEOUT}

    engine_kwargs.update(overrides)
    return create_engine(database_url, **engine_kwargs)


engine = build_engine(get_settings().DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create any missing tables.

    Managed deployments run the Alembic migrations instead and leave
    AUTO_CREATE_SCHEMA off.
    """
    from . import models  # noqa: F401  ensure models are registered

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ensured on {target.url.render_as_string(hide_password=True)}")


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @router.get("/users")
        def list_users(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
