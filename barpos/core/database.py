"""
Database configuration and session management
"""

from sqlmodel import SQLModel, Session, create_engine
import structlog

from barpos.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()


def build_engine(url: str, echo: bool = False):
    """Create an engine; SQLite connections are shared with the request threadpool"""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def init_db(bind=None) -> None:
    """Create database tables for all registered models"""
    # Import models so their tables are registered on the metadata
    import barpos.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables created")


def get_session():
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
