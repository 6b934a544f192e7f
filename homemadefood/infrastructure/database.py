import logging
import time

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker

from homemadefood.core.config import settings

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
Base = declarative_base()


def init_db(bind=None, retries: int | None = None, wait_seconds: int | None = None) -> bool:
    """Create all tables, retrying while the database is not reachable yet."""
    # Models must be imported so they register on Base.metadata
    from homemadefood.domain import models  # noqa: F401

    bind = bind or engine
    retries = retries or settings.DB_CONNECT_RETRIES
    wait_seconds = settings.DB_CONNECT_WAIT_SECONDS if wait_seconds is None else wait_seconds

    for attempt in range(retries):
        try:
            logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{retries})...")
            Base.metadata.create_all(bind=bind)
            logger.info("✅ DB connected and tables created.")
            return True
        except OperationalError:
            logger.warning(f"⚠️ DB not ready yet. Waiting {wait_seconds}s...")
            time.sleep(wait_seconds)

    logger.error("❌ Could not connect to DB after retries.")
    return False


def get_db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
