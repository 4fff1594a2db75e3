from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from staffhub.config import get_settings

DATABASE_URL = get_settings().database_url

# Lazy engine creation to avoid environment races (tests may set env vars before import)
_engine = None


def _build_engine(url: str):
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across sessions
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def get_engine():
    global _engine
    if _engine is None:
        _engine = _build_engine(DATABASE_URL)
    return _engine


def recreate_engine(new_database_url: str | None = None):
    """
    Re-create the SQLAlchemy engine with an optional new DATABASE_URL.

    Safe to call from test setup or admin scripts when the environment
    changes. Updates the module-level `engine` and re-binds `SessionLocal`.
    """
    global _engine, engine, DATABASE_URL
    if new_database_url:
        DATABASE_URL = new_database_url
    if _engine is not None:
        _engine.dispose()
    _engine = _build_engine(DATABASE_URL)
    engine = _engine
    SessionLocal.configure(bind=engine)
    return engine


engine = get_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
