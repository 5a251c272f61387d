# core/db.py
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from core.config import DATABASE_URL


def make_engine(url: str = DATABASE_URL):
    """Build an engine; SQLite connections may be shared across Flet handler threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine()

# expire_on_commit=False keeps orders readable after the session that loaded them commits
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)

Base = declarative_base()


def create_tables(bind=None):
    """Create every mapped table on `bind` (defaults to the configured engine)."""
    # models must be imported so their tables are registered on Base.metadata
    import models.menu_item  # noqa: F401
    import models.order  # noqa: F401
    import models.dining_table  # noqa: F401
    import models.audit_log  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Yield a SQLAlchemy session (use: `for db in get_db():`)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope():
    """Session for one unit of UI work; closed on exit."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
