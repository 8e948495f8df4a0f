from contextlib import contextmanager
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..models.base import Base


engine = None
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, future=True)


def _ensure_sqlite_parent(database_url: str) -> None:
    # Ensure sqlite file parent directory exists to avoid 'unable to open database file'
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        db_path = database_url.split("sqlite:///")[-1]
        try:
            parent = Path(db_path).expanduser().resolve().parent
            parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            # best-effort; real error will surface on connect if still invalid
            pass


def init_db(database_url: str) -> Engine:
    """Create the engine, bind the session factory and create missing tables."""
    global engine
    from ..models import cart_item  # noqa: F401  registers the table on Base.metadata

    url = database_url
    _ensure_sqlite_parent(url)
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # one shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
    if engine is not None:
        engine.dispose()
    engine = create_engine(url, future=True, **kwargs)
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(engine)
    return engine


@contextmanager
def get_session():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
