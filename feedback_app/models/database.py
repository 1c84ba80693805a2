"""Engine, session factory and transaction helpers for the feedback store.

Built once at import from ``Settings``. Request handlers get a session per
request through ``get_db``; multi-row writes go through ``unit_of_work``.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from feedback_app.config import get_settings
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every feedback model."""
    pass


def _engine_options(settings) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        # SQL echo is only useful against a real server
        "echo": settings.is_development and not settings.is_sqlite,
    }
    if settings.is_sqlite:
        # Handlers run in a threadpool, not on the connecting thread
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


settings = get_settings()

engine = create_engine(settings.database_url, **_engine_options(settings))

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,  # responses are built from objects after commit
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session that is closed after the request.

    Example:
        @router.get("/sessions")
        def list_sessions(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Run a block of writes as one all-or-nothing transaction.

    Commits when the block exits normally. On any exception the session is
    rolled back, so none of the rows added inside the block persist, and the
    exception propagates to the caller.

    Example:
        with unit_of_work(db):
            db.add(response)
            db.flush()
            db.add_all(answers)
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Rolling back unit of work")
        db.rollback()
        raise
