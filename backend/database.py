import logging
from contextlib import contextmanager
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from config import AppConfig
from errors import ConflictError, InternalError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(cfg: AppConfig) -> Engine:
    url = cfg.database_url()
    connect_args = {}
    if url.startswith("sqlite"):
        # Ensure data directory exists
        Path(cfg.data_dir).mkdir(parents=True, exist_ok=True)
        connect_args = {
            "check_same_thread": False,
            "timeout": cfg.database.request_timeout_seconds,
        }
    engine = create_engine(url, echo=cfg.database.echo, connect_args=connect_args)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    return engine


def enable_sqlite_foreign_keys(engine: Engine):
    """SQLite ignores FOREIGN KEY clauses unless every connection opts in."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    from models import User, Resource, Collection, CollectionResource  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session):
    """
    Run one all-or-nothing unit of work.

    Commits once on success. Any exception rolls the whole unit back;
    store-level failures are translated into the service error taxonomy.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.error(f"Concurrent modification detected: {e}")
        raise ConflictError(
            "The record was modified concurrently; re-read and retry"
        ) from e
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity violation: {e.orig}")
        raise ConflictError("The write conflicts with existing data") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store failure: {e}")
        raise InternalError("The data store is unavailable") from e
    except Exception:
        db.rollback()
        raise
