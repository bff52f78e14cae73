import os
import tempfile
from datetime import datetime, timedelta, timezone

# Settings are read at import time; point them at a scratch directory first.
_TMP_DIR = tempfile.mkdtemp(prefix="dumpit-tests-")
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATA_DIR"] = _TMP_DIR
os.environ["CONFIG_PATH"] = os.path.join(_TMP_DIR, "config.yaml")
os.environ["ENRICHMENT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from config import config  # noqa: E402
from database import (  # noqa: E402
    build_session_factory,
    enable_sqlite_foreign_keys,
    init_db,
)
from enrichment import NullEnricher  # noqa: E402
from main import create_app  # noqa: E402
from models import CollectionResource, Resource  # noqa: E402

ALICE = "user-alice"
BOB = "user-bob"


def issue_token(user_id: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Sign a token the way the identity provider does."""
    claims = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(
        claims, config.auth.jwt.secret_key, algorithm=config.auth.jwt.algorithm
    )


def auth_header(user_id: str) -> dict:
    return {"Authorization": f"Bearer {issue_token(user_id)}"}


def membership_pairs(db) -> set[tuple[str, str]]:
    return {(m.collection_id, m.resource_id) for m in db.query(CollectionResource)}


def collection_id_pairs(db) -> set[tuple[str, str]]:
    return {(cid, r.id) for r in db.query(Resource) for cid in r.collection_ids}


def assert_memberships_consistent(db):
    """A membership row exists iff its collection id is listed on the resource."""
    db.expire_all()
    assert membership_pairs(db) == collection_id_pairs(db)


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'dumpit.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    app = create_app(session_factory=session_factory, enricher=NullEnricher())
    with TestClient(app) as c:
        yield c
