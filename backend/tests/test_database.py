from sqlalchemy import text

from config import AppConfig
from database import build_engine


def test_sqlite_engine_enforces_foreign_keys(tmp_path):
    engine = build_engine(AppConfig(data_dir=str(tmp_path)))
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    engine.dispose()
