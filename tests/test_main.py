from sqlalchemy import create_engine, text

from nudge import main as entry


def test_main_initializes_and_seeds_local_database(tmp_path, monkeypatch):
    db_path = tmp_path / "local.db"
    monkeypatch.setenv("DB_URL", f"file:{db_path}")
    monkeypatch.setenv("ENV", "development")
    monkeypatch.delenv("DB_TOKEN", raising=False)
    monkeypatch.delenv("RUN_MIGRATIONS", raising=False)

    assert entry.main() == 0

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM tasks")).scalar() == 6
            assert conn.execute(text("SELECT COUNT(*) FROM recurring_tasks")).scalar() == 4
    finally:
        engine.dispose()


def test_main_skips_seed_in_production(tmp_path, monkeypatch):
    db_path = tmp_path / "prod.db"
    monkeypatch.setenv("DB_URL", f"file:{db_path}")
    monkeypatch.setenv("ENV", "production")
    monkeypatch.delenv("DB_TOKEN", raising=False)
    monkeypatch.delenv("RUN_MIGRATIONS", raising=False)

    assert entry.main() == 0

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM tasks")).scalar() == 0
    finally:
        engine.dispose()


def test_main_reports_failure(monkeypatch):
    def _boom(settings):
        raise RuntimeError("cannot connect")

    monkeypatch.delenv("DB_TOKEN", raising=False)
    monkeypatch.setattr(entry, "build_engine", _boom)

    assert entry.main() == 1
