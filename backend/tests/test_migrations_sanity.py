from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect, text

from backend.app.db import Base
from backend.app import models  # noqa: F401


ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def _load_script() -> ScriptDirectory:
    config = Config(str(ALEMBIC_INI))
    return ScriptDirectory.from_config(config)


def test_alembic_single_head():
    script = _load_script()
    heads = script.get_heads()
    assert len(heads) == 1


def test_alembic_revision_graph_has_no_gaps():
    script = _load_script()
    head = script.get_heads()[0]
    assert script.get_revision(head) is not None


def test_alembic_db_revision_known(tmp_path, monkeypatch):
    db_path = tmp_path / "alembic.db"
    database_url = f"sqlite:///{db_path}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    config = Config(str(ALEMBIC_INI))
    command.stamp(config, "head")

    engine = create_engine(database_url, future=True)
    with engine.connect() as conn:
        revision = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
    engine.dispose()

    script = _load_script()
    assert revision is not None
    assert script.get_revision(revision) is not None


def test_alembic_upgrade_matches_models(tmp_path, monkeypatch):
    db_path = tmp_path / "upgrade.db"
    database_url = f"sqlite:///{db_path}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    config = Config(str(ALEMBIC_INI))
    command.upgrade(config, "head")

    engine = create_engine(database_url, future=True)
    inspector = inspect(engine)
    for table in Base.metadata.sorted_tables:
        migrated = {col["name"] for col in inspector.get_columns(table.name)}
        assert migrated == set(table.c.keys())
    indexes = {ix["name"]: ix for ix in inspector.get_indexes("category_boards")}
    engine.dispose()

    assert not indexes["ix_category_boards_user_board"]["unique"]


def test_sqlite_bootstrap_creates_tables(tmp_path):
    db_path = tmp_path / "bootstrap.db"
    engine = create_engine(f"sqlite:///{db_path}", future=True)
    Base.metadata.create_all(bind=engine)
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    engine.dispose()
    assert {"categories", "category_boards"} <= tables


def test_alembic_upgrade_targets_database_url(tmp_path, monkeypatch):
    target = tmp_path / "target.db"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{target}")

    command.upgrade(Config(str(ALEMBIC_INI)), "head")

    engine = create_engine(f"sqlite:///{target}", future=True)
    tables = set(inspect(engine).get_table_names())
    engine.dispose()
    assert {"categories", "category_boards"} <= tables
    # the alembic.ini default must not be touched
    assert not (tmp_path / "category_boards.db").exists()


def test_alembic_falls_back_to_ini_url(tmp_path, monkeypatch):
    db_path = tmp_path / "fallback.db"
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("SQLALCHEMY_DATABASE_URL", raising=False)
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")

    command.upgrade(config, "head")

    engine = create_engine(f"sqlite:///{db_path}", future=True)
    tables = set(inspect(engine).get_table_names())
    engine.dispose()
    assert "category_boards" in tables
