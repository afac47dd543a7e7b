from usersapi.config import Settings


def _settings(url: str, **overrides) -> Settings:
    return Settings(database_url=url, jwt_secret_key="x", **overrides)


def test_get_engine_kwargs_sqlite_has_check_same_thread():
    from usersapi.database import database as db

    kwargs = db.get_engine_kwargs(_settings("sqlite:///./usersapi.db"))
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_uses_configured_pooling():
    from usersapi.database import database as db

    kwargs = db.get_engine_kwargs(
        _settings(
            "postgresql+psycopg://u:p@localhost:5432/db",
            db_pool_size=8,
            db_max_overflow=2,
            db_pool_timeout_sec=15,
        )
    )
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 8
    assert kwargs["max_overflow"] == 2
    assert kwargs["pool_timeout"] == 15


def test_debug_turns_on_sql_echo():
    from usersapi.database import database as db

    assert db.get_engine_kwargs(_settings("sqlite://", debug=True))["echo"] is True
    assert db.get_engine_kwargs(_settings("sqlite://"))["echo"] is False


def test_is_sqlite_url():
    from usersapi.database import database as db

    assert db._is_sqlite_url("sqlite:///./usersapi.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_init_db_creates_users_table(tmp_path):
    from sqlalchemy import inspect
    from usersapi.database import database as db

    engine = db.build_engine(_settings(f"sqlite:///{tmp_path / 'users.db'}"))
    try:
        db.init_db(engine)
        columns = {c["name"] for c in inspect(engine).get_columns("users")}
    finally:
        engine.dispose()

    assert columns == {"id", "first_name", "last_name", "email", "gender", "age"}
