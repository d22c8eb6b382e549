from fitness_api.utils.url_builder import build_async_url, is_sqlite_url, requires_ssl


def test_postgres_url_gets_asyncpg_and_loses_sslmode():
    url = "postgres://user:pw@db.example.com:5432/fitness?sslmode=require&application_name=api"
    assert build_async_url(url) == "postgresql+asyncpg://user:pw@db.example.com:5432/fitness?application_name=api"
    assert requires_ssl(url)


def test_postgresql_scheme():
    assert build_async_url("postgresql://u@h/db") == "postgresql+asyncpg://u@h/db"
    assert not requires_ssl("postgresql://u@h/db")


def test_sqlite_url():
    assert build_async_url("sqlite:///./fitness.db") == "sqlite+aiosqlite:///./fitness.db"
    assert build_async_url("sqlite:////tmp/fitness.db") == "sqlite+aiosqlite:////tmp/fitness.db"
    assert is_sqlite_url("sqlite+aiosqlite:///./fitness.db")
    assert not is_sqlite_url("postgresql+asyncpg://u@h/db")


def test_explicit_driver_is_kept():
    assert build_async_url("postgresql+asyncpg://u@h/db") == "postgresql+asyncpg://u@h/db"
    assert build_async_url("") == ""
