"""
Database URL utilities
"""
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def build_async_url(sync_url: str) -> str:
    """
    Rewrite a plain database URL to use the matching async driver

    postgres:// and postgresql:// become postgresql+asyncpg:// (sslmode is
    dropped because asyncpg rejects it in the URL), sqlite:// becomes
    sqlite+aiosqlite://. URLs that already name a driver are returned as-is.

    Args:
        sync_url: Original database URL

    Returns:
        Async-compatible database URL
    """
    if not sync_url:
        return sync_url

    parts = urlsplit(sync_url)
    if "+" in parts.scheme:
        return sync_url

    new_scheme = ASYNC_DRIVERS.get(parts.scheme)
    if new_scheme is None:
        return sync_url

    query = parts.query
    if new_scheme.startswith("postgresql"):
        query_pairs = dict(parse_qsl(parts.query, keep_blank_values=True))
        query_pairs.pop("sslmode", None)
        query = urlencode(query_pairs) if query_pairs else ""

    # urlsplit drops the empty netloc of sqlite:///path, rebuild it by hand
    if new_scheme.startswith("sqlite"):
        return new_scheme + sync_url[len(parts.scheme):]

    return urlunsplit((new_scheme, parts.netloc, parts.path, query, parts.fragment))


def is_sqlite_url(database_url: str) -> bool:
    return bool(database_url) and urlsplit(database_url).scheme.split("+")[0] == "sqlite"


def requires_ssl(database_url: str) -> bool:
    """Check whether the URL asks for sslmode=require"""
    if not database_url:
        return False
    query_pairs = dict(parse_qsl(urlsplit(database_url).query, keep_blank_values=True))
    return query_pairs.get("sslmode", "").lower() == "require"
