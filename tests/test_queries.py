"""Retry behaviour of execute_with_retry against a scripted session."""
import asyncio

import pytest

from fitness_api.database import queries
from fitness_api.database.queries import classify_error, execute_with_retry


class ScriptedSession:
    """Raises the scripted errors in order, then returns the result."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = 0
        self.rollbacks = 0

    async def execute(self, query):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "result"

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr(queries.asyncio, "sleep", fake_sleep)
    return delays


@pytest.mark.parametrize("error, kind", [
    (Exception("MaxClientsInSessionMode: max clients reached"), "pool"),
    (Exception("connection was closed in the middle of operation"), "connection"),
    (TimeoutError(), "timeout"),
    (Exception("UNIQUE constraint failed: users.email"), "fatal"),
])
def test_classify_error(error, kind):
    assert classify_error(error) == kind


def test_retries_transient_errors_with_backoff(no_sleep):
    session = ScriptedSession(Exception("connection reset by peer"), Exception("connection pool exhausted"))
    assert asyncio.run(execute_with_retry(session, "SELECT 1")) == "result"
    assert session.calls == 3
    assert session.rollbacks == 2
    assert no_sleep == [0.5, 1.0]


def test_timeouts_wait_longer(no_sleep):
    session = ScriptedSession(TimeoutError())
    asyncio.run(execute_with_retry(session, "SELECT 1"))
    assert no_sleep == [1.0]


def test_fatal_error_is_raised_immediately():
    session = ScriptedSession(ValueError("syntax error at or near"))
    with pytest.raises(ValueError):
        asyncio.run(execute_with_retry(session, "SELECT 1"))
    assert session.calls == 1
    assert session.rollbacks == 0


def test_gives_up_after_max_retries():
    session = ScriptedSession(*(Exception("connection lost") for _ in range(3)))
    with pytest.raises(Exception, match="connection lost"):
        asyncio.run(execute_with_retry(session, "SELECT 1"))
    assert session.calls == 3
