"""
Database query utilities with retry logic
"""
import asyncio
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

RETRYABLE_POOL_MARKERS = ("maxclientsinsessionmode", "max clients reached", "connection pool")
CONNECTION_LOSS_MARKERS = ("closed", "lost", "reset")


def classify_error(error: BaseException) -> str:
    """
    Sort a database error into a retry class

    Returns:
        "pool", "connection", "timeout" or "fatal"
    """
    message = str(error).lower()
    error_type = type(error).__name__

    if any(marker in message for marker in RETRYABLE_POOL_MARKERS):
        return "pool"
    if "connection" in message and any(marker in message for marker in CONNECTION_LOSS_MARKERS):
        return "connection"
    if error_type in ("TimeoutError", "CancelledError") or "timeout" in message:
        return "timeout"
    return "fatal"


async def execute_with_retry(
    session: AsyncSession,
    query: Any,
    max_retries: int = 3,
    initial_delay: float = 0.5
) -> Any:
    """
    Execute a statement, retrying transient database errors

    Pool exhaustion and dropped connections back off 0.5s, 1s, 2s; timeouts
    wait twice as long. Anything else (constraint violations, bad SQL) is
    raised on the first attempt.

    Args:
        session: Database session
        query: SQLAlchemy statement
        max_retries: Maximum number of attempts
        initial_delay: Initial delay between retries (exponential backoff)

    Returns:
        Query result
    """
    for attempt in range(max_retries):
        try:
            return await session.execute(query)
        except Exception as e:
            kind = classify_error(e)
            print(f"Database error on attempt {attempt + 1}/{max_retries}: {type(e).__name__}: {str(e)[:200]}")

            if kind == "fatal":
                raise
            if attempt == max_retries - 1:
                print(f"Max retries reached, failing with: {type(e).__name__}")
                raise

            # The failed statement may have left the transaction unusable
            await session.rollback()

            delay = initial_delay * (2 ** attempt)
            if kind == "timeout":
                delay *= 2
            print(f"Retrying after {delay}s ({kind})...")
            await asyncio.sleep(delay)

    raise RuntimeError("execute_with_retry called with max_retries < 1")
