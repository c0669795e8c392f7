"""
Database readiness — bounded retry for the startup race.

Only a connection that cannot be opened yet is retried. The operation
itself runs once: business errors (insufficient stock, not found,
validation) and failures mid-transaction propagate immediately.
"""

import logging
import time
from typing import Callable, TypeVar

from django.db import DEFAULT_DB_ALIAS, OperationalError, connections

from ppeman.conf import ppeman_settings
from ppeman.exceptions import DatabaseNotReadyError

logger = logging.getLogger('ppeman')

T = TypeVar('T')


def ensure_database_ready(using: str = DEFAULT_DB_ALIAS) -> None:
    """
    Open (or reuse) the connection for `using`.

    Raises:
        DatabaseNotReadyError: If the connection cannot be established
    """
    try:
        connections[using].ensure_connection()
    except OperationalError as exc:
        raise DatabaseNotReadyError(alias=using, reason=str(exc)) from exc


def with_database_retry(operation: Callable[[], T], attempts: int | None = None,
                        delay: float | None = None, using: str = DEFAULT_DB_ALIAS) -> T:
    """
    Run `operation` once the database accepts connections.

    Args:
        operation: Zero-argument callable doing the real work
        attempts: Readiness checks before giving up (default DB_READY_ATTEMPTS)
        delay: Seconds between checks (default DB_READY_RETRY_DELAY)

    Raises:
        DatabaseNotReadyError: If the database is still unavailable after
            the last attempt
    """
    attempts = attempts or ppeman_settings.DB_READY_ATTEMPTS
    delay = ppeman_settings.DB_READY_RETRY_DELAY if delay is None else delay

    for attempt in range(1, attempts + 1):
        try:
            ensure_database_ready(using)
            break
        except DatabaseNotReadyError:
            if attempt == attempts:
                logger.error(
                    "inventory.db.not_ready",
                    extra={"attempts": attempts, "alias": using},
                )
                raise
            logger.warning(
                "inventory.db.not_ready",
                extra={"attempt": attempt, "attempts": attempts, "retry_in": delay},
            )
            time.sleep(delay)

    return operation()
