"""
Picks a code that is (very probably) not yet taken.

The existence check here is only a fast path. Two requests can still race
to the same code; the primary key on ``links.code`` decides, and the
service turns the losing insert into a ConflictError.
"""

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from tinylink_app.models.link import Link
from tinylink_app.services.short_code_strategies import ShortCodeStrategy

logger = logging.getLogger(__name__)

# Failures worth retrying: dropped connections, locked database, pool exhausted
TRANSIENT_ERRORS = (OperationalError, PoolTimeoutError)


class UniqueCodeResolver:
    """Generate candidates until one is free or attempts run out"""

    def __init__(self, db: Session, strategy: ShortCodeStrategy):
        self.db = db
        self.strategy = strategy

    def code_exists(self, code: str) -> bool:
        return bool(self.db.scalar(select(exists().where(Link.code == code))))

    def resolve(self, length: int = 6, max_attempts: int = 5) -> str:
        """
        Return the first candidate not found in the store.

        If every attempt collides (or fails transiently) the last candidate
        is returned anyway and the insert is left to detect the conflict.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        candidate: Optional[str] = None
        for attempt in range(1, max_attempts + 1):
            candidate = self.strategy.generate(length)
            try:
                if not self.code_exists(candidate):
                    return candidate
                logger.info("Code %s already taken (attempt %d/%d)", candidate, attempt, max_attempts)
            except TRANSIENT_ERRORS as e:
                self.db.rollback()
                logger.warning(
                    "Existence check for %s failed (attempt %d/%d): %s",
                    candidate, attempt, max_attempts, e
                )

        logger.warning("No free code after %d attempts, falling back to %s", max_attempts, candidate)
        return candidate
