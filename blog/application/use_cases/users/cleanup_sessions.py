"""Maintenance sweep removing dead session rows."""

from __future__ import annotations

from blog.domain.users.repositories import SessionRepository
from blog.shared.logging import logger


class CleanupSessionsUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self) -> int:
        removed = self._sessions.purge_inactive()
        logger.info(f"sessions.cleanup: removed={removed}")
        return removed
