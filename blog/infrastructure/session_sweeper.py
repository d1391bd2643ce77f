# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading

from blog.application.use_cases.users.cleanup_sessions import CleanupSessionsUseCase
from blog.infrastructure.audit import AuditAction, audit_log
from blog.shared.errors import StorageError
from blog.shared.logging import logger


class SessionSweeper:
    """Background thread that periodically purges expired or inactive sessions."""

    def __init__(self, cleanup: CleanupSessionsUseCase, *, interval: float) -> None:
        if interval <= 0:
            raise ValueError("sweep interval must be positive")
        self._cleanup = cleanup
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="session-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(f"sessions.sweeper: started interval={self._interval:.0f}s")

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("sessions.sweeper: stopped")

    def sweep_once(self) -> int:
        removed = self._cleanup.execute()
        if removed:
            audit_log(AuditAction.SESSIONS_PURGED, details={"removed": removed})
        return removed

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self.sweep_once()
            except StorageError:
                logger.warning("sessions.sweeper: storage unavailable, will retry next cycle")
            except Exception:
                logger.exception("sessions.sweeper: sweep failed, will retry next cycle")


__all__ = ["SessionSweeper"]
