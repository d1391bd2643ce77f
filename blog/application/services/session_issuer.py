# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

SESSION_ID_BYTES = 128 // 8

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionIssuer:
    """Mints session identifiers and computes sliding expiry deadlines."""

    def __init__(self, *, duration: timedelta, clock: Clock = utc_now) -> None:
        if duration <= timedelta(0):
            raise ValueError("session duration must be positive")
        self._duration = duration
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def new_session_id(self) -> str:
        return secrets.token_urlsafe(SESSION_ID_BYTES)

    def expiration_time(self) -> datetime:
        return self._clock() + self._duration

    def is_expired(self, expires_at: datetime) -> bool:
        return self._clock() >= expires_at
