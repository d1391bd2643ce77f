# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    name: str
    email: str
    date_of_birth: date
    password_hash: str
    password_salt: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Session:
    """Server-side record proving an authenticated user agent."""

    session_id: str
    user_id: int
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    is_active: bool = True


@dataclass(slots=True, frozen=True)
class CookieDirective:
    """Instruction for the transport layer to set or clear the session token.

    ``value`` and ``expires_at`` are ``None`` when the cookie must be cleared.
    Transport attributes are the same for every directive.
    """

    name: str
    value: str | None
    expires_at: datetime | None
    http_only: bool = True
    secure: bool = True
    same_site: str = "Strict"

    @property
    def clears(self) -> bool:
        return self.value is None

    @classmethod
    def set_token(cls, name: str, session: Session) -> CookieDirective:
        return cls(name=name, value=session.session_id, expires_at=session.expires_at)

    @classmethod
    def clear_token(cls, name: str) -> CookieDirective:
        return cls(name=name, value=None, expires_at=None)
