# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request session check with sliding renewal."""

from __future__ import annotations

from dataclasses import dataclass, replace

from blog.application.services.session_issuer import SessionIssuer
from blog.domain.users.entities import CookieDirective, Session, User
from blog.domain.users.repositories import SessionRepository, UserRepository
from blog.shared.logging import logger


@dataclass(slots=True, frozen=True)
class AuthenticatedSession:
    user: User
    session: Session
    cookie: CookieDirective


class ValidateSessionUseCase:
    """Resolve a session token to its user, or ``None`` for anonymous.

    Every successful check pushes ``expires_at`` a full session duration
    past the moment of validation and re-issues the cookie with that expiry.
    A session found expired is invalidated on the spot.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        issuer: SessionIssuer,
        cookie_name: str,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._issuer = issuer
        self._cookie_name = cookie_name

    def execute(self, token: str | None) -> AuthenticatedSession | None:
        if not token:
            return None

        session = self._sessions.find_by_id(token)
        if session is None or not session.is_active:
            return None

        if self._issuer.is_expired(session.expires_at):
            self._sessions.invalidate(session.session_id)
            logger.info(f"auth.validate: session expired user_id={session.user_id}")
            return None

        now = self._issuer.now()
        expires_at = self._issuer.expiration_time()
        if not self._sessions.update_activity(session.session_id, expires_at):
            # invalidated or purged between the read and the refresh
            return None

        user = self._users.find_by_id(session.user_id)
        if user is None:
            logger.warning(f"auth.validate: session owner missing user_id={session.user_id}")
            self._sessions.invalidate(session.session_id)
            return None

        refreshed = replace(session, last_activity_at=now, expires_at=expires_at)
        return AuthenticatedSession(
            user=user,
            session=refreshed,
            cookie=CookieDirective.set_token(self._cookie_name, refreshed),
        )
