"""Use-case for revoking sessions."""

from __future__ import annotations

from blog.domain.users.entities import CookieDirective
from blog.domain.users.repositories import SessionRepository


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository, cookie_name: str) -> None:
        self._sessions = sessions
        self._cookie_name = cookie_name

    def execute(self, token: str | None) -> CookieDirective | None:
        if not token:
            return None
        self._sessions.invalidate(token)
        return CookieDirective.clear_token(self._cookie_name)
