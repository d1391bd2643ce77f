# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from blog.application.services.session_issuer import SessionIssuer
from blog.domain.users.entities import CookieDirective, Session, User
from blog.domain.users.exceptions import InvalidCredentialsError
from blog.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    session: Session
    cookie: CookieDirective


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        issuer: SessionIssuer,
        cookie_name: str,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._issuer = issuer
        self._cookie_name = cookie_name

    def execute(self, username: str, password: str) -> LoginResult:
        user = self._users.find_by_username(username)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash, user.password_salt
        )
        if not password_valid:
            raise InvalidCredentialsError()

        now = self._issuer.now()
        session = self._sessions.add(
            Session(
                session_id=self._issuer.new_session_id(),
                user_id=user.id,
                created_at=now,
                last_activity_at=now,
                expires_at=self._issuer.expiration_time(),
                is_active=True,
            )
        )
        return LoginResult(
            user=user,
            session=session,
            cookie=CookieDirective.set_token(self._cookie_name, session),
        )
