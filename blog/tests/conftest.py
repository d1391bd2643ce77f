from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from blog.domain.users.entities import Session, User
from blog.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from blog.shared.config import AppConfig, DatabaseConfig, SecurityConfig, SessionConfig

START = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def username_exists(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def email_exists(self, email: str) -> bool:
        return any(u.email == email for u in self._users.values())

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def remove(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemorySessionRepository(SessionRepository):
    def __init__(self, clock: FrozenClock) -> None:
        self._clock = clock
        self.sessions: dict[str, Session] = {}

    def add(self, session: Session) -> Session:
        self.sessions[session.session_id] = session
        return session

    def find_by_id(self, session_id: str) -> Session | None:
        return self.sessions.get(session_id)

    def update_activity(self, session_id: str, expires_at: datetime) -> bool:
        session = self.sessions.get(session_id)
        if session is None or not session.is_active:
            return False
        self.sessions[session_id] = replace(
            session, last_activity_at=self._clock(), expires_at=expires_at
        )
        return True

    def invalidate(self, session_id: str) -> None:
        session = self.sessions.get(session_id)
        if session is not None:
            self.sessions[session_id] = replace(session, is_active=False)

    def purge_inactive(self) -> int:
        now = self._clock()
        dead = [
            sid
            for sid, s in self.sessions.items()
            if s.expires_at < now or not s.is_active
        ]
        for sid in dead:
            del self.sessions[sid]
        return len(dead)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> tuple[str, str]:
        return f"hashed:{password}", "salt"

    def verify(self, password: str, stored_hash: str, stored_salt: str) -> bool:
        return stored_salt == "salt" and stored_hash == f"hashed:{password}"


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions(clock: FrozenClock) -> InMemorySessionRepository:
    return InMemorySessionRepository(clock)


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="test",
        log_level="WARNING",
        log_file=tmp_path / "logs" / "blog.log",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'blog.db'}"),
        session=SessionConfig(duration_minutes=5, sweep_interval=0),
        security=SecurityConfig(enable_rate_limit=False, enable_csrf=False),
    )


def session_cookie(response, name: str = "BlogSession") -> str | None:
    """Return the raw ``Set-Cookie`` header for ``name`` if the response has one."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def session_token(response, name: str = "BlogSession") -> str | None:
    header = session_cookie(response, name)
    if header is None:
        return None
    return header.split(";", 1)[0].split("=", 1)[1] or None
