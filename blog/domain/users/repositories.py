# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Session, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def username_exists(self, username: str) -> bool: ...
    def email_exists(self, email: str) -> bool: ...
    def add(self, user: User) -> User: ...


class SessionRepository(Protocol):
    def add(self, session: Session) -> Session: ...
    def find_by_id(self, session_id: str) -> Session | None: ...
    def update_activity(self, session_id: str, expires_at: datetime) -> bool: ...
    def invalidate(self, session_id: str) -> None: ...
    def purge_inactive(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> tuple[str, str]: ...
    def verify(self, password: str, stored_hash: str, stored_salt: str) -> bool: ...
