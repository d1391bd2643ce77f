# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from blog.application.services.session_issuer import Clock, utc_now
from blog.domain.users.entities import User
from blog.domain.users.exceptions import EmailTakenError, UsernameTakenError
from blog.domain.users.repositories import PasswordHasher, UserRepository


@dataclass(slots=True, frozen=True)
class RegistrationInput:
    username: str
    name: str
    email: str
    date_of_birth: date
    password: str


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._clock = clock

    def execute(self, data: RegistrationInput) -> User:
        # early exits, the store's unique constraints stay authoritative
        if self._users.username_exists(data.username):
            raise UsernameTakenError()
        if self._users.email_exists(data.email):
            raise EmailTakenError()

        password_hash, password_salt = self._password_hasher.hash(data.password)
        user = User(
            id=0,
            username=data.username,
            name=data.name,
            email=data.email,
            date_of_birth=data.date_of_birth,
            password_hash=password_hash,
            password_salt=password_salt,
            created_at=self._clock(),
        )
        return self._users.add(user)
