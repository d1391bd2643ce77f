# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from blog.shared.errors.base import DomainError


class UsernameTakenError(DomainError):
    code = "username_taken"
    status = HTTPStatus.CONFLICT

    def __init__(self) -> None:
        super().__init__(context={"field": "username"})


class EmailTakenError(DomainError):
    code = "email_taken"
    status = HTTPStatus.CONFLICT

    def __init__(self) -> None:
        super().__init__(context={"field": "email"})


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
