# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import Pbkdf2PasswordHasher
from .services.session_issuer import Clock, SessionIssuer, utc_now
from .use_cases.users.cleanup_sessions import CleanupSessionsUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase, RegistrationInput
from .use_cases.users.validate_session import AuthenticatedSession, ValidateSessionUseCase

__all__ = [
    "AuthenticatedSession",
    "CleanupSessionsUseCase",
    "Clock",
    "LoginResult",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "Pbkdf2PasswordHasher",
    "RegisterUserUseCase",
    "RegistrationInput",
    "SessionIssuer",
    "ValidateSessionUseCase",
    "utc_now",
]
