# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain entities and ports for the blog."""

from .articles.entities import Article, Comment
from .articles.repositories import ArticleRepository
from .users.entities import CookieDirective, Session, User
from .users.exceptions import EmailTakenError, InvalidCredentialsError, UsernameTakenError
from .users.repositories import PasswordHasher, SessionRepository, UserRepository

__all__ = [
    "Article",
    "ArticleRepository",
    "Comment",
    "CookieDirective",
    "EmailTakenError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "Session",
    "SessionRepository",
    "User",
    "UserRepository",
    "UsernameTakenError",
]
