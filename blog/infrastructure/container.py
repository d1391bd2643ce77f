# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from blog.application.services.password_hashing import Pbkdf2PasswordHasher
from blog.application.services.session_issuer import Clock, SessionIssuer, utc_now
from blog.application.use_cases.articles.add_comment import AddCommentUseCase
from blog.application.use_cases.articles.get_article import GetArticleUseCase
from blog.application.use_cases.articles.list_articles import ListArticlesUseCase
from blog.application.use_cases.articles.publish_article import PublishArticleUseCase
from blog.application.use_cases.users.cleanup_sessions import CleanupSessionsUseCase
from blog.application.use_cases.users.login_user import LoginUserUseCase
from blog.application.use_cases.users.logout_user import LogoutUserUseCase
from blog.application.use_cases.users.register_user import RegisterUserUseCase
from blog.application.use_cases.users.validate_session import ValidateSessionUseCase
from blog.domain.articles.repositories import ArticleRepository
from blog.domain.users.repositories import PasswordHasher
from blog.infrastructure.db import build_engine, build_session_factory
from blog.infrastructure.repositories.articles.memory_article_repository import (
    InMemoryArticleRepository,
)
from blog.infrastructure.repositories.articles.sqlalchemy_article_repository import (
    SqlAlchemyArticleRepository,
)
from blog.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from blog.infrastructure.session_sweeper import SessionSweeper
from blog.interfaces.http.controllers.articles_controller import ArticlesController
from blog.interfaces.http.controllers.auth_controller import AuthController
from blog.interfaces.http.controllers.misc_controller import MiscController
from blog.interfaces.http.session_auth import SessionAuthenticator
from blog.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Clock = utc_now,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._clock = clock
        self._password_hasher = password_hasher

    # Storage

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory, clock=self._clock)

    @cached_property
    def article_repository(self) -> ArticleRepository:
        if self.config.articles.use_in_memory:
            return InMemoryArticleRepository()
        return SqlAlchemyArticleRepository(self.session_factory)

    # Authentication services

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or Pbkdf2PasswordHasher()

    @cached_property
    def session_issuer(self) -> SessionIssuer:
        return SessionIssuer(duration=self.config.session.duration, clock=self._clock)

    @property
    def cookie_name(self) -> str:
        return self.config.session.cookie_name

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            clock=self._clock,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            issuer=self.session_issuer,
            cookie_name=self.cookie_name,
        )

    @cached_property
    def validate_session_use_case(self) -> ValidateSessionUseCase:
        return ValidateSessionUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            issuer=self.session_issuer,
            cookie_name=self.cookie_name,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository, cookie_name=self.cookie_name)

    @cached_property
    def cleanup_sessions_use_case(self) -> CleanupSessionsUseCase:
        return CleanupSessionsUseCase(sessions=self.session_repository)

    @cached_property
    def list_articles_use_case(self) -> ListArticlesUseCase:
        return ListArticlesUseCase(articles=self.article_repository)

    @cached_property
    def get_article_use_case(self) -> GetArticleUseCase:
        return GetArticleUseCase(articles=self.article_repository)

    @cached_property
    def publish_article_use_case(self) -> PublishArticleUseCase:
        return PublishArticleUseCase(articles=self.article_repository, clock=self._clock)

    @cached_property
    def add_comment_use_case(self) -> AddCommentUseCase:
        return AddCommentUseCase(articles=self.article_repository, clock=self._clock)

    # Maintenance

    @cached_property
    def session_sweeper(self) -> SessionSweeper | None:
        interval = self.config.session.sweep_interval
        if interval <= 0:
            return None
        return SessionSweeper(self.cleanup_sessions_use_case, interval=interval)

    # HTTP

    @cached_property
    def authenticator(self) -> SessionAuthenticator:
        return SessionAuthenticator(
            validate_session=self.validate_session_use_case,
            cookie_name=self.cookie_name,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            authenticator=self.authenticator,
        )

    @cached_property
    def articles_controller(self) -> ArticlesController:
        return ArticlesController(
            list_articles=self.list_articles_use_case,
            get_article=self.get_article_use_case,
            publish_article=self.publish_article_use_case,
            add_comment=self.add_comment_use_case,
            authenticator=self.authenticator,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)


__all__ = ["Container"]
