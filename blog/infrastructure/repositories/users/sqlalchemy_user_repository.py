# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, exists, false, or_, select, true, update
from sqlalchemy.orm import Session as OrmSession

from blog.application.services.session_issuer import Clock, utc_now
from blog.domain.users.entities import Session as DomainSession
from blog.domain.users.entities import User as DomainUser
from blog.domain.users.exceptions import EmailTakenError, UsernameTakenError
from blog.domain.users.repositories import SessionRepository, UserRepository
from blog.infrastructure.db.models import Session, User
from blog.infrastructure.unit_of_work import unit_of_work_scope
from blog.shared.errors import ConstraintViolationError


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        name=row.name,
        email=row.email,
        date_of_birth=row.date_of_birth,
        password_hash=row.password_hash,
        password_salt=row.password_salt,
        created_at=row.created_at,
    )


def _to_domain_session(row: Session) -> DomainSession:
    return DomainSession(
        session_id=row.session_id,
        user_id=row.user_id,
        created_at=row.created_at,
        last_activity_at=row.last_activity_at,
        expires_at=row.expires_at,
        is_active=bool(row.is_active),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], OrmSession]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain_user(row) if row else None

    def username_exists(self, username: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(User.username == username))))

    def email_exists(self, email: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(User.email == email))))

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    name=user.name,
                    email=user.email,
                    date_of_birth=user.date_of_birth,
                    password_hash=user.password_hash,
                    password_salt=user.password_salt,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain_user(row)
        except ConstraintViolationError:
            # a concurrent registration won the insert, report which field clashed
            if self.username_exists(user.username):
                raise UsernameTakenError() from None
            if self.email_exists(user.email):
                raise EmailTakenError() from None
            raise


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: Callable[[], OrmSession], *, clock: Clock = utc_now):
        self._session_factory = session_factory
        self._clock = clock

    def add(self, session: DomainSession) -> DomainSession:
        with unit_of_work_scope(self._session_factory) as db:
            row = Session(
                session_id=session.session_id,
                user_id=session.user_id,
                created_at=session.created_at,
                last_activity_at=session.last_activity_at,
                expires_at=session.expires_at,
                is_active=session.is_active,
            )
            db.add(row)
            db.flush()
            return _to_domain_session(row)

    def find_by_id(self, session_id: str) -> DomainSession | None:
        with unit_of_work_scope(self._session_factory) as db:
            row = db.get(Session, session_id)
            return _to_domain_session(row) if row else None

    def update_activity(self, session_id: str, expires_at: datetime) -> bool:
        with unit_of_work_scope(self._session_factory) as db:
            result = db.execute(
                update(Session)
                .where(Session.session_id == session_id, Session.is_active == true())
                .values(last_activity_at=self._clock(), expires_at=expires_at)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount > 0

    def invalidate(self, session_id: str) -> None:
        with unit_of_work_scope(self._session_factory) as db:
            db.execute(
                update(Session)
                .where(Session.session_id == session_id)
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )

    def purge_inactive(self) -> int:
        with unit_of_work_scope(self._session_factory) as db:
            result = db.execute(
                delete(Session)
                .where(or_(Session.expires_at < self._clock(), Session.is_active == false()))
                .execution_options(synchronize_session=False)
            )
            return result.rowcount
