# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Flask, Response, g, request

from blog.application.use_cases.users.validate_session import (
    AuthenticatedSession,
    ValidateSessionUseCase,
)
from blog.domain.users.entities import User
from blog.interfaces.http.cookies import apply_cookie_directive
from blog.shared.errors import AuthenticationRequiredError
from blog.shared.logging import logger

_UNSET = object()


class SessionAuthenticator:
    """Resolves the session cookie of the current request.

    The result is memoised on ``flask.g`` so a request validates (and slides)
    its session at most once.
    """

    def __init__(self, *, validate_session: ValidateSessionUseCase, cookie_name: str) -> None:
        self._validate_session = validate_session
        self._cookie_name = cookie_name

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def token(self) -> str | None:
        return request.cookies.get(self._cookie_name) or None

    def current(self) -> AuthenticatedSession | None:
        cached = getattr(g, "_blog_auth", _UNSET)
        if cached is not _UNSET:
            return cached
        auth = self._validate_session.execute(self.token())
        g._blog_auth = auth
        g.current_user = auth.user if auth else None
        if auth is not None:
            g.pending_session_cookie = auth.cookie
        return auth

    def current_user(self) -> User | None:
        auth = self.current()
        return auth.user if auth else None

    def required(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapper(*args, **kwargs):
            auth = self.current()
            if auth is None:
                logger.info(f"auth: anonymous request to {request.method} {request.path}")
                raise AuthenticationRequiredError()
            return view(*args, **kwargs)

        return wrapper

    def install(self, app: Flask) -> None:
        """Re-emit the renewed session cookie on every response, errors included."""

        @app.after_request
        def _emit_renewed_cookie(response: Response) -> Response:
            return apply_cookie_directive(response, g.get("pending_session_cookie"))


__all__ = ["SessionAuthenticator"]
