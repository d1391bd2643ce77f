# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog.application.use_cases.users.login_user import LoginUserUseCase
from blog.application.use_cases.users.logout_user import LogoutUserUseCase
from blog.application.use_cases.users.register_user import (
    RegisterUserUseCase,
    RegistrationInput,
)
from blog.domain.users.exceptions import InvalidCredentialsError
from blog.infrastructure.audit import AuditAction, audit_log
from blog.interfaces.http.cookies import apply_cookie_directive
from blog.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UserDTO,
)
from blog.interfaces.http.session_auth import SessionAuthenticator
from blog.shared.errors.validation import raise_validation_error
from blog.shared.logging import logger
from blog.shared.middleware.csrf import csrf_protect
from blog.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        authenticator: SessionAuthenticator,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._authenticator = authenticator

    @csrf_protect
    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(
            RegistrationInput(
                username=dto.username,
                name=dto.name,
                email=str(dto.email),
                date_of_birth=dto.date_of_birth,
                password=dto.password,
            )
        )

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": dto.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        payload = AuthSuccessDTO(user=UserDTO.model_validate(user)).model_dump(mode="json")
        return jsonify(payload), 201

    @csrf_protect
    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        try:
            result = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            details={"username": dto.username},
            success=True,
        )

        payload = AuthSuccessDTO(user=UserDTO.model_validate(result.user)).model_dump(mode="json")
        response = apply_cookie_directive(jsonify(payload), result.cookie)
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, 200

    @csrf_protect
    def logout(self) -> tuple[Response, int]:
        directive = self._logout_use_case.execute(self._authenticator.token())

        audit_log(
            AuditAction.LOGOUT,
            ip_address=_get_client_ip(),
            details={"had_session": directive is not None},
            success=True,
        )

        response = apply_cookie_directive(jsonify(AuthSuccessDTO().model_dump()), directive)
        logger.info("auth.logout: ok")
        return response, 200

    def me(self) -> Response:
        user = self._authenticator.current_user()
        return jsonify(UserDTO.model_validate(user).model_dump(mode="json"))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/me", endpoint="me", view_func=self._authenticator.required(self.me), methods=["GET"]
        )
        return bp
