# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from blog.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_HASHED_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-csrf-token"})
_REDACTED_PARAMS = ("password", "token", "session", "secret")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _HASHED_HEADERS else value
        for name, value in request.headers.items()
    }


def _safe_args() -> dict[str, str]:
    return {
        name: "<redacted>" if any(p in name.lower() for p in _REDACTED_PARAMS) else value
        for name, value in request.args.items()
    }


def _current_user_id() -> int | None:
    return getattr(g.get("current_user"), "id", None)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Tag every request with a correlation id and log its outcome."""

    @app.before_request
    def _open_request_scope() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(8))
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.info(
                f"--> {request.method} {request.path} ip={_client_ip()} "
                f"args={_safe_args()} headers={_safe_headers()} "
                f"body={request.content_length or 0}B"
            )
        else:
            logger.debug(f"--> {request.method} {request.path} ip={_client_ip()}")

    @app.after_request
    def _close_request_scope(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={_current_user_id()}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _reset_correlation(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"request failed: {request.method} {request.path} "
                f"ip={_client_ip()} user={_current_user_id()}: {type(exc).__name__}"
            )
        clear_correlation_id()
