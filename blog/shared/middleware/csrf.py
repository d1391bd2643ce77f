# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from functools import wraps

from flask import Flask, current_app, jsonify, request

from blog.shared.config import AppConfig

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def _is_enabled() -> bool:
    config: AppConfig = current_app.config["BLOG_CONFIG"]
    return config.security.enable_csrf


def configure_csrf(app: Flask, config: AppConfig) -> None:
    if not config.security.enable_csrf:
        return

    @app.after_request
    def _ensure_csrf_cookie(resp):
        if request.method in SAFE_METHODS and not request.cookies.get(CSRF_COOKIE):
            resp.set_cookie(
                CSRF_COOKIE,
                secrets.token_urlsafe(32),
                httponly=False,
                samesite="Strict",
                secure=True,
                max_age=60 * 60 * 24 * 7,
            )
        return resp


def csrf_protect(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not _is_enabled():
            return f(*args, **kwargs)
        if request.method in SAFE_METHODS:
            return f(*args, **kwargs)
        header = (request.headers.get(CSRF_HEADER) or "").strip()
        cookie = (request.cookies.get(CSRF_COOKIE) or "").strip()
        if not header or not cookie or not secrets.compare_digest(header, cookie):
            return jsonify({"error": "csrf"}), 403
        return f(*args, **kwargs)

    return wrapper


__all__ = ["configure_csrf", "csrf_protect"]
