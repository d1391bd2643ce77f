# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response

from blog.domain.users.entities import CookieDirective


def apply_cookie_directive(response: Response, directive: CookieDirective | None) -> Response:
    """Translate a session cookie directive into a ``Set-Cookie`` header."""
    if directive is None:
        return response
    if directive.clears:
        response.delete_cookie(
            directive.name,
            secure=directive.secure,
            httponly=directive.http_only,
            samesite=directive.same_site,
        )
        return response
    response.set_cookie(
        directive.name,
        directive.value or "",
        expires=directive.expires_at,
        secure=directive.secure,
        httponly=directive.http_only,
        samesite=directive.same_site,
    )
    return response


__all__ = ["apply_cookie_directive"]
