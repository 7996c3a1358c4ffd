# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps
from typing import cast

from flask import Request, g, request

from taskboard.domain.users.entities import TokenClaims
from taskboard.domain.users.repositories import TokenService
from taskboard.shared.errors import UnauthorizedError
from taskboard.shared.logging import logger

BEARER_PREFIX = "Bearer "


class AuthedRequest(Request):
    user_id: int
    user_email: str


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


class RequestAuthenticator:
    """Resolves the caller identity from a bearer header or the auth cookie."""

    def __init__(self, *, tokens: TokenService, cookie_name: str) -> None:
        self._tokens = tokens
        self._cookie_name = cookie_name

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def extract_token(self, req: Request) -> str | None:
        auth = req.headers.get("Authorization", "")
        if auth.startswith(BEARER_PREFIX):
            token = auth[len(BEARER_PREFIX):].strip()
            if token:
                return token
        return req.cookies.get(self._cookie_name) or None

    def authenticate(self, req: Request) -> TokenClaims | None:
        token = self.extract_token(req)
        if not token:
            return None
        return self._tokens.verify(token)


def auth_required(f):
    """Guard a controller method; the controller must expose ``_authenticator``."""

    @wraps(f)
    def inner(self, *a, **kw):
        authenticator: RequestAuthenticator = self._authenticator
        claims = authenticator.authenticate(request)
        if claims is None:
            logger.warning(
                f"Auth failed (missing/invalid token) on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise UnauthorizedError()

        request.user_id = claims.user_id
        request.user_email = claims.email
        g.user_id = claims.user_id
        logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
        return f(self, *a, **kw)

    return inner


__all__ = ["AuthedRequest", "RequestAuthenticator", "auth_required", "authed_request"]
