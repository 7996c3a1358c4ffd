# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JWT session tokens.

Tokens are HS256-signed JWTs carrying ``userId``, ``email``, ``iat`` and
``exp``. Verification returns ``None`` for every ordinary failure (bad
signature, malformed input, expiry, missing claims); an empty secret is a
programming/configuration error and raises.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from taskboard.domain.users.entities import IssuedToken, TokenClaims
from taskboard.domain.users.repositories import TokenService
from taskboard.shared.logging import logger

DEFAULT_TOKEN_TTL = timedelta(days=7)
DEFAULT_ALGORITHM = "HS256"

_REQUIRED_CLAIMS = ["exp", "iat", "userId", "email"]


def _require_secret(secret: str) -> None:
    if not secret or not secret.strip():
        raise ValueError("a non-empty signing secret is required")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def sign_token(
    claims: TokenClaims,
    secret: str,
    ttl: timedelta = DEFAULT_TOKEN_TTL,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> IssuedToken:
    _require_secret(secret)
    issued_at = now or _utcnow()
    expires_at = issued_at + ttl
    payload = {
        "userId": claims.user_id,
        "email": claims.email,
        "iat": issued_at,
        "exp": expires_at,
    }
    token = jwt.encode(payload, secret, algorithm=algorithm)
    return IssuedToken(token=token, claims=claims, expires_at=expires_at)


def verify_token(
    token: str,
    secret: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> TokenClaims | None:
    _require_secret(secret)
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("auth.token: expired")
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug(f"auth.token: invalid ({type(exc).__name__})")
        return None

    user_id = payload.get("userId")
    email = payload.get("email")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
        logger.debug("auth.token: invalid claim types")
        return None
    return TokenClaims(user_id=user_id, email=email)


class JwtTokenService(TokenService):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        _require_secret(secret)
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def sign(self, claims: TokenClaims) -> IssuedToken:
        return sign_token(
            claims, self._secret, self._ttl, algorithm=self._algorithm, now=self._clock()
        )

    def verify(self, token: str) -> TokenClaims | None:
        return verify_token(token, self._secret, algorithm=self._algorithm)


__all__ = [
    "DEFAULT_TOKEN_TTL",
    "JwtTokenService",
    "sign_token",
    "verify_token",
]
