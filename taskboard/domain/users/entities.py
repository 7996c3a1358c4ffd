# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Identity carried by a session token."""

    user_id: int
    email: str


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str
    claims: TokenClaims
    expires_at: datetime
