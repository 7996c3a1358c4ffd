# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from taskboard.domain.users.entities import IssuedToken, TokenClaims, User
from taskboard.domain.users.exceptions import InvalidCredentialsError
from taskboard.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from taskboard.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    @cached_property
    def _dummy_hash(self) -> str:
        return self._password_hasher.hash("login-timing-placeholder")

    def execute(self, email: str, password: str) -> tuple[User, IssuedToken]:
        user = self._users.find_by_email(email)
        stored_hash = user.password_hash if user is not None else self._dummy_hash
        password_valid = self._password_hasher.verify(password, stored_hash)

        if user is None or not password_valid:
            # same error and same hashing cost for unknown email and wrong password
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        issued = self._tokens.sign(TokenClaims(user_id=user.id, email=user.email))
        return user, issued
