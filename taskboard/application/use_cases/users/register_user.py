# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import UserAlreadyExistsError
from taskboard.domain.users.repositories import PasswordHasher, UserRepository
from taskboard.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> User:
        if self._users.find_by_email(email):
            logger.info("auth.register: email already registered")
            raise UserAlreadyExistsError()
        now = datetime.now(UTC)
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            email=email,
            name=name,
            password_hash=hashed,
            created_at=now,
            updated_at=now,
        )
        # the unique constraint still guards against a concurrent registration
        return self._users.add(user)
