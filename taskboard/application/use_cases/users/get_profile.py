# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.users.entities import User
from taskboard.domain.users.repositories import UserRepository
from taskboard.shared.errors import UnauthorizedError


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            # token outlived its account
            raise UnauthorizedError()
        return user


__all__ = ["GetProfileUseCase"]
