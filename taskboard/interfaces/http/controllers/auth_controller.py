# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from taskboard.application.use_cases.users.get_profile import GetProfileUseCase
from taskboard.application.use_cases.users.login_user import LoginUserUseCase
from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.application.use_cases.users.update_profile import UpdateProfileUseCase
from taskboard.infrastructure.auth import (
    RequestAuthenticator,
    auth_required,
    authed_request,
)
from taskboard.interfaces.http.dto.auth import (
    LoginRequestDTO,
    PublicUserDTO,
    RegisterRequestDTO,
    UpdateProfileRequestDTO,
)
from taskboard.shared.config import SecurityConfig
from taskboard.shared.errors.validation import raise_validation_error
from taskboard.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        authenticator: RequestAuthenticator,
        security: SecurityConfig,
        token_ttl: timedelta,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._get_profile_use_case = get_profile_use_case
        self._update_profile_use_case = update_profile_use_case
        self._authenticator = authenticator
        self._security = security
        self._token_ttl = token_ttl

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.name, dto.email, dto.password)

        logger.info(f"auth.register: ok user_id={user.id}")
        payload = {
            "message": "User registered successfully",
            "user": PublicUserDTO.from_entity(user).to_json(),
        }
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, issued = self._login_use_case.execute(dto.email, dto.password)

        response = jsonify(
            {
                "message": "Login successful",
                "user": PublicUserDTO.from_entity(user).to_json(),
                "token": issued.token,
            }
        )
        response.set_cookie(
            self._authenticator.cookie_name,
            issued.token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=int(self._token_ttl.total_seconds()),
        )
        logger.info(f"auth.login: ok user_id={user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        # tokens are stateless; logging out only drops the cookie
        response = jsonify({"message": "Logout successful"})
        response.delete_cookie(
            self._authenticator.cookie_name,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            httponly=True,
        )
        logger.info("auth.logout: ok")
        return response, 200

    @auth_required
    def me(self) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(authed_request().user_id)
        return jsonify({"user": PublicUserDTO.from_entity(user).to_json()}), 200

    @auth_required
    def update_me(self) -> tuple[Response, int]:
        user_id = authed_request().user_id
        try:
            dto = UpdateProfileRequestDTO.model_validate(
                request.get_json(silent=True) or {}
            )
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._update_profile_use_case.execute(
            user_id, name=dto.name, email=dto.email
        )
        logger.info(f"auth.profile: updated user_id={user_id}")
        return (
            jsonify(
                {
                    "message": "Profile updated successfully",
                    "user": PublicUserDTO.from_entity(user).to_json(),
                }
            ),
            200,
        )

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/me", view_func=self.update_me, methods=["PUT"])
        return bp
