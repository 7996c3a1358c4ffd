# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Render every failure as ``{"error", "message", "context"?}`` JSON."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from taskboard.shared.config import load_config
from taskboard.shared.errors import AppError, ValidationError, format_pydantic_errors
from taskboard.shared.logging import logger

from .request_logger import client_ip

INTERNAL_ERROR_BODY = {"error": "internal_error", "message": "Internal server error"}


def render_app_error(error: AppError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), int(error.status)


def render_http_exception(exc: HTTPException) -> tuple[Response, int]:
    code = (exc.name or "http_error").lower().replace(" ", "_")
    body = {"error": code, "message": exc.description or exc.name}
    return jsonify(body), exc.code or HTTPStatus.INTERNAL_SERVER_ERROR


def configure_error_handling(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} ({int(exc.status)}) on {where}")
        else:
            logger.info(f"{exc.code} ({int(exc.status)}) on {where}")
        return render_app_error(exc)

    @app.errorhandler(PydanticValidationError)
    def _on_unconverted_validation(exc: PydanticValidationError):
        # controllers convert their own DTO errors; this catches the rest
        logger.warning(f"unconverted validation error on {request.method} {request.path}")
        return render_app_error(ValidationError(context=format_pydantic_errors(exc)))

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return render_http_exception(exc)

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        if verbose:
            logger.exception(
                f"unhandled {type(exc).__name__} on {request.method} {request.path} "
                f"from {client_ip()} user={g.get('user_id')}"
            )
        else:
            logger.error(f"unhandled {type(exc).__name__} on {request.method} {request.path}")
        return jsonify(INTERNAL_ERROR_BODY), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["configure_error_handling", "render_app_error", "render_http_exception"]
