# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request correlation ids and access logging."""

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from taskboard.shared.config import load_config
from taskboard.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

_SECRET_HEADERS = frozenset({"authorization", "cookie"})
_SECRET_PARAM_HINTS = ("password", "token", "secret")


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _SECRET_HEADERS else value
        for key, value in headers.items()
    }


def _safe_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(hint in key.lower() for hint in _SECRET_PARAM_HINTS) else value
        for key, value in params.items()
    }


def _incoming_request_id() -> str:
    supplied = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return secrets.token_hex(8)


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start_request() -> None:
        g.correlation_id = _incoming_request_id()
        g.request_started = time.perf_counter()
        set_correlation_id(g.correlation_id)

        if verbose:
            logger.debug(
                f"-> {request.method} {request.path} from {client_ip()} "
                f"query={_safe_params(request.args)} headers={_safe_headers(request.headers)}"
            )

    @app.after_request
    def _finish_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<- {request.method} {request.path} status={response.status_code} "
            f"dt_ms={elapsed_ms:.0f} user={g.get('user_id')}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _end_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"request failed: {type(exc).__name__} on {request.method} {request.path} "
                f"user={g.get('user_id')}"
            )
        clear_correlation_id()


__all__ = ["client_ip", "configure_request_logging"]
