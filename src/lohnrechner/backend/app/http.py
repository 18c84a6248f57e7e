"""JSON problem responses and the error handlers that emit them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import Flask, jsonify
from werkzeug.exceptions import BadRequest

from lohnrechner.backend.config.schema import ConfigurationError

_LOGGER = logging.getLogger(__name__)

ResponseTuple = tuple[Any, int]


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body: an error code, the HTTP status and details."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error, "status": self.status}
        if self.message:
            body["message"] = self.message
        body.update(self.extra)
        return body

    def to_response(self) -> ResponseTuple:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    return ProblemResponse(error=error, status=status, message=message, extra=extra)


def not_found(message: str, **extra: Any) -> ResponseTuple:
    """Return a 404 problem; ``extra`` carries details such as the supported values."""

    return problem_response("not_found", status=404, message=message, **extra).to_response()


# Handlers are matched along the exception MRO, so ConfigurationError is
# reported as a server fault before the generic ValueError mapping applies.
_ERROR_MAPPINGS: tuple[tuple[type[Exception], str, int], ...] = (
    (BadRequest, "bad_request", 400),
    (ConfigurationError, "configuration_error", 500),
    (ValueError, "validation_error", 400),
    (FileNotFoundError, "not_found", 404),
)


def _problem_handler(error: str, status: int) -> Callable[[Exception], ResponseTuple]:
    def handle(exc: Exception) -> ResponseTuple:
        message = getattr(exc, "description", None) or str(exc) or None
        if status >= 500:
            _LOGGER.error("%s: %s", error, exc)
        return problem_response(error, status=status, message=message).to_response()

    return handle


def register_error_handlers(app: Flask) -> None:
    """Answer request and domain errors with JSON problem responses."""

    for exc_type, error, status in _ERROR_MAPPINGS:
        app.register_error_handler(exc_type, _problem_handler(error, status))


__all__ = [
    "ProblemResponse",
    "ResponseTuple",
    "not_found",
    "problem_response",
    "register_error_handlers",
]
