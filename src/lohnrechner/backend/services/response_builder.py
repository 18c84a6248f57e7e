"""Utilities for turning calculation output into Flask responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import jsonify

from lohnrechner.backend.app.http import ResponseTuple
from lohnrechner.backend.app.services.serialization import to_payload


def build_calculation_response(result: Any, *, status: int = 200) -> ResponseTuple:
    """Return a JSON response for ``result``.

    Service functions already hand back plain mappings; calculator records
    (dataclasses) are serialised on the way out with amounts rounded to cents.
    """

    payload = result if isinstance(result, Mapping) else to_payload(result)
    return jsonify(payload), status


__all__ = ["ResponseTuple", "build_calculation_response"]
