"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from lohnrechner.backend.services.request_parser import parse_calculation_payload


def test_parse_payload_takes_year_from_query(app: Flask) -> None:
    """The ``year`` query parameter fills in a missing body field."""

    with app.test_request_context(
        "/api/v1/calculations/gross-to-net?year=2024",
        method="POST",
        json={"gross_monthly": 4000},
    ):
        payload = parse_calculation_payload(request)

    assert payload == {"gross_monthly": 4000, "year": 2024}


def test_parse_payload_preserves_explicit_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations/gross-to-net?year=2024",
        method="POST",
        json={"gross_monthly": 4000, "year": 2025},
    ):
        payload = parse_calculation_payload(request)

    assert payload["year"] == 2025


def test_parse_payload_ignores_non_numeric_query_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations/gross-to-net?year=latest",
        method="POST",
        json={"gross_monthly": 4000},
    ):
        payload = parse_calculation_payload(request)

    assert "year" not in payload


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/calculations/gross-to-net",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest, match="must be an object"):
            parse_calculation_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations/gross-to-net",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_calculation_payload(request)
