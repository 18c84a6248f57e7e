"""Integration tests for the configuration endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from lohnrechner.backend.version import get_project_version


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {
        "version": get_project_version(),
        "supported_years": [2024, 2025],
        "default_year": 2025,
    }


def test_years_endpoint_lists_thresholds(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/years")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_year"] == 2025
    assert payload["supported_years"] == [2024, 2025]

    by_year = {entry["year"]: entry for entry in payload["years"]}
    assert by_year[2025]["status"] == "current"
    assert by_year[2025]["minijob_ceiling"] == 556
    assert by_year[2024]["minijob_ceiling"] == 538
    assert by_year[2025]["midijob_upper_bound"] == 2000
    ceilings_2024 = by_year[2024]["assessment_ceilings"]["pension_unemployment"]
    assert ceilings_2024 == {"west": 7550, "east": 7450}


def test_year_endpoint_returns_full_bundle(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2025")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["year"] == 2025
    assert payload["income_tax"]["class_columns"]["IV"] == "I_IV"
    assert payload["social_insurance"]["pension"]["employee_rate"] == 9.3
    assert payload["social_insurance"]["pension"]["total_rate"] == 18.6
    assert payload["gastronomy"]["meal_values"]["breakfast"] == 2.17


def test_year_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2031")

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert "2031" in payload["message"]
