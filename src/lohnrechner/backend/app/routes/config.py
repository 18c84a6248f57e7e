"""Expose the YAML-backed year configuration to API clients."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from lohnrechner.backend.app.http import not_found
from lohnrechner.backend.app.services.serialization import to_payload
from lohnrechner.backend.config.year_config import (
    YearConfiguration,
    load_manifest,
    load_year_configuration,
    manifest_entries,
)
from lohnrechner.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    return {
        "version": get_project_version(),
        "supported_years": list(manifest.supported_years),
        "default_year": manifest.default_year,
    }


def _year_summary(config: YearConfiguration, status: str) -> dict[str, Any]:
    social = config.social_insurance
    return {
        "year": config.year,
        "status": status,
        "minijob_ceiling": social.minijob.monthly_ceiling,
        "midijob_upper_bound": social.midijob.upper_bound,
        "assessment_ceilings": to_payload(social.ceilings, round_floats=False),
        "solidarity_free_threshold": config.solidarity.free_threshold,
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with their headline thresholds."""

    years = [
        _year_summary(load_year_configuration(entry.year), entry.status)
        for entry in manifest_entries()
    ]
    metadata = get_configuration_metadata()
    payload = {
        "years": years,
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>")
def get_year(year: int) -> tuple[Any, int]:
    """Return the full configuration bundle for ``year`` with unrounded rates."""

    try:
        config = load_year_configuration(year)
    except FileNotFoundError as exc:
        return not_found(str(exc))
    return jsonify(to_payload(config, round_floats=False)), 200
