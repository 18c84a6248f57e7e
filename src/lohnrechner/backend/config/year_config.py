"""Locate, parse and cache the per-year payroll configuration bundles.

Bundles live next to this module in ``data/`` unless ``LOHNRECHNER_CONFIG_DIR``
points elsewhere. ``manifest.yaml`` declares which payroll years exist and
which one is used when a request names no year.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .schema import (
    ConfigurationError,
    TaxYearManifest,
    TaxYearManifestEntry,
    YearConfiguration,
)

CONFIG_DIR_ENV = "LOHNRECHNER_CONFIG_DIR"
DEFAULT_CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_DIRECTORY = Path(os.getenv(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIRECTORY)
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _parse_bundle(model: type[_ModelT], path: Path, label: str, **defaults: Any) -> _ModelT:
    """Read the YAML mapping at ``path`` and validate it as ``model``."""

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as error:
        raise ConfigurationError(f"{label} is not valid YAML: {error}") from error
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{label} must be a mapping at the top level ({path.name})")

    for key, value in defaults.items():
        raw.setdefault(key, value)

    try:
        return model.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"{label} validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_manifest() -> TaxYearManifest:
    if not MANIFEST_FILE.is_file():
        raise FileNotFoundError(f"Payroll year manifest not found at {MANIFEST_FILE}")
    return _parse_bundle(TaxYearManifest, MANIFEST_FILE, "Payroll year manifest")


def manifest_entries() -> Sequence[TaxYearManifestEntry]:
    return load_manifest().years


def _bundle_path(year: int) -> Path:
    try:
        entry = load_manifest().get_entry(year)
    except KeyError as exc:
        supported = ", ".join(str(item) for item in available_years())
        raise FileNotFoundError(
            f"No payroll configuration for {year} (supported years: {supported})"
        ) from exc

    path = CONFIG_DIRECTORY / entry.resolved_filename
    if not path.is_file():
        raise FileNotFoundError(
            f"Payroll year {year} is declared but its bundle {path.name} is missing"
        )
    return path


@lru_cache(maxsize=8)
def load_year_configuration(year: int) -> YearConfiguration:
    """Return the validated configuration bundle for payroll ``year``.

    Years outside the manifest raise ``FileNotFoundError``; bundles that fail
    schema validation, or that declare a different year, raise
    ``ConfigurationError``.
    """

    configuration = _parse_bundle(
        YearConfiguration, _bundle_path(year), f"Configuration for {year}", year=year
    )
    if configuration.year != year:
        raise ConfigurationError(
            f"Configuration year mismatch: {year} bundle declares {configuration.year}"
        )
    return configuration


def available_years() -> Sequence[int]:
    return load_manifest().supported_years


def default_year() -> int:
    """Return the year used when callers do not pick one explicitly."""

    return load_manifest().default_year


def resolve_configuration(
    config: YearConfiguration | None = None, year: int | None = None
) -> YearConfiguration:
    """Return ``config`` or load the bundle for ``year`` (default year if omitted)."""

    if config is not None:
        return config
    return load_year_configuration(year if year is not None else default_year())


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_DIR_ENV",
    "ConfigurationError",
    "MANIFEST_FILE",
    "YearConfiguration",
    "available_years",
    "default_year",
    "load_manifest",
    "load_year_configuration",
    "manifest_entries",
    "resolve_configuration",
]
