"""Unit coverage for year configuration discovery and parsing utilities."""

from __future__ import annotations

from pathlib import Path
from shutil import copy2

import pytest
import yaml

from lohnrechner.backend.config import year_config
from lohnrechner.backend.config.schema import ConfigurationError


@pytest.fixture()
def isolated_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary configuration directory patched into ``year_config``."""

    original_directory = year_config.CONFIG_DIRECTORY
    for filename in ("2024.yaml", "2025.yaml"):
        copy2(original_directory / filename, tmp_path / filename)

    manifest_path = tmp_path / "manifest.yaml"
    copy2(original_directory / "manifest.yaml", manifest_path)

    monkeypatch.setattr(year_config, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(year_config, "MANIFEST_FILE", manifest_path)
    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()

    yield tmp_path

    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()


def _write_manifest(directory: Path, entries: list[dict]) -> None:
    (directory / "manifest.yaml").write_text(
        yaml.safe_dump({"years": entries}, sort_keys=False), encoding="utf-8"
    )
    year_config.load_manifest.cache_clear()
    year_config.load_year_configuration.cache_clear()


def test_available_years_follow_manifest() -> None:
    assert year_config.available_years() == (2024, 2025)
    assert year_config.default_year() == 2025


def test_manifest_entry_defaults_filename() -> None:
    entry = year_config.load_manifest().get_entry(2025)

    assert entry.resolved_filename == "2025.yaml"
    assert entry.status == "current"


def test_load_year_configuration_parses_bundle() -> None:
    config = year_config.load_year_configuration(2025)

    assert config.year == 2025
    assert config.income_tax.column_for("IV") == "I_IV"
    assert config.social_insurance.minijob.monthly_ceiling == 556
    assert config.social_insurance.pension.total_rate == pytest.approx(18.6)
    assert config.construction.tariff_wages["west"]["skilled"] == 19.5


def test_unknown_year_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError):
        year_config.load_year_configuration(2031)


def test_resolve_configuration_prefers_explicit_bundle() -> None:
    config = year_config.load_year_configuration(2024)

    assert year_config.resolve_configuration(config, 2025) is config
    assert year_config.resolve_configuration(year=2024).year == 2024
    assert year_config.resolve_configuration().year == 2025


def test_new_year_is_discovered_from_manifest(isolated_config_directory: Path) -> None:
    copy2(isolated_config_directory / "2025.yaml", isolated_config_directory / "2026.yaml")
    _write_manifest(
        isolated_config_directory,
        [
            {"year": 2024, "status": "active"},
            {"year": 2025, "status": "active"},
            {"year": 2026},
        ],
    )

    assert year_config.available_years() == (2024, 2025, 2026)
    assert year_config.default_year() == 2026
    assert year_config.load_year_configuration(2026).year == 2026


def test_declared_year_without_file_is_reported(isolated_config_directory: Path) -> None:
    _write_manifest(
        isolated_config_directory,
        [{"year": 2025, "status": "current"}, {"year": 2027, "filename": "missing.yaml"}],
    )

    with pytest.raises(FileNotFoundError, match="missing.yaml"):
        year_config.load_year_configuration(2027)


def test_year_mismatch_is_rejected(isolated_config_directory: Path) -> None:
    source = yaml.safe_load((isolated_config_directory / "2025.yaml").read_text("utf-8"))
    source["year"] = 2024
    (isolated_config_directory / "2026.yaml").write_text(yaml.safe_dump(source), "utf-8")
    _write_manifest(isolated_config_directory, [{"year": 2026, "status": "current"}])

    with pytest.raises(ConfigurationError, match="year mismatch"):
        year_config.load_year_configuration(2026)


def test_invalid_values_raise_configuration_error(isolated_config_directory: Path) -> None:
    source = yaml.safe_load((isolated_config_directory / "2025.yaml").read_text("utf-8"))
    source["social_insurance"]["minijob"]["monthly_ceiling"] = 5000
    (isolated_config_directory / "2025.yaml").write_text(yaml.safe_dump(source), "utf-8")
    year_config.load_year_configuration.cache_clear()

    with pytest.raises(ConfigurationError, match="validation failed"):
        year_config.load_year_configuration(2025)


def test_duplicate_manifest_years_are_rejected(isolated_config_directory: Path) -> None:
    _write_manifest(isolated_config_directory, [{"year": 2025}, {"year": 2025}])

    with pytest.raises(ConfigurationError):
        year_config.load_manifest()


@pytest.mark.parametrize(
    ("section", "path", "value", "message"),
    [
        ("construction", ("tariff_wages", "east", "master"), 26.5, "must exceed the east tariff"),
        ("construction", ("tariff_wages", "west", "worker"), 30.0, "strictly by trade group"),
        ("nursing", ("care_level_rates", "lead"), 20.0, "strictly by tier"),
    ],
)
def test_misordered_industry_tables_fail_to_load(
    isolated_config_directory: Path,
    section: str,
    path: tuple[str, ...],
    value: float,
    message: str,
) -> None:
    bundle = isolated_config_directory / "2025.yaml"
    source = yaml.safe_load(bundle.read_text("utf-8"))
    target = source[section]
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value
    bundle.write_text(yaml.safe_dump(source), "utf-8")
    year_config.load_year_configuration.cache_clear()

    with pytest.raises(ConfigurationError, match=message):
        year_config.load_year_configuration(2025)
