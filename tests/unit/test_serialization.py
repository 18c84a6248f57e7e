"""Unit tests for JSON conversion of calculation records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from lohnrechner.backend.app.models import ShiftType
from lohnrechner.backend.app.services.serialization import to_payload
from lohnrechner.backend.config.schema import RegionalCeiling, TaxYearManifestEntry


@dataclass(frozen=True)
class _Record:
    amount: float
    day: date
    record_id: UUID
    by_type: dict = field(default_factory=dict)
    rows: tuple = ()


def test_dataclasses_are_flattened_and_rounded() -> None:
    record = _Record(
        amount=1234.5678,
        day=date(2025, 6, 1),
        record_id=UUID("12345678-1234-5678-1234-567812345678"),
        by_type={ShiftType.NIGHT: 48.004, date(2025, 6, 2): 1.0},
        rows=(0.125, "text", None, True),
    )

    assert to_payload(record) == {
        "amount": 1234.57,
        "day": "2025-06-01",
        "record_id": "12345678-1234-5678-1234-567812345678",
        "by_type": {"night": 48.0, "2025-06-02": 1.0},
        "rows": [0.12, "text", None, True],
    }


def test_rounding_can_be_disabled() -> None:
    assert to_payload({"rate": 3.6125}, round_floats=False) == {"rate": 3.6125}


def test_pydantic_models_include_computed_fields() -> None:
    entry = TaxYearManifestEntry(year=2026)

    assert to_payload(entry) == {
        "year": 2026,
        "filename": None,
        "status": "active",
        "resolved_filename": "2026.yaml",
    }
    assert to_payload(RegionalCeiling(west=8050, east=8050)) == {"west": 8050, "east": 8050}


def test_enum_and_integer_values_pass_through() -> None:
    assert to_payload(ShiftType.LATE) == "late"
    assert to_payload(7) == 7
