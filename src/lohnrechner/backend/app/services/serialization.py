"""Convert calculation records into JSON-ready structures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from .calculators.utils import round_currency


def _serialise_key(key: Any) -> Any:
    if isinstance(key, Enum):
        return key.value
    if isinstance(key, date):
        return key.isoformat()
    return key


def to_payload(value: Any, *, round_floats: bool = True) -> Any:
    """Recursively convert dataclasses and pydantic models into plain data.

    Floats are rounded to cents unless ``round_floats`` is disabled, which the
    configuration endpoints use to expose rates verbatim.
    """

    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, float):
        return round_currency(value) if round_floats else value

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, UUID):
        return str(value)

    if hasattr(value, "model_dump"):
        return to_payload(value.model_dump(mode="python"), round_floats=round_floats)

    if is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_payload(getattr(value, field.name), round_floats=round_floats)
            for field in fields(value)
        }

    if isinstance(value, Mapping):
        return {
            _serialise_key(key): to_payload(item, round_floats=round_floats)
            for key, item in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return [to_payload(item, round_floats=round_floats) for item in value]

    return value


__all__ = ["to_payload"]
