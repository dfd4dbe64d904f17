from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .fields import LEAD_KEYS, CollectionPath, LeadRegistry, default_registry

logger = logging.getLogger(__name__)

PAIR_ID_KEYS = ("data_collection_id", "id")


@dataclass(frozen=True)
class LeadRecord:
    """Lead fields for a single webhook delivery, placeholders already applied."""

    caller_name: Any
    phone_number: Any
    email_address: Any
    reason_for_calling: Any
    property_type: Any
    number_of_bedrooms: Any
    pickup_zip_code: Any
    delivery_zip_code: Any
    move_date: Any
    missing_fields: tuple[str, ...] = field(default=())

    def as_dict(self) -> dict[str, Any]:
        return {key: getattr(self, key) for key in LEAD_KEYS}


def _get_path(payload: Any, parts: tuple[str, ...]) -> Any:
    current: Any = payload
    for part in parts:
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
    return current


def _pair_id(entry: Mapping[str, Any]) -> str | None:
    for key in PAIR_ID_KEYS:
        identifier = entry.get(key)
        if not identifier or isinstance(identifier, Mapping | list | tuple):
            continue
        return str(identifier)
    return None


def _normalize_pairs(value: Any) -> dict[str, Any]:
    if not isinstance(value, list | tuple):
        return {}
    result: dict[str, Any] = {}
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        identifier = _pair_id(entry)
        if identifier is None or entry.get("value") is None:
            continue
        result[identifier] = entry["value"]
    return result


def _normalize_wrapped(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    result: dict[str, Any] = {}
    for key, wrapper in value.items():
        if isinstance(wrapper, Mapping) and wrapper.get("value") is not None:
            result[str(key)] = wrapper["value"]
    return result


def _normalize_flat(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    result: dict[str, Any] = {}
    for key, raw in value.items():
        if isinstance(raw, Mapping) and "value" in raw:
            raw = raw["value"]
        if raw is not None:
            result[str(key)] = raw
    return result


def _normalize_auto(value: Any) -> dict[str, Any]:
    if isinstance(value, list | tuple):
        return _normalize_pairs(value)
    return _normalize_flat(value)


NORMALIZERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "pairs": _normalize_pairs,
    "wrapped": _normalize_wrapped,
    "flat": _normalize_flat,
    "auto": _normalize_auto,
}


def _collect(payload: Any, candidate: CollectionPath) -> dict[str, Any]:
    raw = _get_path(payload, candidate.parts)
    if raw is None:
        return {}
    normalizer = NORMALIZERS.get(candidate.shape)
    if normalizer is None:
        logger.warning("No normalizer for shape %r at %s", candidate.shape, candidate.path)
        return {}
    return normalizer(raw)


def extract_collected_data(
    payload: Any, registry: LeadRegistry | None = None
) -> dict[str, Any]:
    """Return the first non-empty data collection found in ``payload``.

    Candidate paths are tried in registry order. The result maps field ids to the values
    exactly as the provider sent them; an empty dict means nothing was found.
    """

    registry = registry or default_registry()
    for candidate in registry.collection_paths:
        collected = _collect(payload, candidate)
        if collected:
            logger.debug("Data collection resolved at %s (%s)", candidate.path, candidate.shape)
            return collected
    return {}


def build_lead_record(
    collected: Mapping[str, Any], registry: LeadRegistry | None = None
) -> LeadRecord:
    registry = registry or default_registry()
    values: dict[str, Any] = {}
    missing: list[str] = []
    for lead_field in registry.fields:
        value = collected.get(lead_field.key)
        # Only absent/null falls back; "" and 0 are real answers.
        if value is None:
            missing.append(lead_field.key)
            value = lead_field.placeholder
        values[lead_field.key] = value
    return LeadRecord(**values, missing_fields=tuple(missing))


def extract_lead(payload: Any, registry: LeadRegistry | None = None) -> LeadRecord:
    return build_lead_record(extract_collected_data(payload, registry), registry)
