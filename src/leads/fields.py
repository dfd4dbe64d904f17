from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from jsonschema import Draft202012Validator

PACKAGE_DIR = Path(__file__).resolve().parent
REGISTRY_PATH = PACKAGE_DIR / "registry" / "lead_registry.json"
SCHEMA_PATH = PACKAGE_DIR / "schema" / "lead_registry_v1.json"

# Attributes of extract.LeadRecord; the registry must describe exactly these.
LEAD_KEYS = (
    "caller_name",
    "phone_number",
    "email_address",
    "reason_for_calling",
    "property_type",
    "number_of_bedrooms",
    "pickup_zip_code",
    "delivery_zip_code",
    "move_date",
)


class RegistryError(ValueError):
    """Raised when the lead registry does not match its schema."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid lead registry: " + "; ".join(problems))


@dataclass(frozen=True)
class CollectionPath:
    path: str
    shape: str

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))


@dataclass(frozen=True)
class LeadField:
    key: str
    label: str
    section: str
    placeholder: str


@dataclass(frozen=True)
class LeadRegistry:
    version: str
    collection_paths: tuple[CollectionPath, ...]
    fields: tuple[LeadField, ...]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(field.key for field in self.fields)

    def section(self, name: str) -> tuple[LeadField, ...]:
        return tuple(field for field in self.fields if field.section == name)


def _load_json(path: str | Path) -> dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return cast(dict[str, Any], json.load(handle))


def _schema_problems(data: Any, schema: dict[str, Any]) -> list[str]:
    validator = Draft202012Validator(schema)
    problems: list[str] = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        location = ".".join(str(p) for p in error.path) or "$"
        problems.append(f"{location}: {error.message}")
    return problems


def _duplicate_problems(data: dict[str, Any]) -> list[str]:
    problems: list[str] = []
    seen_paths: set[str] = set()
    for entry in data["collection_paths"]:
        if entry["path"] in seen_paths:
            problems.append(f"collection_paths: duplicate path '{entry['path']}'")
        seen_paths.add(entry["path"])
    seen_keys: set[str] = set()
    for field in data["fields"]:
        if field["key"] in seen_keys:
            problems.append(f"fields: duplicate key '{field['key']}'")
        seen_keys.add(field["key"])
    return problems


def _coverage_problems(data: dict[str, Any]) -> list[str]:
    keys = {field["key"] for field in data["fields"]}
    problems = [f"fields: missing key '{key}'" for key in LEAD_KEYS if key not in keys]
    problems.extend(
        f"fields: unknown key '{key}'" for key in sorted(keys) if key not in LEAD_KEYS
    )
    return problems


def parse_registry(data: Any, schema: dict[str, Any] | None = None) -> LeadRegistry:
    schema = schema if schema is not None else _load_json(SCHEMA_PATH)
    problems = _schema_problems(data, schema)
    if not problems:
        problems = _duplicate_problems(data) + _coverage_problems(data)
    if problems:
        raise RegistryError(problems)
    return LeadRegistry(
        version=data["version"],
        collection_paths=tuple(
            CollectionPath(path=entry["path"], shape=entry["shape"])
            for entry in data["collection_paths"]
        ),
        fields=tuple(
            LeadField(
                key=field["key"],
                label=field["label"],
                section=field["section"],
                placeholder=field["placeholder"],
            )
            for field in data["fields"]
        ),
    )


def load_registry(path: str | Path | None = None) -> LeadRegistry:
    """Read and validate a registry file. Defaults to the bundled registry."""

    return parse_registry(_load_json(path or REGISTRY_PATH))


@lru_cache(maxsize=1)
def default_registry() -> LeadRegistry:
    return load_registry()
