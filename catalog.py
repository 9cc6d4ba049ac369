"""
Registry Catalog — Static, read-only list of Danish registries.

Loads data/registries.json once and keeps it in memory. Records are frozen
dataclasses: nothing in the app mutates the catalog after startup.
"""
import json
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

import config


class Category(str, Enum):
    POPULATION = "Population"
    LABOR = "Labor Market"
    EDUCATION = "Education"
    HEALTH = "Health"
    INCOME = "Income & Tax"
    BUSINESS = "Business"
    HOUSING = "Housing"


# ──────────────────────────────────────────────
# Data Structures
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class VariableDescriptor:
    name: str
    description: str
    type: Optional[str] = None       # e.g. Numeric, String
    period: Optional[str] = None     # e.g. 1980-2023


@dataclass(frozen=True)
class PaperReference:
    title: str
    authors: str
    url: str
    journal: Optional[str] = None
    year: Optional[str] = None


@dataclass(frozen=True)
class RegistryRecord:
    id: str
    code: str                        # e.g. BEF, IND, IDAN
    name: str
    category: Category
    description: str
    documentation_url: str
    key_variables: tuple[VariableDescriptor, ...] = ()
    papers: tuple[PaperReference, ...] = ()

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    def summary(self) -> dict:
        """Card view for the registry list page."""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "category": self.category.value,
            "description": self.description,
        }


def _parse_record(raw: dict) -> RegistryRecord:
    return RegistryRecord(
        id=raw["id"],
        code=raw["code"],
        name=raw["name"],
        category=Category(raw["category"]),
        description=raw["description"],
        documentation_url=raw["documentation_url"],
        key_variables=tuple(VariableDescriptor(**v) for v in raw.get("key_variables", [])),
        papers=tuple(PaperReference(**p) for p in raw.get("papers", [])),
    )


# ──────────────────────────────────────────────
# Loading & Lookup
# ──────────────────────────────────────────────
_registries: tuple[RegistryRecord, ...] | None = None


def load_registries(path: str = None) -> tuple[RegistryRecord, ...]:
    """
    Load registry records from JSON.

    Without `path`, reads config.REGISTRIES_FILE once and caches the result.
    """
    global _registries
    if path is None and _registries is not None:
        return _registries

    with open(path or config.REGISTRIES_FILE, "r", encoding="utf-8") as f:
        records = tuple(_parse_record(raw) for raw in json.load(f))

    if path is None:
        _registries = records
        print(f"📚 Catalog loaded: {len(records)} registries")
    return records


def get_registry(registry_id: str, registries=None) -> RegistryRecord | None:
    registries = load_registries() if registries is None else registries
    return next((r for r in registries if r.id == registry_id), None)


def filter_registries(search: str, registries=None) -> list[RegistryRecord]:
    """Case-insensitive substring match on name, code, or category."""
    registries = load_registries() if registries is None else registries
    needle = (search or "").strip().lower()
    return [
        r for r in registries
        if needle in r.name.lower()
        or needle in r.code.lower()
        or needle in r.category.value.lower()
    ]
