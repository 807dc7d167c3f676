"""Content store: flat JSON collections keyed by ``Slug``."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]

PRODUCTS = "products"
COMPANIES = "companies"
PATENTS = "patents"
SKILLS = "skills"
PRODUCT_IMAGES = "product-images"

COLLECTIONS: dict[str, str] = {
    PRODUCTS: "products.json",
    COMPANIES: "companies.json",
    PATENTS: "patents.json",
    SKILLS: "skills.json",
    PRODUCT_IMAGES: "product-images.json",
}


def text(record: Record, *names: str) -> str:
    """First non-empty value among *names*, stripped; ``""`` if none."""
    for name in names:
        value = record.get(name)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def list_field(record: Record, name: str) -> list[str]:
    """Read a slug-list field stored either as a JSON array or ``;``-delimited string."""
    value = record.get(name)
    if not value:
        return []
    if isinstance(value, str):
        items = value.split(";")
    else:
        items = [str(v) for v in value]
    return [item.strip() for item in items if item and item.strip()]


def is_true(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "true"


def index_by_slug(records: list[Record]) -> dict[str, Record]:
    return {r["Slug"]: r for r in records if r.get("Slug")}


def find_by_slug(records: list[Record], slug: str | None) -> Record | None:
    if not slug:
        return None
    for record in records:
        if record.get("Slug") == slug:
            return record
    return None


@dataclass(frozen=True)
class ContentBundle:
    """The collections fetched for one page render. Absent collections are empty."""

    products: list[Record] = field(default_factory=list)
    companies: list[Record] = field(default_factory=list)
    patents: list[Record] = field(default_factory=list)
    skills: list[Record] = field(default_factory=list)
    product_images: list[Record] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: dict[str, list[Record]]) -> ContentBundle:
        return cls(
            products=list(data.get(PRODUCTS) or []),
            companies=list(data.get(COMPANIES) or []),
            patents=list(data.get(PATENTS) or []),
            skills=list(data.get(SKILLS) or []),
            product_images=list(data.get(PRODUCT_IMAGES) or []),
        )

    def skills_by_slug(self) -> dict[str, Record]:
        return index_by_slug(self.skills)
