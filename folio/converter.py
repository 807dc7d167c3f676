"""Convert Webflow CMS CSV exports into the JSON content collections."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Callable

from folio.formatters import format_date
from folio.schemas import ConvertResult
from folio.store import Record
from folio.utils import write_json
from folio.views import sort_order

log = logging.getLogger(__name__)

# Fields kept per collection; everything else in the export is CMS metadata.
PRODUCT_FIELDS = (
    "Name", "Slug", "50 Character Description", "Startup Company", "Featured", "Sort Order",
    "Product Type", "Summary", "Description", "Thumbnai Image", "Project Image",
    "Start Date", "End Date", "Highlights", "Press Release", "Services Text", "Website",
    "Live Link", "Tags", "Demo Video", "Services", "In Progress",
)
COMPANY_FIELDS = (
    "Name", "Slug", "Website", "Website Short", "Logo (White)", "Logo (blue)",
    "Start Date", "End Date", "50 Character Description", "Detailed Description",
    "Highlights", "Company Type", "Industry", "Hero Image", "Thumbnail",
    "Headcount at Start", "Headcount at End", "Recent Funding", "Recent Stage", "Founding Year",
    "Skills", "Products", "Patents",
)
PATENT_FIELDS = (
    "Name", "Slug", "50 Character Description", "Startup Company", "Application ID",
    "Google Patent URL", "Abstract", "Featured", "Sort Order", "Summary", "Description",
    "Thumbnai Image", "Project Image", "Start Date", "End Date", "Patented Date",
    "Highlights", "Services", "In Progress",
)
SKILL_FIELDS = ("Name", "Slug", "Description", "Order")
TAG_FIELDS = ("Name", "Slug")
PRODUCT_IMAGE_FIELDS = ("Name", "Slug", "Button ID (Image Order)", "Product", "Image", "Image Description")

_DATE_FIELDS = ("Start Date", "End Date", "Patented Date")


def _s(value: object) -> str:
    """Safely coerce a CSV cell to a stripped string."""
    if value is None:
        return ""
    return str(value).strip()


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _published(row: dict[str, str]) -> bool:
    return _s(row.get("Draft")).lower() != "true" and _s(row.get("Archived")).lower() != "true"


def _pick(row: dict[str, str], fields: tuple[str, ...]) -> Record:
    out: Record = {}
    for name in fields:
        value = _s(row.get(name))
        if value:
            out[name] = value
    return out


def _dates(record: Record) -> Record:
    for name in _DATE_FIELDS:
        if record.get(name):
            record[name] = format_date(record[name])
    return record


def _lists(record: Record, *names: str) -> Record:
    for name in names:
        if record.get(name):
            record[name] = _split(record[name])
    return record


def _sort_order(record: Record) -> Record:
    if "Sort Order" in record:
        try:
            record["Sort Order"] = int(record["Sort Order"])
        except ValueError:
            record["Sort Order"] = 0
    return record


# ---------------------------------------------------------------------------
# Per-collection conversion
# ---------------------------------------------------------------------------


def convert_products(rows: list[dict[str, str]]) -> list[Record]:
    out = []
    for row in rows:
        p = _lists(_sort_order(_dates(_pick(row, PRODUCT_FIELDS))), "Tags")
        services = p.pop("Services", "")
        if services:
            p["Skills"] = _split(services)
        out.append(p)
    return sorted(out, key=lambda p: sort_order(p.get("Sort Order")))


def convert_companies(rows: list[dict[str, str]]) -> list[Record]:
    return [_lists(_dates(_pick(row, COMPANY_FIELDS)), "Skills", "Products", "Patents") for row in rows]


def convert_patents(rows: list[dict[str, str]]) -> list[Record]:
    out = [_lists(_sort_order(_dates(_pick(row, PATENT_FIELDS))), "Services") for row in rows]
    return sorted(out, key=lambda p: sort_order(p.get("Sort Order")))


def convert_skills(rows: list[dict[str, str]]) -> list[Record]:
    out = [_pick(row, SKILL_FIELDS) for row in rows]
    return sorted(out, key=lambda s: sort_order(s.get("Order")))


def convert_tags(rows: list[dict[str, str]]) -> list[Record]:
    return [_pick(row, TAG_FIELDS) for row in rows]


def convert_product_images(rows: list[dict[str, str]]) -> list[Record]:
    out = [_pick(row, PRODUCT_IMAGE_FIELDS) for row in rows]
    return sorted(out, key=lambda r: r.get("Button ID (Image Order)", ""))


CONVERTERS: dict[str, Callable[[list[dict[str, str]]], list[Record]]] = {
    "products": convert_products,
    "companies": convert_companies,
    "patents": convert_patents,
    "skills": convert_skills,
    "tags": convert_tags,
    "product-images": convert_product_images,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        return [row for row in reader if any(_s(v) for v in row.values() if isinstance(v, str))]


def convert_exports(csv_dir: str | Path, out_dir: str | Path) -> ConvertResult:
    """Convert every known ``<collection>.csv`` in *csv_dir* into ``<collection>.json`` in *out_dir*."""
    csv_dir, out_dir = Path(csv_dir), Path(out_dir)
    result = ConvertResult()
    for name, convert in CONVERTERS.items():
        path = csv_dir / f"{name}.csv"
        if not path.is_file():
            log.warning("Skipping %s: %s not found", name, path)
            result.skipped.append(f"{name}.csv")
            continue
        rows = read_csv(path)
        published = [r for r in rows if _published(r)]
        records = convert(published)
        write_json(out_dir / f"{name}.json", records)
        result.written[f"{name}.json"] = len(records)
        result.dropped[name] = len(rows) - len(published)
        log.info("Wrote %s.json (%d records)", name, len(records))
    return result
