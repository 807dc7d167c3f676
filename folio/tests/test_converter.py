from __future__ import annotations

import csv
import json
from pathlib import Path

from folio.converter import (
    convert_companies,
    convert_exports,
    convert_product_images,
    convert_products,
    read_csv,
)


def _write_csv(path: Path, rows: list[dict[str, str]]) -> None:
    fields: list[str] = []
    for row in rows:
        fields.extend(k for k in row if k not in fields)
    with path.open("w", encoding="utf-8-sig", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        writer.writerows(rows)


PRODUCT_ROWS = [
    {
        "Name": "Widget", "Slug": "widget", "Sort Order": "2", "Featured": "true",
        "Start Date": "Jan 5 2024", "Tags": "iot; hardware ;", "Services": "python;hardware",
        "Collection ID": "abc123", "Draft": "false", "Archived": "false",
    },
    {
        "Name": "Gadget", "Slug": "gadget", "Sort Order": "1", "Featured": "true",
        "Start Date": "", "Tags": "", "Services": "",
        "Collection ID": "abc124", "Draft": "false", "Archived": "false",
    },
    {
        "Name": "Secret", "Slug": "secret", "Sort Order": "3", "Featured": "",
        "Start Date": "", "Tags": "", "Services": "",
        "Collection ID": "abc125", "Draft": "true", "Archived": "false",
    },
    {
        "Name": "Old", "Slug": "old", "Sort Order": "", "Featured": "",
        "Start Date": "", "Tags": "", "Services": "",
        "Collection ID": "abc126", "Draft": "false", "Archived": "TRUE",
    },
]


class TestProducts:
    def test_fields_and_lists(self):
        widget = next(p for p in convert_products(PRODUCT_ROWS[:2]) if p["Slug"] == "widget")
        assert widget["Tags"] == ["iot", "hardware"]
        assert widget["Skills"] == ["python", "hardware"]
        assert "Services" not in widget
        assert "Collection ID" not in widget
        assert widget["Start Date"] == "Jan 5, 2024"
        assert widget["Sort Order"] == 2

    def test_empty_cells_are_dropped(self):
        gadget = next(p for p in convert_products(PRODUCT_ROWS[:2]) if p["Slug"] == "gadget")
        assert "Tags" not in gadget
        assert "Skills" not in gadget
        assert "Start Date" not in gadget

    def test_sorted_by_sort_order(self):
        assert [p["Slug"] for p in convert_products(PRODUCT_ROWS[:2])] == ["gadget", "widget"]

    def test_invalid_sort_order(self):
        rows = [{"Name": "X", "Slug": "x", "Sort Order": "soon"}, {"Name": "Y", "Slug": "y", "Sort Order": "4"}]
        out = convert_products(rows)
        assert [p["Slug"] for p in out] == ["y", "x"]
        assert out[1]["Sort Order"] == 0


def test_company_relations_become_lists():
    [company] = convert_companies([{
        "Name": "Acme", "Slug": "acme", "Skills": "python; hardware",
        "Products": "widget", "Patents": "", "Recent Funding": "1900000",
    }])
    assert company["Skills"] == ["python", "hardware"]
    assert company["Products"] == ["widget"]
    assert "Patents" not in company
    assert company["Recent Funding"] == "1900000"


def test_product_images_sorted_by_button_id():
    out = convert_product_images([
        {"Name": "b", "Slug": "b", "Button ID (Image Order)": "product-img-widget-1", "Product": "widget"},
        {"Name": "a", "Slug": "a", "Button ID (Image Order)": "product-img-widget-0", "Product": "widget"},
    ])
    assert [r["Slug"] for r in out] == ["a", "b"]


def test_read_csv_skips_blank_rows_and_bom(tmp_path):
    path = tmp_path / "tags.csv"
    path.write_text("\ufeffName,Slug\nIoT,iot\n,\nAI,ai\n", encoding="utf-8")
    assert read_csv(path) == [{"Name": "IoT", "Slug": "iot"}, {"Name": "AI", "Slug": "ai"}]


class TestConvertExports:
    def test_writes_collections(self, tmp_path):
        csv_dir, out_dir = tmp_path / "exports", tmp_path / "data"
        csv_dir.mkdir()
        _write_csv(csv_dir / "products.csv", PRODUCT_ROWS)
        _write_csv(csv_dir / "tags.csv", [{"Name": "IoT", "Slug": "iot", "Item ID": "1"}])

        result = convert_exports(csv_dir, out_dir)

        assert result.written == {"products.json": 2, "tags.json": 1}
        assert result.dropped["products"] == 2
        assert result.dropped["tags"] == 0
        assert set(result.skipped) == {"companies.csv", "patents.csv", "skills.csv", "product-images.csv"}

        products = json.loads((out_dir / "products.json").read_text(encoding="utf-8"))
        assert [p["Slug"] for p in products] == ["gadget", "widget"]
        tags = json.loads((out_dir / "tags.json").read_text(encoding="utf-8"))
        assert tags == [{"Name": "IoT", "Slug": "iot"}]

    def test_missing_directory(self, tmp_path):
        result = convert_exports(tmp_path / "nope", tmp_path / "out")
        assert result.written == {}
        assert len(result.skipped) == 6
        assert not (tmp_path / "out").exists()
