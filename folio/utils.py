"""Shared utility functions used across Folio modules."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any


class FolioError(Exception):
    """Base class for errors raised by Folio."""


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def safe_slug(value: object) -> str:
    """Lowercase, hyphen-separated file-system safe slug; ``asset`` when empty."""
    slug = str(value or "").strip().lower()
    slug = re.sub(r"[^a-z0-9-]", "-", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or "asset"
