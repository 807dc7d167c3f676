"""Route classification: URL path → page type and optional slug."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlsplit


class PageType(str, Enum):
    INDEX = "index"
    PRODUCTS = "products"
    COMPANIES = "companies"
    PATENTS = "patents"
    SKILLS = "skills"
    DETAIL_PRODUCT = "detail_product"
    DETAIL_COMPANY = "detail_company"
    DETAIL_PATENT = "detail_patent"
    DETAIL_SKILL = "detail_skill"
    NONE = "none"

    @property
    def is_detail(self) -> bool:
        return self.value.startswith("detail_")


@dataclass(frozen=True)
class Route:
    page_type: PageType
    slug: str | None = None


# (collection path segment, list page type, detail page type)
_SECTIONS = (
    ("products", PageType.PRODUCTS, PageType.DETAIL_PRODUCT),
    ("companies", PageType.COMPANIES, PageType.DETAIL_COMPANY),
    ("patents", PageType.PATENTS, PageType.DETAIL_PATENT),
)


def _normalize_path(path: str) -> str:
    if len(path) > 1:
        path = path.rstrip("/")
    if path.endswith(".html") and not path.endswith("index.html"):
        path = path[: -len(".html")]
    return path


def _detail_match(path: str, section: str) -> str | None:
    m = re.match(rf"^/{section}/([^/]+)$", path)
    return m.group(1) if m else None


def page_type_for_path(path: str) -> PageType:
    if path in ("", "/") or path.endswith("index.html"):
        return PageType.INDEX
    path = _normalize_path(path)
    for section, list_type, detail_type in _SECTIONS:
        if _detail_match(path, section):
            return detail_type
        if path == f"/{section}":
            return list_type
    if "skills" in path:
        return PageType.DETAIL_SKILL if "detail_" in path else PageType.SKILLS
    return PageType.NONE


def slug_for(path: str, query: str = "") -> str | None:
    """Path segment of a detail URL, else the ``slug`` or ``item`` query parameter."""
    path = _normalize_path(path)
    for section, _, _ in _SECTIONS:
        segment = _detail_match(path, section)
        if segment:
            return segment
    params = parse_qs(query)
    for key in ("slug", "item"):
        values = params.get(key)
        if values and values[0]:
            return values[0]
    return None


def classify(url: str) -> Route:
    """Classify a full URL or a bare path (with optional query string)."""
    parts = urlsplit(url or "")
    page_type = page_type_for_path(parts.path)
    if page_type is PageType.NONE:
        return Route(PageType.NONE)
    slug = slug_for(parts.path, parts.query) if page_type.is_detail else None
    return Route(page_type, slug)
