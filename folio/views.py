"""Pure ``record → view model`` functions and list ordering rules.

Nothing in this module touches the DOM; :mod:`folio.binder` applies the
view models produced here to a parsed page.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from folio.formatters import (
    format_date_short, format_founded, format_headcount, funding_display, parse_date_for_sort,
    time_period, website_host,
)
from folio.store import Record, is_true, list_field, text

MAX_FEATURED = 6
DEFAULT_SORT_ORDER = 999
IN_PROGRESS = "In Progress"

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


# ---------------------------------------------------------------------------
# Effective end date and "in progress" rules (one per collection, kept distinct)
# ---------------------------------------------------------------------------


def product_end_date(p: Record) -> str:
    return text(p, "End Date")


def company_end_date(c: Record) -> str:
    return text(c, "End Date")


def patent_end_date(p: Record) -> str:
    return text(p, "Patented Date", "End Date")


def product_in_progress(p: Record) -> bool:
    return is_true(p.get("In Progress")) and not product_end_date(p)


def company_in_progress(c: Record) -> bool:
    return not company_end_date(c)


def patent_in_progress(p: Record) -> bool:
    return is_true(p.get("In Progress")) and not patent_end_date(p)


def sort_by_effective_end(
    records: list[Record],
    end_date: Callable[[Record], str],
    in_progress: Callable[[Record], bool],
) -> list[Record]:
    """Most recent first; in-progress items on top in their original order.

    Undated items that are not in progress sort last.
    """
    def key(r: Record) -> tuple[int, int]:
        if in_progress(r):
            return (1, 0)
        return (0, parse_date_for_sort(end_date(r)))

    # sorted() stays stable with reverse=True, so ties keep source order
    return sorted(records, key=key, reverse=True)


def sort_products(products: list[Record]) -> list[Record]:
    return sort_by_effective_end(products, product_end_date, product_in_progress)


def sort_companies(companies: list[Record]) -> list[Record]:
    return sort_by_effective_end(companies, company_end_date, company_in_progress)


def sort_patents(patents: list[Record]) -> list[Record]:
    return sort_by_effective_end(patents, patent_end_date, patent_in_progress)


def sort_order(value: object) -> int:
    """Integer ``Sort Order``; missing, invalid or zero reads as 999."""
    if isinstance(value, bool):
        return DEFAULT_SORT_ORDER
    if isinstance(value, (int, float)):
        return int(value) or DEFAULT_SORT_ORDER
    m = _LEADING_INT.match(str(value or ""))
    return (int(m.group(0)) if m else 0) or DEFAULT_SORT_ORDER


def featured_products(products: list[Record], limit: int = MAX_FEATURED) -> list[Record]:
    featured = [p for p in products if is_true(p.get("Featured"))]
    featured.sort(key=lambda p: (sort_order(p.get("Sort Order")), text(p, "Name").casefold()))
    return featured[:limit]


def resolve_slugs(slugs: list[str], records: list[Record]) -> list[Record]:
    """Records whose slug is listed, in collection order."""
    wanted = set(slugs)
    return [r for r in records if r.get("Slug") in wanted]


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkCard:
    """One row of a products/companies/patents list."""

    href: str
    name: str
    description: str = ""
    date_text: str = ""
    image: str = ""
    badge_visible: bool = False
    application_id: str = ""
    patent_row: bool = False


@dataclass(frozen=True)
class FeaturedCard:
    href: str
    name: str
    subtitle: str = ""
    summary: str = ""
    image: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LogoTile:
    href: str
    logo_url: str = ""


@dataclass(frozen=True)
class SkillItem:
    name: str
    description: str = ""


@dataclass(frozen=True)
class GalleryItem:
    image_id: str
    name: str
    image: str = ""
    description: str = ""


@dataclass(frozen=True)
class Period:
    start: str
    end: str


@dataclass(frozen=True)
class ProductDetail:
    title: str
    name: str
    subtitle: str
    description: str
    hero: str
    tags: list[str]
    period: Period
    highlights: str
    press_release: str
    services_text: str
    company_href: str = ""
    company_logo: str = ""
    gallery: list[GalleryItem] = field(default_factory=list)


@dataclass(frozen=True)
class CompanyDetail:
    title: str
    name: str
    subtitle: str
    description: str
    hero: str
    tags: list[str]
    website: str
    website_label: str
    logo: str
    period: Period | None
    company_type: str
    industry: str
    funding: str
    headcount_start: str
    headcount_end: str
    founded: str
    highlights: str
    products: list[WorkCard] = field(default_factory=list)
    patents: list[WorkCard] = field(default_factory=list)


@dataclass(frozen=True)
class PatentDetail:
    name: str
    company: str
    summary: str
    hero: str
    description: str
    period: Period


@dataclass(frozen=True)
class SkillDetail:
    name: str
    description: str


def _date_text(end: str) -> str:
    return format_date_short(end) if end else IN_PROGRESS


def skill_tags(slugs: list[str], skills_by_slug: dict[str, Record]) -> list[str]:
    """Skill display names; unknown slugs display as themselves."""
    return [text(skills_by_slug.get(slug, {}), "Name") or slug for slug in slugs]


def product_card(p: Record) -> WorkCard:
    return WorkCard(
        href=f"/products/{p.get('Slug', '')}",
        name=text(p, "Name"),
        description=text(p, "50 Character Description", "Summary"),
        date_text=_date_text(product_end_date(p)),
        image=text(p, "Thumbnai Image", "Project Image"),
        badge_visible=is_true(p.get("In Progress")),
    )


def company_card(c: Record) -> WorkCard:
    return WorkCard(
        href=f"/companies/{c.get('Slug', '')}",
        name=text(c, "Name"),
        description=text(c, "50 Character Description"),
        date_text=_date_text(company_end_date(c)),
        image=text(c, "Thumbnail", "Hero Image"),
    )


def patent_card(p: Record) -> WorkCard:
    return WorkCard(
        href=text(p, "Google Patent URL") or f"/patents/{p.get('Slug', '')}",
        name=text(p, "Name"),
        description=text(p, "Summary", "50 Character Description"),
        date_text=_date_text(patent_end_date(p)),
        image=text(p, "Thumbnai Image", "Project Image"),
        application_id=text(p, "Application ID"),
        patent_row=True,
    )


def company_product_card(p: Record) -> WorkCard:
    """Product row on a company page; the in-progress badge never shows there."""
    return WorkCard(
        href=f"/products/{p.get('Slug', '')}",
        name=text(p, "Name"),
        description=text(p, "50 Character Description", "Summary"),
        date_text=_date_text(product_end_date(p)),
        image=text(p, "Thumbnai Image", "Project Image"),
    )


def company_patent_card(p: Record) -> WorkCard:
    return WorkCard(
        href=text(p, "Google Patent URL") or f"/patents/{p.get('Slug', '')}",
        name=text(p, "Name"),
        description=text(p, "50 Character Description", "Summary"),
        date_text=_date_text(patent_end_date(p)),
        image=text(p, "Thumbnai Image", "Project Image"),
    )


def featured_card(p: Record, skills_by_slug: dict[str, Record]) -> FeaturedCard:
    return FeaturedCard(
        href=f"/products/{p.get('Slug', '')}",
        name=text(p, "Name"),
        subtitle=text(p, "50 Character Description"),
        summary=text(p, "Summary"),
        image=text(p, "Thumbnai Image", "Project Image"),
        tags=skill_tags(list_field(p, "Skills"), skills_by_slug),
    )


def company_logo(c: Record) -> LogoTile:
    return LogoTile(
        href=f"/companies/{c.get('Slug', '')}",
        logo_url=text(c, "Logo (White)", "Logo (blue)", "Thumbnail"),
    )


def skill_item(s: Record) -> SkillItem:
    return SkillItem(name=text(s, "Name"), description=text(s, "Description"))


def gallery_items(product: Record, product_images: list[Record]) -> list[GalleryItem]:
    slug = product.get("Slug", "")
    images = [pi for pi in product_images if pi.get("Product") == slug]
    return [
        GalleryItem(
            image_id=f"product-img-{slug}-{i}",
            name=text(pi, "Name"),
            image=text(pi, "Image"),
            description=text(pi, "Image Description"),
        )
        for i, pi in enumerate(images)
    ]


def _period(start: str, end: str) -> Period:
    s, e = time_period(start, end)
    return Period(start=s, end=e)


def product_detail(
    product: Record, companies: list[Record], product_images: list[Record],
    skills_by_slug: dict[str, Record],
) -> ProductDetail:
    company_slug = text(product, "Startup Company")
    company = next((c for c in companies if c.get("Slug") == company_slug), None) if company_slug else None
    return ProductDetail(
        title="Product - " + text(product, "Name"),
        name=text(product, "Name"),
        subtitle=text(product, "50 Character Description", "Summary"),
        description=text(product, "Description"),
        hero=text(product, "Project Image", "Thumbnai Image"),
        tags=skill_tags(list_field(product, "Skills"), skills_by_slug),
        period=_period(text(product, "Start Date"), product_end_date(product)),
        highlights=text(product, "Highlights"),
        press_release=text(product, "Press Release"),
        services_text=text(product, "Services Text"),
        company_href=f"/companies/{company['Slug']}" if company else "",
        company_logo=text(company, "Logo (White)", "Thumbnail") if company else "",
        gallery=gallery_items(product, product_images),
    )


def company_detail(
    company: Record, products: list[Record], patents: list[Record],
    skills_by_slug: dict[str, Record],
) -> CompanyDetail:
    start, end = text(company, "Start Date"), company_end_date(company)
    website = text(company, "Website", "Website Short")
    label_source = text(company, "Website Short", "Website")
    label = website_host(label_source)
    associated_products = sort_products(resolve_slugs(list_field(company, "Products"), products))
    associated_patents = sort_patents(resolve_slugs(list_field(company, "Patents"), patents))
    return CompanyDetail(
        title="Company - " + text(company, "Name"),
        name=text(company, "Name"),
        subtitle=text(company, "50 Character Description"),
        description=text(company, "Detailed Description"),
        hero=text(company, "Hero Image", "Thumbnail"),
        tags=skill_tags(list_field(company, "Skills"), skills_by_slug),
        website=website or "#",
        website_label=label,
        logo=text(company, "Logo (White)", "Thumbnail"),
        period=_period(start, end) if (start or end) else None,
        company_type=text(company, "Company Type"),
        industry=text(company, "Industry"),
        funding=funding_display(company.get("Recent Funding"), company.get("Recent Stage")),
        headcount_start=format_headcount(company.get("Headcount at Start")),
        headcount_end=format_headcount(company.get("Headcount at End")),
        founded=format_founded(company.get("Founding Year")),
        highlights=text(company, "Highlights"),
        products=[company_product_card(p) for p in associated_products],
        patents=[company_patent_card(p) for p in associated_patents],
    )


def patent_detail(patent: Record) -> PatentDetail:
    return PatentDetail(
        name=text(patent, "Name"),
        company=text(patent, "Startup Company"),
        summary=text(patent, "50 Character Description", "Summary"),
        hero=text(patent, "Project Image", "Thumbnai Image"),
        description=text(patent, "Description", "Abstract"),
        period=_period(text(patent, "Start Date"), patent_end_date(patent)),
    )


def skill_detail(skill: Record) -> SkillDetail:
    return SkillDetail(name=text(skill, "Name"), description=text(skill, "Description"))
