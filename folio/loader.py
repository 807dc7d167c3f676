"""Page loader: classify → fetch → bind, once per page.

The only place render failures are caught. Binding happens on a copy of the
parsed document that replaces the original only after every step succeeded,
so a failed fetch leaves the page exactly as it was served.
"""
from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from lxml import html as lxml_html
from lxml.html import HtmlElement

from folio import binder
from folio.config import Settings
from folio.fetcher import REQUIRED_COLLECTIONS, ContentSource, DirectorySource, HttpSource, fetch_collections
from folio.gallery import GalleryController
from folio.routes import PageType, Route, classify
from folio.schemas import BuildResult
from folio.store import COMPANIES, PATENTS, PRODUCTS, SKILLS
from folio.utils import FolioError, safe_slug
from folio.views import MAX_FEATURED

log = logging.getLogger(__name__)

DEFAULT_DOCTYPE = "<!DOCTYPE html>"

TEMPLATES: dict[PageType, str] = {
    PageType.INDEX: "index.html",
    PageType.PRODUCTS: "products.html",
    PageType.COMPANIES: "companies.html",
    PageType.PATENTS: "patents.html",
    PageType.SKILLS: "skills.html",
    PageType.DETAIL_PRODUCT: "detail_products.html",
    PageType.DETAIL_COMPANY: "detail_companies.html",
    PageType.DETAIL_PATENT: "detail_patents.html",
    PageType.DETAIL_SKILL: "detail_skills.html",
}


class TemplateNotFound(FolioError):
    """No template file exists for the requested page."""


def template_for(route: Route) -> str | None:
    return TEMPLATES.get(route.page_type)


def template_path(site_dir: Path, route: Route) -> Path:
    name = template_for(route)
    if name is None:
        raise TemplateNotFound(f"No template for page type {route.page_type.value}")
    path = Path(site_dir) / name
    if not path.is_file():
        raise TemplateNotFound(f"Template {name} not found in {site_dir}")
    return path


def source_for(settings: Settings) -> ContentSource:
    """Remote collections when a base URL is configured, local files otherwise."""
    if settings.base_url:
        return HttpSource(settings.base_url, prefix=settings.data_prefix,
                          timeout=settings.request_timeout_seconds, user_agent=settings.user_agent)
    return DirectorySource(settings.content_dir)


@dataclass
class PageRender:
    """One page load: a parsed document, its route, and its gallery controller."""

    url: str
    document: HtmlElement
    doctype: str = DEFAULT_DOCTYPE
    route: Route = field(init=False)
    gallery: GalleryController = field(default_factory=GalleryController)
    rendered: bool = False
    error: str | None = None
    _done: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.route = classify(self.url)

    @classmethod
    def from_markup(cls, markup: str, url: str) -> PageRender:
        document = lxml_html.document_fromstring(markup)
        doctype = document.getroottree().docinfo.doctype or DEFAULT_DOCTYPE
        return cls(url=url, document=document, doctype=doctype)

    async def run(
        self, source: ContentSource,
        metatag_labels: dict[str, str] | None = None,
        max_featured: int = MAX_FEATURED,
    ) -> bool:
        """Render the page once. Later calls return the first outcome unchanged."""
        if self._done:
            log.debug("Page %s already loaded", self.url)
            return self.rendered
        self._done = True

        if self.route.page_type is PageType.NONE:
            return False
        try:
            bundle = await fetch_collections(self.route.page_type, source)
            draft = copy.deepcopy(self.document)
            gallery = GalleryController()
            bound = binder.render(draft, self.route, bundle, gallery,
                                  metatag_labels=metatag_labels, max_featured=max_featured)
        except FolioError as exc:
            log.warning("Render aborted for %s: %s", self.url, exc)
            self.error = str(exc)
            return False
        except Exception as exc:
            log.warning("Render aborted for %s: %s: %s", self.url, type(exc).__name__, exc, exc_info=True)
            self.error = f"{type(exc).__name__}: {exc}"
            return False

        if not bound:
            log.info("Nothing to bind for %s (%s)", self.url, self.route.page_type.value)
            return False
        self.document = draft
        self.gallery = gallery
        self.rendered = True
        return True

    def html(self) -> str:
        return lxml_html.tostring(self.document, doctype=self.doctype, encoding="unicode", method="html")


async def render_html(
    markup: str, url: str, source: ContentSource,
    metatag_labels: dict[str, str] | None = None,
    max_featured: int = MAX_FEATURED,
) -> str:
    """Rendered markup for *url*; the input unchanged in substance when rendering fails."""
    page = PageRender.from_markup(markup, url)
    await page.run(source, metatag_labels, max_featured)
    return page.html()


async def render_page(url: str, settings: Settings, source: ContentSource | None = None) -> PageRender:
    """Load the template for *url* from the site directory and render it.

    Raises TemplateNotFound when the URL maps to no template file.
    """
    route = classify(url)
    path = template_path(settings.site_dir, route)
    markup = await asyncio.to_thread(path.read_text, encoding="utf-8")
    page = PageRender.from_markup(markup, url)
    await page.run(source or source_for(settings), settings.metatag_labels, settings.max_featured)
    return page


def required_collections(route: Route) -> list[str]:
    return list(REQUIRED_COLLECTIONS.get(route.page_type, ()))


# ---------------------------------------------------------------------------
# Pre-rendering
# ---------------------------------------------------------------------------

_STATIC_PAGES = ("/", "/products", "/companies", "/patents")


def build_targets(bundle_slugs: dict[str, list[str]]) -> list[tuple[str, str]]:
    """``(url, output path)`` pairs for every static route and detail slug.

    *bundle_slugs* maps ``products``/``companies``/``patents``/``skills`` to slugs.
    """
    targets = [(url, "index.html" if url == "/" else f"{url.strip('/')}/index.html") for url in _STATIC_PAGES]
    for section in ("products", "companies", "patents"):
        for slug in bundle_slugs.get(section, []):
            targets.append((f"/{section}/{slug}", f"{section}/{safe_slug(slug)}/index.html"))
    for slug in bundle_slugs.get("skills", []):
        targets.append((f"/detail_skills?slug={quote(slug)}", f"detail_skills/{safe_slug(slug)}/index.html"))
    return targets


async def build_site(settings: Settings, source: ContentSource | None = None) -> BuildResult:
    """Render every page into ``settings.output_dir``.

    Pages whose template is missing are skipped; pages that fail to render are
    still written, unbound, and reported in ``failed``.
    """
    source = source or DirectorySource(settings.content_dir)
    slugs: dict[str, list[str]] = {}
    for collection in (PRODUCTS, COMPANIES, PATENTS, SKILLS):
        try:
            records = await source.load(collection)
        except FolioError as exc:
            log.warning("Skipping %s detail pages: %s", collection, exc)
            records = []
        slugs[collection] = [str(r["Slug"]) for r in records if r.get("Slug")]

    result = BuildResult(output_dir=str(settings.output_dir))
    for url, rel in build_targets(slugs):
        try:
            page = await render_page(url, settings, source)
        except TemplateNotFound as exc:
            log.debug("Skipping %s: %s", url, exc)
            continue
        out = Path(settings.output_dir) / rel
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(page.html(), encoding="utf-8")
        result.pages.append(rel)
        if page.rendered:
            result.rendered += 1
        else:
            result.failed.append(url)
    log.info("Built %d pages into %s (%d not bound)", len(result.pages), settings.output_dir, len(result.failed))
    return result
