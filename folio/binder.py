"""Template binder: apply view models to the Webflow template DOM.

Works on ``lxml.html`` elements. The page markup is an external contract:
list containers (``.w-dyn-items``) hold one template item (``.w-dyn-item``),
optional values carry the ``w-dyn-bind-empty`` marker, and metatag rows in the
detail header are identified by their label. The binder never creates page
structure, it only fills, clones, reorders and hides what is already there.

Lookups that find nothing are silent no-ops, so a template missing a block
simply keeps its static content.
"""
from __future__ import annotations

import copy
import logging
import re
from typing import Callable, Iterable, TypeVar

from lxml import html as lxml_html
from lxml.html import HtmlElement

from folio import views
from folio.gallery import GalleryController
from folio.routes import PageType, Route
from folio.store import ContentBundle, Record, find_by_slug, index_by_slug

log = logging.getLogger(__name__)

T = TypeVar("T")

BIND_EMPTY = "w-dyn-bind-empty"

# characters lxml refuses in text and attribute values
_XML_INVALID = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# Metatag rows in the detail page header, keyed by the field they display.
# A row may carry data-metatag="<key>"; otherwise its h2 label text is used.
METATAG_LABELS: dict[str, str] = {
    "tenure": "Tenure",
    "time_period": "Time Period",
    "type": "Type",
    "industry": "Industry",
    "funding": "Funding",
    "headcount": "Headcount",
    "founded": "Founded",
}


# ---------------------------------------------------------------------------
# DOM helpers
# ---------------------------------------------------------------------------


def cls(name: str) -> str:
    """XPath predicate matching one class token."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def classes(*names: str) -> str:
    return " and ".join(cls(n) for n in names)


def find(el: HtmlElement | None, xpath: str) -> HtmlElement | None:
    if el is None:
        return None
    found = el.xpath(xpath)
    return found[0] if found else None


def find_all(el: HtmlElement | None, xpath: str) -> list[HtmlElement]:
    if el is None:
        return []
    return list(el.xpath(xpath))


def has_class(el: HtmlElement, name: str) -> bool:
    return name in (el.get("class") or "").split()


def add_class(el: HtmlElement, name: str) -> None:
    tokens = (el.get("class") or "").split()
    if name not in tokens:
        tokens.append(name)
        el.set("class", " ".join(tokens))


def remove_class(el: HtmlElement, name: str) -> None:
    tokens = (el.get("class") or "").split()
    if name in tokens:
        el.set("class", " ".join(t for t in tokens if t != name))


def closest(el: HtmlElement | None, class_name: str) -> HtmlElement | None:
    """Nearest element (self included) carrying *class_name*."""
    while el is not None:
        if isinstance(el.tag, str) and has_class(el, class_name):
            return el
        el = el.getparent()
    return None


def _parse_style(el: HtmlElement) -> dict[str, str]:
    out: dict[str, str] = {}
    for decl in (el.get("style") or "").split(";"):
        if ":" not in decl:
            continue
        prop, value = decl.split(":", 1)
        out[prop.strip().lower()] = value.strip()
    return out


def set_style(el: HtmlElement | None, prop: str, value: str | None) -> None:
    """Set (or with ``None``/``""`` remove) one inline style property."""
    if el is None:
        return
    styles = _parse_style(el)
    if value:
        styles[prop] = value
    else:
        styles.pop(prop, None)
    if styles:
        el.set("style", "; ".join(f"{k}: {v}" for k, v in styles.items()))
    elif "style" in el.attrib:
        del el.attrib["style"]


def get_style(el: HtmlElement, prop: str) -> str:
    return _parse_style(el).get(prop, "")


def hide(el: HtmlElement | None) -> None:
    set_style(el, "display", "none")


def show(el: HtmlElement | None, display: str | None = None) -> None:
    set_style(el, "display", display)


def set_visible(el: HtmlElement | None, visible: bool) -> None:
    if visible:
        show(el)
    else:
        hide(el)


def is_hidden(el: HtmlElement) -> bool:
    return get_style(el, "display") == "none"


def xml_safe(value: str) -> str:
    return _XML_INVALID.sub("", value)


def _clear(el: HtmlElement) -> None:
    for child in list(el):
        el.remove(child)
    el.text = None


def set_text(el: HtmlElement | None, value: str | None) -> bool:
    """Replace the element's content with *value*; empty values leave the placeholder."""
    if el is None or not value:
        return False
    value = xml_safe(value)
    if not value:
        return False
    _clear(el)
    el.text = value
    remove_class(el, BIND_EMPTY)
    return True


def set_html(el: HtmlElement | None, markup: str | None) -> bool:
    """Replace the element's content with parsed *markup*; empty markup is ignored."""
    if el is None or not markup:
        return False
    markup = xml_safe(markup)
    if not markup.strip():
        return False
    _clear(el)
    last: HtmlElement | None = None
    for frag in lxml_html.fragments_fromstring(markup):
        if isinstance(frag, str):
            if last is None:
                el.text = (el.text or "") + frag
            else:
                last.tail = (last.tail or "") + frag
            continue
        el.append(frag)
        last = frag
    remove_class(el, BIND_EMPTY)
    return True


def set_attr(el: HtmlElement | None, name: str, value: str | None) -> None:
    if el is not None and value:
        el.set(name, xml_safe(value))


def set_img_src(img: HtmlElement | None, src: str | None) -> bool:
    """Point an image at *src*; without a URL the element is left as it is."""
    if img is None or not src:
        return False
    img.set("src", src)
    # responsive variants would still point at the template image
    for attr in ("srcset", "sizes"):
        img.attrib.pop(attr, None)
    show(img)
    remove_class(img, BIND_EMPTY)
    return True


def set_mask_image(el: HtmlElement | None, url: str | None) -> None:
    if el is None or not url:
        return
    set_style(el, "-webkit-mask-image", f'url("{url}")')
    set_style(el, "mask-image", f'url("{url}")')


def set_page_title(doc: HtmlElement, title: str) -> None:
    """Document title plus the og/twitter title meta tags."""
    if not title:
        return
    title_el = find(doc, "//title")
    if title_el is not None:
        title_el.text = xml_safe(title)
    set_attr(find(doc, "//meta[@property='og:title']"), "content", title)
    set_attr(find(doc, "//meta[@name='twitter:title' or @property='twitter:title']"), "content", title)


# ---------------------------------------------------------------------------
# List cloning
# ---------------------------------------------------------------------------


def _empty_state(items: HtmlElement) -> HtmlElement | None:
    """The ``.w-dyn-empty`` of the list that owns *items*, not of an enclosing list."""
    dyn_list = None
    for ancestor in items.iterancestors():
        if has_class(ancestor, "w-dyn-list"):
            dyn_list = ancestor
            break
        if has_class(ancestor, "w-dyn-item") or has_class(ancestor, "w-dyn-items"):
            return None
    if dyn_list is None:
        return None
    for el in find_all(dyn_list, f".//*[{cls('w-dyn-empty')}]"):
        owner = next((a for a in el.iterancestors() if has_class(a, "w-dyn-list")), None)
        if owner is dyn_list:
            return el
    return None


def clone_list(
    items: HtmlElement | None,
    records: Iterable[T],
    bind: Callable[[HtmlElement, T], None],
    template: HtmlElement | None = None,
) -> int:
    """Rebuild a ``.w-dyn-items`` container from its first item, one clone per record.

    With no records the container is hidden and the list's ``.w-dyn-empty``
    element shown. Returns the number of items rendered.
    """
    if items is None:
        return 0
    if template is None:
        template = find(items, f"./*[{cls('w-dyn-item')}]")
        if template is None:
            template = find(items, "./*")
    if template is None:
        return 0
    template = copy.deepcopy(template)
    template.tail = None
    _clear(items)

    count = 0
    for record in records:
        clone = copy.deepcopy(template)
        bind(clone, record)
        items.append(clone)
        count += 1

    empty = _empty_state(items)
    if count:
        show(items)
        hide(empty)
    else:
        hide(items)
        show(empty, "block")
    return count


def bind_tag_list(tag_list: HtmlElement | None, tags: list[str], item_class: str) -> int:
    """Fill a skill-tag list; each clone gets one name in its ``.tag-text``."""
    def bind(clone: HtmlElement, name: str) -> None:
        label = find(clone, f"descendant-or-self::*[{cls(item_class)}]//*[{cls('tag-text')}]")
        if label is None:
            label = find(clone, f".//*[{cls('tag-text')}]")
        set_text(label, name)

    return clone_list(tag_list, tags, bind)


# ---------------------------------------------------------------------------
# Metatag rows
# ---------------------------------------------------------------------------


class MetatagRows:
    """Index of the detail header's metatag rows by field key."""

    def __init__(self, doc: HtmlElement, labels: dict[str, str] | None = None):
        labels = labels or METATAG_LABELS
        by_label = {label: key for key, label in labels.items()}
        self._rows: dict[str, HtmlElement] = {}
        for row in find_all(doc, f"//*[{cls('portfolio-header-metatag-item')}]"):
            key = row.get("data-metatag")
            if not key:
                label = find(row, ".//h2")
                key = by_label.get(label.text_content().strip()) if label is not None else None
            if key and key not in self._rows:
                self._rows[key] = row

    def get(self, key: str) -> HtmlElement | None:
        return self._rows.get(key)

    def set_visible(self, key: str, visible: bool) -> None:
        row = self.get(key)
        if row is not None:
            set_visible(row, visible)

    def set_value(self, key: str, value: str, xpath: str = f".//*[{cls('text-block')}]") -> None:
        if value:
            set_text(find(self.get(key), xpath), value)

    def set_period(self, key: str, period: views.Period) -> None:
        row = self.get(key)
        if row is None:
            return
        ends = find_all(row, f".//*[{cls('text-block-2')}]")
        end_el = find(row, f".//*[{classes('text-block-2', BIND_EMPTY)}]")
        if end_el is None and ends:
            end_el = ends[0]
        set_text(find(row, f".//*[{cls('text-block')}]"), period.start)
        set_text(end_el, period.end)
        for other in ends:
            if other is not end_el:
                hide(other)

    def set_headcount(self, start: str, end: str) -> None:
        row = self.get("headcount")
        set_text(find(row, f".//*[{cls('div-block')}]//*[{cls('text-block')}]"), start)
        set_text(find(row, f".//*[{cls('div-block')}]//*[{cls('text-block-2')}]"), end)


# ---------------------------------------------------------------------------
# Shared card binders
# ---------------------------------------------------------------------------

_WORK_DATE = (
    f".//*[{cls('work-heading')}]/following-sibling::*[1][{cls('portfolio-date')}]"
)


def bind_work_card(clone: HtmlElement, card: views.WorkCard) -> None:
    """One ``.work-item`` row of a list page or a company sub-list."""
    item = find(clone, f"descendant-or-self::*[{cls('work-item')}]")
    if item is None:
        item = clone
    link = find(clone, f".//a[{cls('work-link')}] | .//a[contains(@id, 'product')]")
    if link is not None:
        link.set("href", card.href)

    set_text(find(item, f".//*[{cls('products')}]"), card.name)

    flex_parts = find_all(item, f".//*[{cls('flex-block-3')}]//*[{cls('text-size-medium')}]")
    if card.patent_row and flex_parts:
        # patent rows: application id, separator, summary
        set_text(flex_parts[0], card.application_id)
        if len(flex_parts) > 2:
            set_text(flex_parts[2], card.description)
    else:
        desc = find(item, f".//*[{cls('work-heading')}]//*[{cls('text-size-medium')}]")
        if desc is None:
            desc = find(item, f".//*[{cls('text-size-medium')}]")
        set_text(desc, card.description)

    dates = find_all(item, f".//*[{cls('portfolio-date')}]")
    date_el = find(item, _WORK_DATE)
    if date_el is None and dates:
        date_el = dates[0]
    set_text(date_el, card.date_text)
    badges = [d for d in dates if d is not date_el]
    if badges:
        set_visible(badges[0], card.badge_visible)

    set_img_src(find(item, f".//*[{cls('product-list-thumbnail-image')}]"), card.image)


def _work_list(doc: HtmlElement) -> HtmlElement | None:
    first = find(doc, f"//*[{cls('work-item')}]")
    wrapper = closest(first, "w-dyn-item")
    return closest(wrapper, "w-dyn-items")


def _bind_work_page(doc: HtmlElement, cards: list[views.WorkCard]) -> int:
    items = _work_list(doc)
    if items is None:
        return 0
    return clone_list(items, cards, bind_work_card, template=closest(
        find(doc, f"//*[{cls('work-item')}]"), "w-dyn-item"))


# ---------------------------------------------------------------------------
# Page renderers
# ---------------------------------------------------------------------------


def render_index(doc: HtmlElement, bundle: ContentBundle, max_featured: int = views.MAX_FEATURED) -> None:
    skills_by_slug = bundle.skills_by_slug()

    # Company logo tiles
    first_logo = find(doc, f"//*[{classes('logo-wrapper', 'w-dyn-item')}]")
    if first_logo is not None:
        def bind_logo(clone: HtmlElement, tile: views.LogoTile) -> None:
            link = find(clone, f".//a[{cls('logo-link-block')} or contains(@id, 'company')]")
            if link is None:
                return
            link.set("href", tile.href)
            if tile.logo_url:
                _clear(link)
                add_class(link, "logo-link-mask")
                set_mask_image(link, tile.logo_url)

        clone_list(closest(first_logo, "w-dyn-items"),
                   [views.company_logo(c) for c in bundle.companies], bind_logo, template=first_logo)

    # Featured products
    featured = views.featured_products(bundle.products, max_featured)
    first_card = find(doc, f"//*[{cls('portfolio-list')}]//*[{cls('w-dyn-item')}]")
    if first_card is not None:
        def bind_featured(clone: HtmlElement, card: views.FeaturedCard) -> None:
            for a in find_all(clone, f".//a[{cls('portfolio-image-link')} or contains(@id, 'view-project')]"):
                a.set("href", card.href)
            set_img_src(find(clone, f".//*[{cls('portfolio-image')}]"), card.image)
            set_style(find(clone, f".//*[{cls('image-overlay')}]"), "transform", "translate3d(0, 100%, 0)")
            set_text(find(clone, f".//*[{cls('heading-style-h5')}]"), card.name)
            set_text(find(clone, f".//*[{cls('heading-style-h6')}]"), card.subtitle)
            set_text(find(clone, f".//*[{classes('text-size-regular', 'dark')}]"), card.summary)
            tag_list = find(clone, f".//*[{cls('portfolio-tag-list')}]")
            if tag_list is not None:
                bind_tag_list(tag_list, card.tags, "portfolio-tag-item")

        clone_list(closest(first_card, "w-dyn-items"),
                   [views.featured_card(p, skills_by_slug) for p in featured], bind_featured,
                   template=first_card)

    # Skills
    first_skill = find(doc, f"//*[{cls('service-component')}]//*[{cls('service-item')}]")
    wrapper = closest(first_skill, "w-dyn-item")
    if wrapper is not None:
        def bind_skill(clone: HtmlElement, item: views.SkillItem) -> None:
            set_text(find(clone, f".//*[{classes('text-size-medium', 'text-color-white')}]"), item.name)
            set_text(find(clone, f".//p[{cls(BIND_EMPTY)}]"), item.description)

        clone_list(closest(wrapper, "w-dyn-items"),
                   [views.skill_item(s) for s in bundle.skills], bind_skill, template=wrapper)


def render_products_list(doc: HtmlElement, bundle: ContentBundle) -> None:
    _bind_work_page(doc, [views.product_card(p) for p in views.sort_products(bundle.products)])


def render_companies_list(doc: HtmlElement, bundle: ContentBundle) -> None:
    _bind_work_page(doc, [views.company_card(c) for c in views.sort_companies(bundle.companies)])


def render_patents_list(doc: HtmlElement, bundle: ContentBundle) -> None:
    _bind_work_page(doc, [views.patent_card(p) for p in views.sort_patents(bundle.patents)])


def _header(doc: HtmlElement, name: str, subtitle: str, body: str, hero: str) -> None:
    left = find(doc, f"//*[{cls('portfolio-header-content-left')}]")
    set_text(find(left, ".//h1"), name)
    set_text(find(left, ".//h4"), subtitle)
    set_text(find(left, f".//*[{cls('text-size-medium')}]"), body)
    set_img_src(find(doc, f"//*[{cls('hero-image')}]"), hero)


_RICH_TEXT_PLACEHOLDER = f"//*[{classes(BIND_EMPTY, 'w-richtext')}]"


def _rich_text_after(doc: HtmlElement, anchor_xpath: str) -> HtmlElement | None:
    """First rich-text block right after *anchor_xpath*, else the first empty rich-text placeholder."""
    return find(doc, f"{anchor_xpath}/following-sibling::*[1][{cls('w-richtext')}] | {_RICH_TEXT_PLACEHOLDER}")


def render_detail_product(
    doc: HtmlElement, product: Record, bundle: ContentBundle,
    gallery: GalleryController | None = None,
    metatag_labels: dict[str, str] | None = None,
) -> None:
    detail = views.product_detail(product, bundle.companies, bundle.product_images, bundle.skills_by_slug())

    set_page_title(doc, detail.title)
    _header(doc, detail.name, detail.subtitle, detail.description, detail.hero)

    tag_list = find(doc, f"//*[{cls('portfolio-header-tag-list')}]")
    bind_tag_list(tag_list, detail.tags, "portfolio-header-tag-item")

    if detail.company_href:
        logo_link = find(doc, "//*[@id='body-company-button']")
        if logo_link is not None:
            logo_link.set("href", detail.company_href)
            set_mask_image(logo_link, detail.company_logo)

    MetatagRows(doc, metatag_labels).set_period("time_period", detail.period)

    set_html(_rich_text_after(doc, "//*[@id='section-highlights']"), detail.highlights)
    set_html(find(doc, f"//*[@id='section-press-release']//*[{cls('w-richtext')}]"), detail.press_release)
    rich_texts = find_all(doc, f"//*[{classes('text-rich-text', 'w-richtext')}]")
    if rich_texts:
        set_html(rich_texts[-1], detail.services_text)

    if detail.gallery:
        render_gallery(doc, detail.name, detail.gallery, gallery)


def render_gallery(
    doc: HtmlElement, product_name: str, images: list[views.GalleryItem],
    gallery: GalleryController | None = None,
) -> None:
    template = find(doc, f"//*[{classes('collection-item-2', 'w-dyn-item')}]")
    image_list = find(doc, f"//*[{classes('collection-list-3', 'w-dyn-items')}]")
    if template is None or image_list is None:
        return

    def bind_image(clone: HtmlElement, item: views.GalleryItem) -> None:
        first = item is images[0]
        enlarged_wrapper = find(clone, f".//*[{cls('enlarged-product-image-display-wrapper')}]")
        link = find(clone, f".//*[{cls('product-image-wrapper')}]")
        if link is not None:
            link.set("id", item.image_id)
            set_attr(link, "productname", product_name)
            set_attr(link, "productimagename", item.name)
        set_img_src(find(clone, f".//*[{cls('product-image')}]"), item.image)
        desc = find(clone, f".//*[{cls('product-image-description')}]"
                           f"[not(ancestor::*[{cls('enlarged-product-image-display-wrapper')}])]")
        set_text(desc, item.description)
        set_img_src(find(enlarged_wrapper, f".//*[{cls('enlarged-product-image')}]"), item.image)
        set_text(find(enlarged_wrapper, f".//*[{cls('product-image-description')}]"), item.description)
        hide(enlarged_wrapper)

        buttons = (
            (find(clone, f".//*[{cls('close-button-wrapper')}]"), "close-image-button", None),
            (find(clone, f".//*[{cls('slider-button')}][@arrowbuttontype='left']"), "slider-button-left", "left"),
            (find(clone, f".//*[{cls('slider-button')}][@arrowbuttontype='right']"), "slider-button-right", "right"),
        )
        for btn, first_id, arrow in buttons:
            if btn is None:
                continue
            if first:
                btn.set("id", first_id)
            else:
                btn.attrib.pop("id", None)
            btn.set("currentproductimageid", item.image_id)
            set_attr(btn, "currentimagename", item.name)
            set_attr(btn, "currentproduct", product_name)
            if arrow:
                btn.set("arrowbuttontype", arrow)

    clone_list(image_list, images, bind_image, template=template)
    if gallery is not None:
        gallery.attach(image_list, doc, section=find(doc, "//*[@id='section-screenshots']"))


def render_detail_company(
    doc: HtmlElement, company: Record, bundle: ContentBundle,
    metatag_labels: dict[str, str] | None = None,
) -> None:
    detail = views.company_detail(company, bundle.products, bundle.patents, bundle.skills_by_slug())

    set_page_title(doc, detail.title)
    _header(doc, detail.name, detail.subtitle, detail.description, detail.hero)

    tag_list = find(doc, f"//*[{cls('portfolio-header-component')}]//*[{cls('portfolio-header-tag-list')}]")
    bind_tag_list(tag_list, detail.tags, "portfolio-header-tag-item")

    logo_link = find(doc, "//*[@id='body-company-logo-button']")
    if logo_link is not None:
        logo_link.set("href", detail.website)
        set_mask_image(logo_link, detail.logo)
    website_link = find(doc, "//*[@id='body-company-link-button']")
    if website_link is not None:
        website_link.set("href", detail.website)
        set_text(find(website_link, f".//*[{classes('text-block', 'link')}]"), detail.website_label)

    rows = MetatagRows(doc, metatag_labels)
    if detail.period is not None:
        rows.set_period("tenure", detail.period)
    rows.set_value("type", detail.company_type)
    rows.set_value("industry", detail.industry)
    rows.set_value("funding", detail.funding, f".//*[{cls('div-block')}]//*[{cls('text-block')}]")
    rows.set_headcount(detail.headcount_start, detail.headcount_end)
    rows.set_value("founded", detail.founded, f".//*[{cls('div-block')}]//*[{cls('text-block-3')}]")

    rows.set_visible("tenure", detail.period is not None)
    rows.set_visible("type", bool(detail.company_type))
    rows.set_visible("funding", bool(detail.funding))
    rows.set_visible("headcount", bool(detail.headcount_start or detail.headcount_end))
    rows.set_visible("industry", bool(detail.industry))
    rows.set_visible("founded", bool(detail.founded))

    set_html(_rich_text_after(doc, f"//*[{cls('portfolio-header-content-left')}]"), detail.highlights)

    components = find_all(doc, f"//*[{cls('work-component')}]")
    for component, cards in zip(components, (detail.products, detail.patents)):
        section = closest(component, "padding-section-medium")
        set_visible(section, bool(cards))
        if cards:
            clone_list(find(component, f".//*[{cls('w-dyn-items')}]"), cards, bind_work_card)


def render_detail_patent(doc: HtmlElement, patent: Record, metatag_labels: dict[str, str] | None = None) -> None:
    detail = views.patent_detail(patent)
    _header(doc, detail.name, detail.company, detail.summary, detail.hero)
    set_html(find(doc, _RICH_TEXT_PLACEHOLDER), detail.description)
    MetatagRows(doc, metatag_labels).set_period("time_period", detail.period)


def render_detail_skill(doc: HtmlElement, skill: Record) -> None:
    detail = views.skill_detail(skill)
    set_text(find(doc, f"//h2[{cls(BIND_EMPTY)}]"), detail.name)
    set_html(find(doc, _RICH_TEXT_PLACEHOLDER), detail.description)


def render(
    doc: HtmlElement, route: Route, bundle: ContentBundle,
    gallery: GalleryController | None = None,
    metatag_labels: dict[str, str] | None = None,
    max_featured: int = views.MAX_FEATURED,
) -> bool:
    """Bind *bundle* into *doc* for *route*. Returns False when nothing was bound."""
    page = route.page_type
    if page is PageType.INDEX:
        render_index(doc, bundle, max_featured)
    elif page is PageType.PRODUCTS:
        render_products_list(doc, bundle)
    elif page is PageType.COMPANIES:
        render_companies_list(doc, bundle)
    elif page is PageType.PATENTS:
        render_patents_list(doc, bundle)
    elif page is PageType.DETAIL_PRODUCT:
        product = find_by_slug(bundle.products, route.slug)
        if product is None:
            return False
        render_detail_product(doc, product, bundle, gallery, metatag_labels)
    elif page is PageType.DETAIL_COMPANY:
        company = find_by_slug(bundle.companies, route.slug)
        if company is None:
            return False
        render_detail_company(doc, company, bundle, metatag_labels)
    elif page is PageType.DETAIL_PATENT:
        patent = find_by_slug(bundle.patents, route.slug)
        if patent is None:
            return False
        render_detail_patent(doc, patent, metatag_labels)
    elif page is PageType.DETAIL_SKILL:
        skill = index_by_slug(bundle.skills).get(route.slug or "")
        if skill is None:
            return False
        render_detail_skill(doc, skill)
    else:
        return False
    return True
