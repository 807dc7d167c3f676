"""Shared fixtures: Webflow-shaped page templates and a small content set."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from lxml import html as lxml_html

from folio.config import Settings
from folio.store import ContentBundle

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

HEAD = """<head><title>Portfolio</title>
<meta property="og:title" content="Portfolio"><meta name="twitter:title" content="Portfolio"></head>"""

WORK_ITEM = """
<div role="listitem" class="w-dyn-item">
  <a href="#" class="work-link w-inline-block">
    <div class="work-item">
      <div class="work-heading">
        <div class="products">Placeholder name</div>
        <div class="text-size-medium">Placeholder description</div>
      </div>
      <div class="portfolio-date">Jan 2000</div>
      <div class="portfolio-date badge">In Progress</div>
      <img src="/images/placeholder.webp" srcset="/images/placeholder-500.webp 500w" sizes="100vw"
           class="product-list-thumbnail-image">
    </div>
  </a>
</div>"""

PATENT_ITEM = """
<div role="listitem" class="w-dyn-item">
  <a href="#" class="work-link w-inline-block">
    <div class="work-item">
      <div class="work-heading"><div class="products">Placeholder patent</div></div>
      <div class="portfolio-date">Jan 2000</div>
      <div class="portfolio-date badge">Patent Pending</div>
      <div class="flex-block-3">
        <div class="text-size-medium">US000</div>
        <div class="text-size-medium">|</div>
        <div class="text-size-medium">Placeholder summary</div>
      </div>
    </div>
  </a>
</div>"""


def _list_page(item: str) -> str:
    return f"""<!DOCTYPE html>
<html>{HEAD}<body>
<div class="work-component">
  <div class="w-dyn-list">
    <div role="list" class="w-dyn-items">{item}</div>
    <div class="w-dyn-empty" style="display: none"><div>No items found.</div></div>
  </div>
</div>
</body></html>"""


PRODUCTS_PAGE = _list_page(WORK_ITEM)
COMPANIES_PAGE = _list_page(WORK_ITEM)
PATENTS_PAGE = _list_page(PATENT_ITEM)

INDEX_PAGE = f"""<!DOCTYPE html>
<html>{HEAD}<body>
<div class="logos w-dyn-list">
  <div role="list" class="w-dyn-items">
    <div role="listitem" class="logo-wrapper w-dyn-item">
      <a href="#" class="logo-link-block w-inline-block"><img src="/images/logo.svg" class="logo-image"></a>
    </div>
  </div>
</div>
<div class="portfolio-wrapper w-dyn-list">
  <div role="list" class="portfolio-list w-dyn-items">
    <div role="listitem" class="portfolio-item w-dyn-item">
      <a href="#" class="portfolio-image-link w-inline-block">
        <img src="/images/card.webp" class="portfolio-image"><div class="image-overlay"></div>
      </a>
      <h5 class="heading-style-h5">Card name</h5>
      <h6 class="heading-style-h6">Card subtitle</h6>
      <p class="text-size-regular dark">Card summary</p>
      <div class="w-dyn-list">
        <div role="list" class="portfolio-tag-list w-dyn-items">
          <div role="listitem" class="portfolio-tag-item w-dyn-item"><div class="tag-text">Tag</div></div>
        </div>
        <div class="w-dyn-empty" style="display: none">No tags</div>
      </div>
      <a href="#" id="view-project-button" class="button">View project</a>
    </div>
  </div>
  <div class="w-dyn-empty" style="display: none">No featured work</div>
</div>
<div class="service-component">
  <div class="w-dyn-list">
    <div role="list" class="w-dyn-items">
      <div role="listitem" class="w-dyn-item">
        <div class="service-item">
          <div class="text-size-medium text-color-white">Skill</div>
          <p class="w-dyn-bind-empty"></p>
        </div>
      </div>
    </div>
  </div>
</div>
</body></html>"""

DETAIL_PRODUCT_PAGE = f"""<!DOCTYPE html>
<html>{HEAD}<body>
<div class="portfolio-header-component">
  <div class="portfolio-header-content-left">
    <h1>Product name</h1>
    <h4 class="w-dyn-bind-empty"></h4>
    <div class="text-size-medium w-dyn-bind-empty"></div>
    <div class="w-dyn-list">
      <div role="list" class="portfolio-header-tag-list w-dyn-items">
        <div role="listitem" class="w-dyn-item">
          <div class="portfolio-header-tag-item"><div class="tag-text">Tag</div></div>
        </div>
      </div>
      <div class="w-dyn-empty" style="display: none">No skills</div>
    </div>
    <div class="portfolio-header-metatag-item">
      <h2>Time Period</h2>
      <div class="text-block">Start</div>
      <div class="text-block-2 w-dyn-bind-empty"></div>
      <div class="text-block-2">Present</div>
    </div>
  </div>
  <a id="body-company-button" href="#" class="company-logo-button"></a>
</div>
<img src="/images/hero.webp" class="hero-image w-dyn-bind-empty">
<h3 id="section-highlights">Highlights</h3>
<div class="text-rich-text w-richtext"><p>Highlights placeholder</p></div>
<div id="section-press-release"><div class="w-richtext"><p>Press placeholder</p></div></div>
<div class="text-rich-text w-richtext"><p>Services placeholder</p></div>
<div id="section-screenshots">
  <div class="w-dyn-list">
    <div role="list" class="collection-list-3 w-dyn-items">
      <div role="listitem" class="collection-item-2 w-dyn-item">
        <a href="#" class="product-image-wrapper w-inline-block">
          <img src="/images/shot.webp" class="product-image">
          <div class="product-image-description">Shot description</div>
        </a>
        <div class="enlarged-product-image-display-wrapper">
          <img src="/images/shot.webp" class="enlarged-product-image">
          <div class="product-image-description">Shot description</div>
          <div class="close-button-wrapper"><div class="close-icon">x</div></div>
          <div class="slider-button" arrowbuttontype="left"><div class="arrow">&lt;</div></div>
          <div class="slider-button" arrowbuttontype="right"><div class="arrow">&gt;</div></div>
        </div>
      </div>
    </div>
  </div>
</div>
<div id="outside"><a href="#" class="product-image-wrapper">Not in the gallery</a></div>
</body></html>"""

DETAIL_COMPANY_PAGE = f"""<!DOCTYPE html>
<html>{HEAD}<body>
<div class="portfolio-header-component">
  <div class="portfolio-header-content-left">
    <h1>Company name</h1>
    <h4 class="w-dyn-bind-empty"></h4>
    <div class="text-size-medium w-dyn-bind-empty"></div>
    <div class="w-dyn-list">
      <div role="list" class="portfolio-header-tag-list w-dyn-items">
        <div role="listitem" class="w-dyn-item">
          <div class="portfolio-header-tag-item"><div class="tag-text">Tag</div></div>
        </div>
      </div>
      <div class="w-dyn-empty" style="display: none">No skills</div>
    </div>
    <div class="portfolio-header-metatag-item">
      <h2>Tenure</h2>
      <div class="text-block">Start</div>
      <div class="text-block-2 w-dyn-bind-empty"></div>
      <div class="text-block-2">Present</div>
    </div>
    <div class="portfolio-header-metatag-item"><h2>Type</h2><div class="text-block">Type</div></div>
    <div class="portfolio-header-metatag-item"><h2>Industry</h2><div class="text-block">Industry</div></div>
    <div class="portfolio-header-metatag-item">
      <h2>Funding</h2><div class="div-block"><div>$</div><div class="text-block">0</div></div>
    </div>
    <div class="portfolio-header-metatag-item">
      <h2>Headcount</h2>
      <div class="div-block"><div class="text-block">0</div><div>to</div><div class="text-block-2">0</div></div>
    </div>
    <div class="portfolio-header-metatag-item">
      <h2>Founded</h2><div class="div-block"><div class="text-block-3">1900</div></div>
    </div>
  </div>
  <div class="w-richtext w-dyn-bind-empty"></div>
  <a id="body-company-logo-button" href="#"></a>
  <a id="body-company-link-button" href="#"><div class="text-block link">example.com</div></a>
</div>
<img src="/images/hero.webp" class="hero-image">
<section class="padding-section-medium" id="company-products">
  <div class="work-component">
    <div class="w-dyn-list">
      <div role="list" class="w-dyn-items">{WORK_ITEM}</div>
      <div class="w-dyn-empty" style="display: none">No products</div>
    </div>
  </div>
</section>
<section class="padding-section-medium" id="company-patents">
  <div class="work-component">
    <div class="w-dyn-list">
      <div role="list" class="w-dyn-items">{WORK_ITEM}</div>
      <div class="w-dyn-empty" style="display: none">No patents</div>
    </div>
  </div>
</section>
</body></html>"""

DETAIL_PATENT_PAGE = f"""<!DOCTYPE html>
<html>{HEAD}<body>
<div class="portfolio-header-component">
  <div class="portfolio-header-content-left">
    <h1>Patent name</h1>
    <h4 class="w-dyn-bind-empty"></h4>
    <div class="text-size-medium w-dyn-bind-empty"></div>
    <div class="portfolio-header-metatag-item">
      <h2>Time Period</h2>
      <div class="text-block">Start</div>
      <div class="text-block-2 w-dyn-bind-empty"></div>
      <div class="text-block-2">Present</div>
    </div>
  </div>
</div>
<img src="/images/hero.webp" class="hero-image">
<div class="w-richtext w-dyn-bind-empty"></div>
</body></html>"""

DETAIL_SKILL_PAGE = f"""<!DOCTYPE html>
<html>{HEAD}<body>
<h2 class="heading w-dyn-bind-empty"></h2>
<div class="w-richtext w-dyn-bind-empty"></div>
</body></html>"""

TEMPLATES = {
    "index.html": INDEX_PAGE,
    "products.html": PRODUCTS_PAGE,
    "companies.html": COMPANIES_PAGE,
    "patents.html": PATENTS_PAGE,
    "detail_products.html": DETAIL_PRODUCT_PAGE,
    "detail_companies.html": DETAIL_COMPANY_PAGE,
    "detail_patents.html": DETAIL_PATENT_PAGE,
    "detail_skills.html": DETAIL_SKILL_PAGE,
}


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

PRODUCTS = [
    {
        "Name": "Widget", "Slug": "widget", "50 Character Description": "A small widget",
        "Summary": "Widget summary", "Description": "Widget long description",
        "Startup Company": "acme", "Featured": "true", "Sort Order": 2,
        "Start Date": "Jan 5, 2021", "End Date": "Mar 1, 2023",
        "Project Image": "/images/products/widget-project.webp",
        "Thumbnai Image": "/images/products/widget-thumb.webp",
        "Highlights": "<p>Shipped <strong>fast</strong></p>",
        "Press Release": "<p>Press coverage</p>",
        "Services Text": "<p>Services we provided</p>",
        "Skills": ["python", "rust-lang"],
    },
    {
        "Name": "Gadget", "Slug": "gadget", "50 Character Description": "A clever gadget",
        "Startup Company": "acme", "Featured": "true", "Sort Order": 1,
        "In Progress": "true", "Start Date": "Feb 1, 2024",
        "Thumbnai Image": "/images/products/gadget-thumb.webp",
        "Skills": ["python"],
    },
    {
        "Name": "Legacy Tool", "Slug": "legacy-tool", "50 Character Description": "An old tool",
        "Featured": "false", "Sort Order": 1, "End Date": "Jun 10, 2019",
    },
]

COMPANIES = [
    {
        "Name": "Acme", "Slug": "acme", "Website": "https://www.acme.io",
        "Logo (White)": "/images/companies/acme-logo-white.svg",
        "Hero Image": "/images/companies/acme-hero.webp",
        "50 Character Description": "Rockets and more", "Detailed Description": "Acme builds rockets.",
        "Highlights": "<p>Acme highlights</p>",
        "Start Date": "Jan 5, 2020", "End Date": "Dec 1, 2022",
        "Company Type": "Startup", "Recent Funding": "1900000", "Recent Stage": "Series B",
        "Headcount at Start": "12", "Headcount at End": "40", "Founding Year": "Founded in 2015",
        "Skills": ["python"], "Products": ["widget", "gadget"],
    },
    {
        "Name": "Globex", "Slug": "globex", "Logo (blue)": "/images/companies/globex-logo-blue.svg",
        "50 Character Description": "Ongoing engagement", "Start Date": "Mar 1, 2023",
        "Patents": ["fast-charging"],
    },
]

PATENTS = [
    {
        "Name": "Fast Charging", "Slug": "fast-charging", "Application ID": "US1234567",
        "Summary": "Charges batteries quickly", "Patented Date": "Aug 15, 2022",
        "Google Patent URL": "https://patents.google.com/patent/US1234567",
        "Startup Company": "Globex", "Description": "<p>Full patent text</p>",
        "Start Date": "Jan 1, 2020",
    },
    {
        "Name": "Quiet Motor", "Slug": "quiet-motor", "Application ID": "US7654321",
        "Summary": "A motor that hums", "In Progress": "true",
    },
]

SKILLS = [
    {"Name": "Python", "Slug": "python", "Description": "<p>Snakes all the way down</p>", "Order": "1"},
    {"Name": "Hardware", "Slug": "hardware", "Description": "Boards and solder", "Order": "2"},
]

PRODUCT_IMAGES = [
    {"Name": "Front", "Slug": "widget-front", "Product": "widget", "Image": "/images/pi/front.webp",
     "Image Description": "Front view", "Button ID (Image Order)": "1"},
    {"Name": "Side", "Slug": "widget-side", "Product": "widget", "Image": "/images/pi/side.webp",
     "Image Description": "Side view", "Button ID (Image Order)": "2"},
    {"Name": "Back", "Slug": "widget-back", "Product": "widget", "Image": "/images/pi/back.webp",
     "Image Description": "Back view", "Button ID (Image Order)": "3"},
    {"Name": "Gadget shot", "Slug": "gadget-shot", "Product": "gadget", "Image": "/images/pi/gadget.webp",
     "Button ID (Image Order)": "1"},
]

CONTENT = {
    "products.json": PRODUCTS,
    "companies.json": COMPANIES,
    "patents.json": PATENTS,
    "skills.json": SKILLS,
    "product-images.json": PRODUCT_IMAGES,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def parse(markup: str):
    return lxml_html.document_fromstring(markup)


@pytest.fixture()
def bundle() -> ContentBundle:
    return ContentBundle(
        products=[dict(p) for p in PRODUCTS],
        companies=[dict(c) for c in COMPANIES],
        patents=[dict(p) for p in PATENTS],
        skills=[dict(s) for s in SKILLS],
        product_images=[dict(pi) for pi in PRODUCT_IMAGES],
    )


@pytest.fixture()
def site(tmp_path: Path) -> Settings:
    """A project root with every template and collection written to disk."""
    site_dir = tmp_path / "site"
    data_dir = site_dir / "data"
    data_dir.mkdir(parents=True)
    for name, markup in TEMPLATES.items():
        (site_dir / name).write_text(markup, encoding="utf-8")
    for name, records in CONTENT.items():
        (data_dir / name).write_text(json.dumps(records), encoding="utf-8")
    (site_dir / "css").mkdir()
    (site_dir / "css" / "site.css").write_text("body { color: black; }", encoding="utf-8")
    return Settings(
        project_root=tmp_path,
        site_dir=site_dir,
        content_dir=data_dir,
        output_dir=tmp_path / "dist",
        exports_dir=tmp_path / "exports",
        images_dir=site_dir / "images",
    )
