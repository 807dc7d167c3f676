from __future__ import annotations

import pytest

from folio.routes import PageType, Route, classify


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("/", Route(PageType.INDEX)),
        ("", Route(PageType.INDEX)),
        ("/index.html", Route(PageType.INDEX)),
        ("/products", Route(PageType.PRODUCTS)),
        ("/products/", Route(PageType.PRODUCTS)),
        ("/products.html", Route(PageType.PRODUCTS)),
        ("/companies", Route(PageType.COMPANIES)),
        ("/patents", Route(PageType.PATENTS)),
        ("/products/widget", Route(PageType.DETAIL_PRODUCT, "widget")),
        ("/products/widget/", Route(PageType.DETAIL_PRODUCT, "widget")),
        ("/companies/acme", Route(PageType.DETAIL_COMPANY, "acme")),
        ("/patents/fast-charging", Route(PageType.DETAIL_PATENT, "fast-charging")),
        ("/skills", Route(PageType.SKILLS)),
        ("/detail_skills?slug=python", Route(PageType.DETAIL_SKILL, "python")),
        ("/detail_skills.html?item=python", Route(PageType.DETAIL_SKILL, "python")),
        ("/about", Route(PageType.NONE)),
        ("/products/widget/extra", Route(PageType.NONE)),
    ],
)
def test_classify(url, expected):
    assert classify(url) == expected


def test_full_url():
    assert classify("https://example.com/companies/acme?utm=1") == Route(PageType.DETAIL_COMPANY, "acme")


def test_path_segment_wins_over_query():
    assert classify("/products/widget?slug=gadget").slug == "widget"


def test_detail_without_slug():
    route = classify("/detail_skills")
    assert route.page_type is PageType.DETAIL_SKILL
    assert route.slug is None


def test_list_pages_carry_no_slug():
    assert classify("/products?slug=widget").slug is None


def test_is_detail():
    assert PageType.DETAIL_PATENT.is_detail
    assert not PageType.PATENTS.is_detail
