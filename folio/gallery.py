"""Product image gallery interaction.

One controller per rendered page handles every gallery event through a single
delegated entry point (:meth:`GalleryController.dispatch`) instead of a
handler per image. Clicks are only honoured inside the gallery's section and
list; the Escape key is handled document-wide.

Navigation walks the current ordered list of image ids and stops at either
end: "next" on the last image and "previous" on the first do nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from lxml.html import HtmlElement

from folio.formatters import neighbour_id

log = logging.getLogger(__name__)

_WRAPPER = "product-image-wrapper"
_ITEM = "collection-item-2"
_ENLARGED = "enlarged-product-image-display-wrapper"
_CLOSE = "close-button-wrapper"
_SLIDER = "slider-button"


def _has_class(el: HtmlElement, name: str) -> bool:
    return name in (el.get("class") or "").split()


def _closest(el: HtmlElement | None, name: str) -> HtmlElement | None:
    while el is not None:
        if isinstance(el.tag, str) and _has_class(el, name):
            return el
        el = el.getparent()
    return None


def _contains(ancestor: HtmlElement, el: HtmlElement) -> bool:
    return el is ancestor or any(a is ancestor for a in el.iterancestors())


def _display(el: HtmlElement, value: str) -> None:
    styles = [
        d for d in (el.get("style") or "").split(";")
        if d.strip() and d.split(":", 1)[0].strip().lower() != "display"
    ]
    styles.append(f"display: {value}")
    el.set("style", "; ".join(s.strip() for s in styles))


def _is_open(el: HtmlElement) -> bool:
    for decl in (el.get("style") or "").split(";"):
        prop, _, value = decl.partition(":")
        if prop.strip().lower() == "display" and value.strip() == "block":
            return True
    return False


@dataclass(frozen=True)
class GalleryEvent:
    """A click on *target*, or a keydown of *key*."""

    type: str
    target: HtmlElement | None = None
    key: str = ""


class GalleryController:
    def __init__(self) -> None:
        self._list: HtmlElement | None = None
        self._root: HtmlElement | None = None
        self._document: HtmlElement | None = None

    @property
    def attached(self) -> bool:
        return self._list is not None

    def attach(
        self, image_list: HtmlElement, document: HtmlElement, section: HtmlElement | None = None,
    ) -> bool:
        """Bind the controller to a rendered gallery. Only the first call has any effect."""
        if self.attached:
            log.debug("Gallery controller already attached")
            return False
        self._list = image_list
        self._document = document
        self._root = section if section is not None else document
        return True

    # -- state -------------------------------------------------------------

    def image_ids(self) -> list[str]:
        if self._list is None:
            return []
        return [
            el.get("id") for el in self._list.iter()
            if isinstance(el.tag, str) and _has_class(el, _WRAPPER) and el.get("id")
        ]

    def _enlarged_views(self) -> list[HtmlElement]:
        if self._document is None:
            return []
        return [el for el in self._document.iter() if isinstance(el.tag, str) and _has_class(el, _ENLARGED)]

    def current(self) -> str | None:
        """Id of the image whose enlarged view is open, if any."""
        for view in self._enlarged_views():
            if _is_open(view):
                item = _closest(view, _ITEM)
                link = None
                if item is not None:
                    link = next((el for el in item.iter() if isinstance(el.tag, str) and _has_class(el, _WRAPPER)), None)
                return link.get("id") if link is not None else None
        return None

    # -- actions -----------------------------------------------------------

    def hide_all(self) -> None:
        for view in self._enlarged_views():
            _display(view, "none")

    def open(self, image_id: str) -> bool:
        if self._list is None:
            return False
        link = next((el for el in self._list.iter() if el.get("id") == image_id), None) if image_id else None
        if link is None:
            return False
        return self._open_link(link)

    def _open_link(self, link: HtmlElement) -> bool:
        self.hide_all()
        item = _closest(link, _ITEM)
        if item is None:
            return False
        view = next((el for el in item.iter() if isinstance(el.tag, str) and _has_class(el, _ENLARGED)), None)
        if view is None:
            return False
        _display(view, "block")
        return True

    def close(self) -> bool:
        closed = False
        for view in self._enlarged_views():
            if _is_open(view):
                _display(view, "none")
                closed = True
        return closed

    def navigate(self, current_id: str, direction: str) -> bool:
        """Open the neighbour of *current_id*; a no-op past either end."""
        nxt = neighbour_id(self.image_ids(), current_id, direction)
        if nxt is None:
            return False
        return self.open(nxt)

    # -- delegated events --------------------------------------------------

    def dispatch(self, event: GalleryEvent) -> bool:
        """Handle one event; returns True when gallery state changed."""
        if not self.attached:
            return False
        if event.type == "keydown":
            return event.key == "Escape" and self.close()
        if event.type != "click" or event.target is None:
            return False
        target = event.target
        if not _contains(self._root, target):
            return False

        link = _closest(target, _WRAPPER)
        if link is not None and _contains(self._list, link):
            return self._open_link(link)

        close_btn = _closest(target, _CLOSE)
        if close_btn is not None and _contains(self._list, close_btn):
            view = _closest(close_btn, _ENLARGED)
            if view is not None:
                _display(view, "none")
                return True
            return False

        slider = _closest(target, _SLIDER)
        if slider is not None and _contains(self._list, slider):
            return self.navigate(slider.get("currentproductimageid") or "", slider.get("arrowbuttontype") or "")
        return False
