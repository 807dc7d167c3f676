"""Data fetcher: load only the collections a page type needs, all-or-nothing."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Protocol

import httpx

from folio.routes import PageType
from folio.store import (
    COLLECTIONS, COMPANIES, PATENTS, PRODUCT_IMAGES, PRODUCTS, SKILLS, ContentBundle, Record,
)
from folio.utils import FolioError, load_json

log = logging.getLogger(__name__)

_USER_AGENT = "FolioLoader/1.0"
_TIMEOUT = 15.0

REQUIRED_COLLECTIONS: dict[PageType, tuple[str, ...]] = {
    PageType.INDEX: (PRODUCTS, COMPANIES, SKILLS),
    PageType.PRODUCTS: (PRODUCTS,),
    PageType.COMPANIES: (COMPANIES,),
    PageType.PATENTS: (PATENTS,),
    PageType.SKILLS: (),
    PageType.DETAIL_PRODUCT: (PRODUCTS, COMPANIES, SKILLS, PRODUCT_IMAGES),
    PageType.DETAIL_COMPANY: (PRODUCTS, COMPANIES, PATENTS, SKILLS),
    PageType.DETAIL_PATENT: (PATENTS,),
    PageType.DETAIL_SKILL: (SKILLS,),
    PageType.NONE: (),
}


class FetchError(FolioError):
    """A collection could not be retrieved; the page render must be abandoned."""

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Failed to load {COLLECTIONS.get(collection, collection)}: {reason}")
        self.collection = collection


class ContentSource(Protocol):
    async def load(self, collection: str) -> list[Record]: ...


def _as_records(collection: str, data: object) -> list[Record]:
    if not isinstance(data, list):
        raise FetchError(collection, "expected a JSON array")
    return [r for r in data if isinstance(r, dict)]


class HttpSource:
    """Collections served as ``<base_url><prefix>/<file>.json``."""

    def __init__(
        self, base_url: str, prefix: str = "/data",
        client: httpx.AsyncClient | None = None, timeout: float = _TIMEOUT,
        user_agent: str = _USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
        self._client = client
        self._timeout = timeout
        self._user_agent = user_agent

    def url_for(self, collection: str) -> str:
        return f"{self.base_url}{self.prefix}/{COLLECTIONS[collection]}"

    async def _get(self, client: httpx.AsyncClient, collection: str) -> list[Record]:
        url = self.url_for(collection)
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise FetchError(collection, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            raise FetchError(collection, str(exc) or type(exc).__name__) from exc
        log.debug("Fetched %s (%d records)", url, len(data) if isinstance(data, list) else -1)
        return _as_records(collection, data)

    async def load(self, collection: str) -> list[Record]:
        if self._client is not None:
            return await self._get(self._client, collection)
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=httpx.Timeout(self._timeout),
            headers={"User-Agent": self._user_agent},
        ) as client:
            return await self._get(client, collection)


class DirectorySource:
    """Collections read from JSON files in a local directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    async def load(self, collection: str) -> list[Record]:
        path = self.directory / COLLECTIONS[collection]
        try:
            data = await asyncio.to_thread(load_json, path)
        except FileNotFoundError as exc:
            raise FetchError(collection, f"{path} not found") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise FetchError(collection, str(exc)) from exc
        return _as_records(collection, data)


async def fetch_collections(page_type: PageType, source: ContentSource) -> ContentBundle:
    """Fetch every collection *page_type* requires, concurrently.

    Raises FetchError on the first failure; no partial bundle is ever returned.
    """
    names = REQUIRED_COLLECTIONS.get(page_type, ())
    if not names:
        return ContentBundle()
    tasks = [asyncio.ensure_future(source.load(name)) for name in names]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return ContentBundle.from_mapping(dict(zip(names, results)))
