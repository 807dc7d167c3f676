"""Mirror CDN-hosted images locally and point the JSON collections at the copies."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from urllib.parse import unquote, urlsplit

import httpx

from folio.schemas import AssetResult
from folio.store import COLLECTIONS, COMPANIES, PATENTS, PRODUCT_IMAGES, PRODUCTS, Record
from folio.utils import load_json, safe_slug, write_json

log = logging.getLogger(__name__)

_TIMEOUT = 30.0
_EXTENSION = re.compile(r"\.([A-Za-z0-9]+)$")

DEFAULT_HOSTS = ("uploads-ssl.webflow.com", "cdn.prod.website-files.com")

# collection -> ((field, file-name suffix), ...); an empty suffix names the file after the slug alone
IMAGE_FIELDS: dict[str, tuple[tuple[str, str], ...]] = {
    COMPANIES: (
        ("Logo (White)", "logo-white"),
        ("Logo (blue)", "logo-blue"),
        ("Hero Image", "hero"),
        ("Thumbnail", "thumbnail"),
    ),
    PRODUCTS: (("Thumbnai Image", "thumb"), ("Project Image", "project")),
    PATENTS: (("Thumbnai Image", "thumb"), ("Project Image", "project")),
    PRODUCT_IMAGES: (("Image", ""),),
}


def is_remote_asset(url: object, hosts: tuple[str, ...] | list[str] = DEFAULT_HOSTS) -> bool:
    if not url or not isinstance(url, str):
        return False
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return False
    return host is not None and host in hosts


def extension_for(url: str) -> str:
    """Lower-cased file extension of the URL path; ``webp`` when there is none."""
    try:
        path = unquote(urlsplit(url).path)
    except ValueError:
        return "webp"
    m = _EXTENSION.search(path)
    return m.group(1).lower() if m else "webp"


class AssetMirror:
    """Downloads each distinct URL once; files already on disk are reused."""

    def __init__(self, images_dir: Path, client: httpx.AsyncClient, hosts: tuple[str, ...] | list[str] = DEFAULT_HOSTS):
        self.images_dir = Path(images_dir)
        self.client = client
        self.hosts = tuple(hosts)
        self.result = AssetResult()
        self._seen: dict[str, str] = {}

    async def ensure(self, url: str, relative: str) -> str | None:
        """Root-relative ``/images/...`` path for *url*, or None if the download failed."""
        if url in self._seen:
            return self._seen[url]
        root_rel = f"/{self.images_dir.name}/{relative}"
        target = self.images_dir / relative
        if target.exists():
            self.result.skipped += 1
            self._seen[url] = root_rel
            return root_rel
        try:
            resp = await self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("Download failed for %s: %s", url, exc)
            self.result.failed += 1
            return None
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(resp.content)
        self.result.downloaded += 1
        self.result.files.append(relative)
        self._seen[url] = root_rel
        log.debug("Saved %s", target)
        return root_rel

    async def process(self, collection: str, records: list[Record]) -> int:
        """Rewrite image fields of *records* in place; returns the number of fields changed."""
        changed = 0
        for record in records:
            slug = safe_slug(record.get("Slug"))
            for field, suffix in IMAGE_FIELDS[collection]:
                url = record.get(field)
                if not is_remote_asset(url, self.hosts):
                    continue
                base = f"{slug}-{suffix}" if suffix else slug
                local = await self.ensure(url, f"{collection}/{base}.{extension_for(url)}")
                if local is not None:
                    record[field] = local
                    changed += 1
        return changed


async def mirror_assets(
    content_dir: str | Path, images_dir: str | Path,
    hosts: tuple[str, ...] | list[str] = DEFAULT_HOSTS,
    client: httpx.AsyncClient | None = None,
    user_agent: str = "FolioLoader/1.0",
) -> AssetResult:
    """Download remote images referenced by the collections and rewrite their JSON files.

    A failed download leaves that field pointing at its original URL.
    """
    content_dir = Path(content_dir)
    own_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=httpx.Timeout(_TIMEOUT),
            headers={"User-Agent": user_agent},
        )
    mirror = AssetMirror(Path(images_dir), client, hosts)
    try:
        for collection in IMAGE_FIELDS:
            path = content_dir / COLLECTIONS[collection]
            if not path.is_file():
                log.info("No %s to process", path.name)
                continue
            try:
                records = load_json(path)
            except json.JSONDecodeError as exc:
                log.warning("Skipping %s: %s", path.name, exc)
                continue
            if not isinstance(records, list):
                log.warning("Skipping %s: expected a JSON array", path.name)
                continue
            changed = await mirror.process(collection, [r for r in records if isinstance(r, dict)])
            if changed:
                write_json(path, records)
                mirror.result.rewritten += changed
    finally:
        if own_client:
            await client.aclose()
    log.info(
        "Downloaded %d new file(s), skipped %d existing, %d failed",
        mirror.result.downloaded, mirror.result.skipped, mirror.result.failed,
    )
    return mirror.result
