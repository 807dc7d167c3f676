from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import FileResponse, HTMLResponse

from folio.config import Settings, get_settings
from folio.loader import TemplateNotFound, render_page, required_collections, template_for
from folio.routes import classify
from folio.schemas import HealthOut, RouteOut
from folio.store import COLLECTIONS

log = logging.getLogger(__name__)

_DATA_FILES = set(COLLECTIONS.values())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not settings.site_dir.is_dir():
        log.warning("Site directory %s does not exist", settings.site_dir)
    yield


app = FastAPI(
    title="Folio",
    version="0.1.0",
    description=(
        "Portfolio site renderer. Serves the Webflow templates with products, "
        "companies, patents and skills bound in from the JSON content collections."
    ),
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Content", "description": "Raw JSON content collections."},
        {"name": "Pages", "description": "Rendered site pages and static assets."},
        {"name": "Admin", "description": "Health and routing diagnostics."},
    ],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _site_file(settings: Settings, path: str) -> Path | None:
    """A file under the site directory, never outside it."""
    root = settings.site_dir.resolve()
    candidate = (root / path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


# ---------------------------------------------------------------------------
# Routes: Admin
# ---------------------------------------------------------------------------


@app.get("/api/health", response_model=HealthOut, tags=["Admin"], summary="Service health and content availability")
async def health(settings: Settings = Depends(get_settings)):
    return HealthOut(
        site_dir=str(settings.site_dir),
        content_dir=str(settings.content_dir),
        collections={name: (settings.content_dir / fname).is_file() for name, fname in COLLECTIONS.items()},
    )


@app.get("/api/route", response_model=RouteOut, tags=["Admin"], summary="Classify a site path")
async def route_info(path: str = Query(..., description="Site path, optionally with a query string")):
    route = classify(path)
    return RouteOut(
        path=path,
        page_type=route.page_type.value,
        slug=route.slug,
        template=template_for(route),
        collections=required_collections(route),
    )


# ---------------------------------------------------------------------------
# Routes: Content
# ---------------------------------------------------------------------------


@app.get("/data/{filename}", tags=["Content"], summary="Serve one JSON content collection")
async def data_file(filename: str, settings: Settings = Depends(get_settings)):
    if filename not in _DATA_FILES:
        raise HTTPException(404, f"Unknown collection '{filename}'")
    path = settings.content_dir / filename
    if not path.is_file():
        raise HTTPException(404, f"{filename} not found")
    return FileResponse(path, media_type="application/json")


# ---------------------------------------------------------------------------
# Routes: Pages
# ---------------------------------------------------------------------------


@app.get("/{path:path}", tags=["Pages"], summary="Rendered page or static asset")
async def page(path: str, request: Request, settings: Settings = Depends(get_settings)):
    suffix = Path(path).suffix
    if suffix and suffix != ".html":
        asset = _site_file(settings, path)
        if asset is None:
            raise HTTPException(404, "Not found")
        return FileResponse(asset)

    url = "/" + path
    if request.url.query:
        url += "?" + request.url.query
    try:
        rendered = await render_page(url, settings)
    except TemplateNotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    return HTMLResponse(rendered.html())


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


def main():
    import uvicorn
    uvicorn.run("folio.app:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    main()
