"""Pydantic response schemas for the Folio app and build commands."""
from __future__ import annotations

from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str = "ok"
    site_dir: str
    content_dir: str
    collections: dict[str, bool] = {}


class RouteOut(BaseModel):
    path: str
    page_type: str
    slug: str | None = None
    template: str | None = None
    collections: list[str] = []


class ConvertResult(BaseModel):
    written: dict[str, int] = {}
    skipped: list[str] = []
    dropped: dict[str, int] = {}


class AssetResult(BaseModel):
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0
    rewritten: int = 0
    files: list[str] = []


class BuildResult(BaseModel):
    rendered: int = 0
    failed: list[str] = []
    output_dir: str
    pages: list[str] = []
