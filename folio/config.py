from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from folio.binder import METATAG_LABELS
from folio.views import MAX_FEATURED

CONFIG_FILE = "folio.yaml"


def _resolve_project_root() -> Path:
    override = os.getenv("FOLIO_HOME", "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd().resolve()


class Settings(BaseModel):
    project_root: Path = Field(default_factory=_resolve_project_root)
    site_dir: Path = Field(default_factory=lambda: _resolve_project_root() / "site")
    content_dir: Path = Field(default_factory=lambda: _resolve_project_root() / "site" / "data")
    output_dir: Path = Field(default_factory=lambda: _resolve_project_root() / "dist")
    exports_dir: Path = Field(default_factory=lambda: _resolve_project_root() / "exports")
    images_dir: Path = Field(default_factory=lambda: _resolve_project_root() / "site" / "images")

    data_prefix: str = "/data"
    base_url: str = ""

    user_agent: str = "FolioLoader/1.0"
    request_timeout_seconds: float = 15.0
    max_featured: int = MAX_FEATURED

    asset_hosts: list[str] = Field(
        default_factory=lambda: ["uploads-ssl.webflow.com", "cdn.prod.website-files.com"]
    )
    metatag_labels: dict[str, str] = Field(default_factory=lambda: dict(METATAG_LABELS))

    def load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data

    @classmethod
    def from_project(cls, root: Path | None = None) -> Settings:
        """Defaults for *root*, overridden by ``<root>/folio.yaml`` when present.

        Relative directories in the YAML file resolve against *root*.
        ``metatag_labels`` entries extend the built-in table rather than replace it.
        """
        root = (root or _resolve_project_root()).resolve()
        base = cls(
            project_root=root,
            site_dir=root / "site",
            content_dir=root / "site" / "data",
            output_dir=root / "dist",
            exports_dir=root / "exports",
            images_dir=root / "site" / "images",
        )
        raw = base.load_yaml(root / CONFIG_FILE)
        if not raw:
            return base

        overrides: dict[str, Any] = {}
        for key, value in raw.items():
            if key not in cls.model_fields or key == "project_root":
                continue
            if key.endswith("_dir") and value:
                path = Path(str(value)).expanduser()
                value = path if path.is_absolute() else root / path
            elif key == "metatag_labels":
                if not isinstance(value, dict):
                    continue
                value = {**base.metatag_labels, **{str(k): str(v) for k, v in value.items()}}
            overrides[key] = value
        return cls.model_validate({**base.model_dump(), **overrides})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_project()
