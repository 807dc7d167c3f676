from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable

import typer
from rich.box import ROUNDED
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from folio.assets import mirror_assets
from folio.config import get_settings
from folio.converter import convert_exports
from folio.loader import TemplateNotFound, build_site, render_page, required_collections, template_for
from folio.routes import classify

app = typer.Typer(help="Render the portfolio site from its JSON content collections")
console = Console()


def _configure_logging(verbose: int, json_output: bool) -> None:
    level = logging.WARNING if verbose <= 0 else logging.INFO if verbose == 1 else logging.DEBUG
    if json_output:
        handler: logging.Handler = logging.StreamHandler()
        fmt = "%(levelname)s: %(message)s"
    else:
        handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
        fmt = "%(message)s"
    logging.basicConfig(level=level, format=fmt, handlers=[handler], force=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    project_root: str | None = typer.Option(
        None,
        "--project-root",
        help="Project root containing site/, exports/ and an optional folio.yaml.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON for scripting."),
    verbose: int = typer.Option(0, "-v", "--verbose", count=True, help="Increase log verbosity."),
) -> None:
    if project_root:
        os.environ["FOLIO_HOME"] = str(Path(project_root).expanduser().resolve())
        get_settings.cache_clear()
    ctx.obj = {"json_output": json_output, "verbose": verbose}
    _configure_logging(verbose, json_output)


def _wants_json(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("json_output"))


def _cell(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(f"{k}={v}" for k, v in value.items()) or "-"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    return "-" if value is None else str(value)


def _print(title: str, payload: dict[str, Any], ctx: typer.Context) -> None:
    if _wants_json(ctx):
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    table = Table(title=title, box=ROUNDED, show_header=False)
    table.add_column(style="bold cyan")
    table.add_column()
    for key, value in payload.items():
        table.add_row(key, _cell(value))
    console.print(table)


def _run_stage(ctx: typer.Context, stage_name: str, runner: Callable[[], Any]) -> Any:
    if _wants_json(ctx):
        return runner()
    with console.status(f"[bold cyan]{stage_name}[/bold cyan]", spinner="dots"):
        return runner()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("route")
def route_command(ctx: typer.Context, path: str = typer.Argument(..., help="Site path, e.g. /products/foo")) -> None:
    route = classify(path)
    _print("route", {
        "path": path,
        "page_type": route.page_type.value,
        "slug": route.slug,
        "template": template_for(route),
        "collections": required_collections(route),
    }, ctx)


@app.command("render")
def render_command(
    path: str = typer.Argument(..., help="Site path to render, e.g. /companies/acme"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write HTML here instead of stdout."),
) -> None:
    settings = get_settings()
    try:
        page = asyncio.run(render_page(path, settings))
    except TemplateNotFound as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc

    markup = page.html()
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup, encoding="utf-8")
    else:
        typer.echo(markup)
    if not page.rendered:
        raise typer.Exit(code=1)


@app.command("build")
def build_command(ctx: typer.Context) -> None:
    settings = get_settings()
    result = _run_stage(ctx, "build", lambda: asyncio.run(build_site(settings)))
    _print("build", result.model_dump(), ctx)
    if result.failed:
        raise typer.Exit(code=1)


@app.command("convert")
def convert_command(
    ctx: typer.Context,
    csv_dir: Path | None = typer.Option(None, "--csv-dir", help="Directory with the CMS CSV exports."),
    out_dir: Path | None = typer.Option(None, "--out-dir", help="Where to write the JSON collections."),
) -> None:
    settings = get_settings()
    result = _run_stage(
        ctx, "convert",
        lambda: convert_exports(csv_dir or settings.exports_dir, out_dir or settings.content_dir),
    )
    _print("convert", result.model_dump(), ctx)


@app.command("assets")
def assets_command(
    ctx: typer.Context,
    images_dir: Path | None = typer.Option(None, "--images-dir", help="Local image directory."),
) -> None:
    settings = get_settings()
    result = _run_stage(ctx, "assets", lambda: asyncio.run(mirror_assets(
        settings.content_dir, images_dir or settings.images_dir,
        hosts=settings.asset_hosts, user_agent=settings.user_agent,
    )))
    _print("assets", result.model_dump(), ctx)
    if result.failed:
        raise typer.Exit(code=1)


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    import uvicorn
    uvicorn.run("folio.app:app", host=host, port=port, reload=reload)


@app.command("doctor")
def doctor_command(ctx: typer.Context) -> None:
    settings = get_settings()
    checks: dict[str, Any] = {
        "site_dir_exists": settings.site_dir.is_dir(),
        "content_dir_exists": settings.content_dir.is_dir(),
        "exports_dir_exists": settings.exports_dir.is_dir(),
        "base_url": settings.base_url or None,
    }
    _print("doctor", checks, ctx)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
