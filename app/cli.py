from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from adapters.filesystem.dataset_converter import convert_csv_to_json
from adapters.filesystem.framework_repository import FileSystemFrameworkRepository
from app.config import AppSettings, load_settings
from app.dataset_wiring import build_framework_repository, build_layout_engine, close_resources
from domain.models import AxisKey, AxisSelection, Framework
from domain.ports.repositories import DatasetLoadError
from domain.services.build_scatter_view import BuildScatterView
from domain.services.framework_views import build_details, format_metric
from domain.services.projection import Viewport
from domain.services.unique_names import suffix_duplicate_names

app = typer.Typer(no_args_is_help=True)
convert_app = typer.Typer(no_args_is_help=True)
app.add_typer(convert_app, name="convert")
console = Console()


class CliState:
    config_path: Path | None = None


state = CliState()


@app.callback()
def main(
    config: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    state.config_path = config
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _settings() -> AppSettings:
    try:
        return load_settings(state.config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(code=1) from exc


def _load(settings: AppSettings, dataset: Path | None) -> list[Framework]:
    try:
        if dataset is not None:
            frameworks = FileSystemFrameworkRepository().load(dataset)
        else:
            repository = build_framework_repository(settings)
            try:
                frameworks = repository.load(settings.landscape.dataset_location())
            finally:
                close_resources(repository)
    except DatasetLoadError as exc:
        console.print(f"[red]Failed to load data:[/] {escape(exc.reason)} ({escape(exc.source)})")
        raise typer.Exit(code=1) from exc
    return suffix_duplicate_names(frameworks)


@convert_app.command("csv-to-json")
def convert_csv(
    csv_path: Path = typer.Argument(..., help="Dataset CSV with a header row."),
    json_path: Path = typer.Argument(..., help="Where to write the JSON array."),
) -> None:
    try:
        records = convert_csv_to_json(csv_path, json_path)
    except DatasetLoadError as exc:
        console.print(f"[red]Conversion failed:[/] {escape(exc.reason)}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Wrote[/] {len(records)} records to {json_path}")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Dataset JSON or CSV file.")) -> None:
    try:
        frameworks = FileSystemFrameworkRepository().load(input_path)
    except DatasetLoadError as exc:
        console.print(f"[red]Validation failed:[/] {escape(exc.reason)}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid dataset:[/] {input_path} ({len(frameworks)} frameworks)")


@app.command("layout")
def layout(
    dataset: Optional[Path] = typer.Option(None, "--dataset", help="Dataset file override."),
    x: Optional[AxisKey] = typer.Option(None, "--x", help="Attribute on the X axis."),
    y: Optional[AxisKey] = typer.Option(None, "--y", help="Attribute on the Y axis."),
    category: Optional[str] = typer.Option(None, "--category", help="Only this category."),
    query: str = typer.Option("", "--query", help="Name/description substring."),
) -> None:
    settings = _settings()
    landscape = settings.landscape
    axes = AxisSelection(x=x or landscape.default_axis_x, y=y or landscape.default_axis_y)
    view = BuildScatterView(build_layout_engine(settings), landscape.to_plot_area()).build(
        _load(settings, dataset), axes, theme=landscape.theme, category=category, query=query
    )

    table = Table(title=f"{axes.x.label} vs {axes.y.label}")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column(axes.x.label, justify="right")
    table.add_column(axes.y.label, justify="right")
    table.add_column("Plot X", justify="right")
    table.add_column("Plot Y", justify="right")
    for point in view.points:
        table.add_row(
            escape(point.position.name),
            escape(point.framework.category),
            format_metric(point.framework.metric(axes.x)),
            format_metric(point.framework.metric(axes.y)),
            f"{point.position.plot_x:.4f}",
            f"{point.position.plot_y:.4f}",
        )
    console.print(table)


@app.command("hit")
def hit(
    px: float = typer.Argument(..., help="Pointer X in pixels."),
    py: float = typer.Argument(..., help="Pointer Y in pixels."),
    dataset: Optional[Path] = typer.Option(None, "--dataset", help="Dataset file override."),
    x: Optional[AxisKey] = typer.Option(None, "--x", help="Attribute on the X axis."),
    y: Optional[AxisKey] = typer.Option(None, "--y", help="Attribute on the Y axis."),
    zoom: float = typer.Option(1.0, "--zoom"),
    pan_x: float = typer.Option(0.0, "--pan-x"),
    pan_y: float = typer.Option(0.0, "--pan-y"),
    radius: Optional[float] = typer.Option(None, "--radius", min=0, help="Hit radius in pixels."),
) -> None:
    settings = _settings()
    landscape = settings.landscape
    axes = AxisSelection(x=x or landscape.default_axis_x, y=y or landscape.default_axis_y)
    try:
        viewport = Viewport(zoom=zoom, pan_x=pan_x, pan_y=pan_y)
    except ValueError as exc:
        console.print(f"[red]Invalid viewport:[/] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    view = BuildScatterView(build_layout_engine(settings), landscape.to_plot_area()).build(
        _load(settings, dataset), axes, viewport=viewport
    )
    point = view.hit(px, py, landscape.point_radius_px if radius is None else radius)
    if point is None:
        console.print("[yellow]No framework at that position[/]")
        raise typer.Exit(code=1)
    details = build_details(point.framework)
    console.print(f"[bold]{escape(details.title)}[/]")
    console.print(details.subtitle, markup=False)
    if details.description:
        console.print(details.description, markup=False)
    if details.url:
        console.print(details.url, markup=False)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8080, help="Bind port."),
) -> None:
    import uvicorn

    from app.web_main import create_app

    uvicorn.run(create_app(_settings()), host=host, port=port)


if __name__ == "__main__":
    app()
