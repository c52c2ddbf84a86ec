"""
Command line interface for the DWML generator.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigError, DocumentConfig, get_settings, load_config, with_overrides
from .ndfd import ELEMENTS, MatchFileError, NamingConvention, default_period, element_name, load_matches
from .pipeline import DocumentRequest, active_points, build_document
from .render import render_document
from .util import parse_timestamp, write_text_file
from .weather import parse_weather, translate_hazard

console = Console()
app = typer.Typer(help="Generate Digital Weather Markup Language documents from probed forecast values.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("DWMLGEN_LOG_LEVEL") or get_settings().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Path) -> Path:
    """Ensure config path exists and return absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Path) -> DocumentConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show dwmlgen version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]dwmlgen[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]dwmlgen[/] is ready. Run "
            "[cyan]dwmlgen generate --config doc.toml --matches matches.json[/] to build a document.",
        )


@app.command()
def generate(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the document configuration TOML file.",
        callback=_resolve_config_path,
    ),
    matches: Path = typer.Option(
        ...,
        "--matches",
        "-m",
        help="Path to the JSON file of probed forecast values.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the document here instead of standard output.",
    ),
    product: Optional[str] = typer.Option(
        None,
        "--product",
        "-p",
        help="Override the product (time-series, glance, 12-hourly, 24-hourly).",
    ),
    start: Optional[str] = typer.Option(None, "--start", help="Override the start time (ISO-8601 or epoch seconds)."),
    end: Optional[str] = typer.Option(None, "--end", help="Override the end time (ISO-8601 or epoch seconds)."),
    days: Optional[int] = typer.Option(None, "--days", help="Override the number of days for summary products."),
    units: Optional[str] = typer.Option(None, "--units", help="Unit system: e (English) or m (metric)."),
    icons: Optional[bool] = typer.Option(None, "--icons/--no-icons", help="Derive and write condition icons."),
    element: Optional[List[str]] = typer.Option(
        None,
        "--element",
        "-e",
        help="Element to include (repeatable; any naming convention).",
    ),
    now: Optional[str] = typer.Option(
        None,
        "--now",
        help="Reference current time, for replaying archived forecasts.",
    ),
) -> None:
    """
    Build one DWML document from a configuration and a match file.
    """
    document_config = _load_config_or_exit(config)
    try:
        document_config = with_overrides(
            document_config,
            product=product,
            start_time=start,
            end_time=end,
            num_days=days,
            unit_system=units,
            icons=icons,
            elements=element or None,
        )
        active_points(document_config.points)
        reference_now = parse_timestamp(now) if now else None
    except (ConfigError, ValueError) as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    try:
        match_list = load_matches(matches)
    except MatchFileError as exc:
        console.print(f"[bold red]Match file error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    request = DocumentRequest.from_config(
        document_config,
        match_list,
        now=reference_now,
        icon_base_url=get_settings().icon_base_url,
    )
    try:
        document = build_document(request)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if document is None:
        console.print("[yellow]No forecast values found; no document written.[/]")
        return

    xml = render_document(document)
    if output is None:
        typer.echo(xml, nl=False)
        return

    target = write_text_file(output, xml)
    summary_table = Table(title="DWML Document Summary")
    summary_table.add_column("Key")
    summary_table.add_column("Value", overflow="fold")
    summary_table.add_row("Product", document.product.value)
    summary_table.add_row("Points", str(len(document.points)))
    summary_table.add_row("Time layouts", str(len(document.layouts)))
    summary_table.add_row("Config hash", document_config.hash)
    summary_table.add_row("Output", str(target))
    console.print(summary_table)


@app.command()
def elements() -> None:
    """
    List the NDFD element catalogue.
    """
    table = Table(title="NDFD Elements")
    table.add_column("Short name")
    table.add_column("File name")
    table.add_column("Verification")
    table.add_column("Default period (h)", justify="right")
    table.add_column("Units (e/m)")
    for element_id, info in ELEMENTS.items():
        units = f"{info.english_units}/{info.metric_units}" if info.english_units else "-"
        table.add_row(
            element_name(element_id, NamingConvention.SHORT),
            element_name(element_id, NamingConvention.FILE),
            element_name(element_id, NamingConvention.VERIFICATION),
            str(default_period(element_id)),
            units,
        )
    console.print(table)


@app.command()
def translate(
    code: str = typer.Argument(..., help="Coded weather string, or a hazard code with --hazard."),
    hazard: bool = typer.Option(False, "--hazard", help="Treat CODE as a hazard code such as WS.A."),
) -> None:
    """
    Print the English rendition of a coded weather string or hazard code.
    """
    if not hazard:
        typer.echo(parse_weather(code).english())
        return
    translation = translate_hazard(code)
    if translation is None:
        console.print(f"[bold red]Unknown hazard code:[/] {code}")
        raise typer.Exit(code=1)
    typer.echo(translation.headline)
    if translation.icon:
        typer.echo(f"Icon: {translation.icon}")


@app.command("config-hash")
def config_hash(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the document configuration TOML file.",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    Output the deterministic hash of a config file for change detection.
    """
    document_config = _load_config_or_exit(config)
    console.print(f"[bold green]{document_config.hash}[/]")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
