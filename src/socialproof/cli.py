"""Social proof notification CLI application.

This module provides the command-line interface for previewing
notifications, running a full notification cycle, inspecting throttle
state and building configuration files.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from socialproof.content.resolver import ContentResolver
from socialproof.controller import NotificationController
from socialproof.errors import MalformedPersistedRecord, PersistenceUnavailable
from socialproof.rendering.html import HtmlPage, create_renderer
from socialproof.settings import ApplicationSettings, NotificationSettings
from socialproof.storage import JsonFileStore
from socialproof.throttle import ThrottleGate
from socialproof.utils.time import TimeUtils

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Social proof notification CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
state_app = typer.Typer(help="Throttle state helpers")
app.add_typer(config_app, name="config")
app.add_typer(state_app, name="state")

logger: Final = logging.getLogger(__name__)  # Will be "socialproof.cli"

CONFIG_OPTION = typer.Option(..., "--config", "-c", exists=True, dir_okay=False)
OPTIONAL_CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
OUT_OPTION = typer.Option(None, "--out", "-o", file_okay=False, help="Preview output directory")
STATE_OPTION = typer.Option(None, "--state", dir_okay=False, help="Throttle state JSON file")
DST_ARGUMENT = typer.Argument(..., help="Output config YAML")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load_settings(config: Path | None) -> NotificationSettings:
    if config is None:
        return NotificationSettings()
    try:
        return NotificationSettings.load(config)
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def preview(
    config: Path = CONFIG_OPTION,
    out: Path | None = OUT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Render one notification to an HTML page, ignoring the throttle."""
    _configure_logging(debug)
    settings = _load_settings(config)
    app_settings = ApplicationSettings(settings)

    page = HtmlPage()
    renderer = create_renderer(settings, page)
    payload = ContentResolver().resolve(settings)
    renderer.materialize(payload, settings)

    output = page.write((out or app_settings.paths.preview_dir) / app_settings.paths.preview_html)
    typer.echo(f"Preview written to {output}")


@app.command()
def run(
    config: Path = CONFIG_OPTION,
    state: Path | None = STATE_OPTION,
    out: Path | None = OUT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run one notification cycle in real time.

    The page is rewritten whenever the notification appears or disappears.
    Returns once no timers remain.
    """
    _configure_logging(debug)
    settings = _load_settings(config)
    app_settings = ApplicationSettings(settings)
    output = (out or app_settings.paths.preview_dir) / app_settings.paths.preview_html

    page = HtmlPage(on_change=lambda p: p.write(output))
    controller = NotificationController(
        settings,
        renderer=create_renderer(settings, page),
        store=JsonFileStore(state or app_settings.paths.state_file),
    )

    if not controller.init():
        typer.echo(
            f"Notification throttled: shown less than {settings.min_time_between} h ago"
        )
        return

    try:
        controller.scheduler.run()
    except KeyboardInterrupt:
        controller.destroy()
        raise

    typer.echo(f"Shown {controller.shown_count} notification(s); page at {output}")


# ───────────────────────── state sub-commands ────────────────────────────────
@state_app.command("show")
def show_state(
    state: Path | None = STATE_OPTION,
    config: Path | None = OPTIONAL_CONFIG_OPTION,
) -> None:
    """Print the last time a notification was shown."""
    settings = _load_settings(config)
    path = state or ApplicationSettings(settings).paths.state_file
    gate = ThrottleGate(settings, JsonFileStore(path))

    try:
        last_shown = gate.last_shown()
    except (PersistenceUnavailable, MalformedPersistedRecord) as exc:
        typer.secho(f"Cannot read state: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Last shown: {TimeUtils.to_iso(last_shown) if last_shown else 'never'}")
    typer.echo(f"May show now: {'yes' if gate.may_show() else 'no'}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        NotificationSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "position": typer.prompt("Position", default="bottom-right"),
            "theme": typer.prompt("Theme [default|bootstrap|tailwind]", default="default"),
            "dataSource": typer.prompt("Data source [local|api]", default="local"),
            "minTimeBetween": typer.prompt("Hours between notifications", default="9"),
            "messageFormat": typer.prompt(
                "Message format", default="{count} people {action} {timeframe}!"
            ),
        }
        if data["dataSource"] == "api":
            data["apiUrl"] = typer.prompt("API URL")
        try:
            cfg = NotificationSettings.model_validate(data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                loc = e["loc"][0] if e["loc"] else "config"
                typer.secho(f"  • {loc} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.to_options(), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
