"""
Root Typer application for the podplan CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="podplan",
    help="podplan — deployment plan inspection for pod schedulers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from podplan import __version__

        typer.echo(f"podplan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """podplan CLI — inspect deployment plans and configuration."""
    from podplan.core.config import get_settings
    from podplan.core.logging import configure_logging

    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        service=settings.service_name,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from podplan.cli.config import app as config_app  # noqa: E402
from podplan.cli.plan import app as plan_app  # noqa: E402

app.add_typer(plan_app, name="plan", help="Plan inspection.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
