"""
CLI utility helpers — consoles, plan loading, and error output.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from podplan.core.errors import PodPlanError
from podplan.plan.builder import PlanDefinition
from podplan.plan.phase import Plan

console = Console()
err_console = Console(stderr=True)


def load_plan(path: Path) -> Plan:
    """Build a plan from a definition file, exiting with code 1 on failure."""
    try:
        return PlanDefinition.from_yaml_file(path).to_plan()
    except OSError as e:
        err_console.print(f"[bold red]Error[/bold red]: cannot read {path}: {e}")
        raise typer.Exit(code=1) from e
    except PodPlanError as e:
        err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {e.message}")
        raise typer.Exit(code=1) from e


def parse_names(value: str | None) -> set[str]:
    """Split a comma-separated option into a set of names."""
    if not value:
        return set()
    return {part.strip() for part in value.split(",") if part.strip()}
