"""
CLI: ``podplan plan`` — inspect plan definitions.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from podplan.cli.utils import console, load_plan, parse_names
from podplan.plan.manager import PlanManager
from podplan.plan.visualizer import render_tree, summarize

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_plan(
    path: Path = typer.Argument(..., help="Plan definition (YAML)"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the plan tree with element statuses."""
    plan = load_plan(path)

    if json_out:
        console.print_json(json.dumps(summarize(plan)))
        return

    console.print(render_tree(plan), markup=False, highlight=False)


@app.command("candidates")
def show_candidates(
    path: Path = typer.Argument(..., help="Plan definition (YAML)"),
    dirty: str | None = typer.Option(None, "--dirty", "-d", help="Comma-separated dirty asset names"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the steps a scheduling pass would start next."""
    plan = load_plan(path)
    candidates = PlanManager(plan).get_candidates(parse_names(dirty))

    if json_out:
        payload = [
            {"name": step.name, "asset": step.asset_name, "status": str(step.status)}
            for step in candidates
        ]
        console.print_json(json.dumps(payload))
        return

    if not candidates:
        console.print("[dim]No candidates.[/dim]")
        return

    table = Table(title=f"Candidates: {plan.name}")
    table.add_column("Step")
    table.add_column("Pod")
    table.add_column("Status")
    for step in candidates:
        table.add_row(step.name, step.asset_name or "", str(step.status))
    console.print(table)
