"""Plan Visualizer — render a plan tree with live statuses.

    render_tree(plan)  → str   ASCII tree, one line per element
    summarize(plan)    → dict  counts per status, candidates, errors

Example::

    print(render_tree(plan))
    # deploy (serial) [STARTING]
    # ├── hello-deploy (parallel) [STARTING]
    # │   ├── hello-0 [COMPLETE]
    # │   └── hello-1 [STARTING]
    # └── world-deploy (serial) [PENDING]
    #     └── world-0 [PENDING]
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Collection
from typing import Any

from podplan.plan.element import Element
from podplan.plan.manager import PlanManager
from podplan.plan.phase import Plan
from podplan.plan.status import Status


def _label(element: Element) -> str:
    label = element.name
    if element.children:
        label += f" ({element.strategy.name})"
    label += f" [{element.status}]"
    if element.children and element.is_interrupted():
        label += " (interrupted)"
    return label


def render_tree(plan: Plan) -> str:
    """Render the plan as an ASCII tree."""
    lines = [_label(plan)]

    def walk(element: Element, prefix: str) -> None:
        children = list(element.children)
        for i, child in enumerate(children):
            last = i == len(children) - 1
            lines.append(f"{prefix}{'└── ' if last else '├── '}{_label(child)}")
            walk(child, prefix + ("    " if last else "│   "))

    walk(plan, "")
    return "\n".join(lines)


def summarize(plan: Plan, dirty_assets: Collection[str] = ()) -> dict[str, Any]:
    """Summary of a plan for reporting."""
    steps = plan.steps
    counts = Counter(str(step.status) for step in steps)
    return {
        "name": plan.name,
        "status": str(plan.status),
        "strategy": plan.strategy.name,
        "phases": [
            {
                "name": phase.name,
                "status": str(phase.status),
                "strategy": phase.strategy.name,
                "steps": [{"name": s.name, "status": str(s.status)} for s in phase.steps],
            }
            for phase in plan.phases
        ],
        "step_counts": {str(status): counts.get(str(status), 0) for status in Status},
        "candidates": [step.name for step in PlanManager(plan).get_candidates(dirty_assets)],
        "errors": plan.get_errors(),
    }
