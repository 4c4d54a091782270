"""Helpers for progress-step pickers on question and approval forms."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

ALL_STEPS_VALUE = "ALL"


def selectable_progress_steps(steps: Iterable[Mapping[str, Any]] | None) -> list[Mapping[str, Any]]:
    """Drop the synthetic "all steps" entry used only as a list filter."""

    return [step for step in steps or [] if step.get("value") != ALL_STEPS_VALUE]


def default_progress_step_id(steps: Iterable[Mapping[str, Any]] | None) -> int:
    selectable = selectable_progress_steps(steps)
    if not selectable:
        return 0
    try:
        return int(selectable[0]["id"])
    except (KeyError, TypeError, ValueError):
        return 0
