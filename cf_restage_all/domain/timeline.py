"""Per-application restage timeline entries and stage duration summaries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

STAGE_STATUS_STARTED = "started"


def domain_stage_event(
    stage: str,
    status: str,
    occurred_at: datetime,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one restage timeline entry.

    Args:
        stage: Restage stage (`filter`, `build`, `restart`).
        status: Stage status marker, `started` opens a timed stage.
        occurred_at: Timezone-aware instant of the event.
        details: Optional structured details object.

    Returns:
        dict[str, object]: Timeline entry with ISO-8601 `at_utc`.

    Raises:
        ValueError: Raised when `occurred_at` is naive.
    """

    if occurred_at.tzinfo is None:
        raise ValueError("occurred_at must be timezone-aware")

    stage_event: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": occurred_at.isoformat(),
    }
    if details:
        stage_event["details"] = details
    return stage_event


def domain_stage_durations(timeline: list[dict[str, object]]) -> dict[str, float]:
    """Summarize seconds spent in each timed stage.

    A stage is timed from its `started` entry to the next entry of the same
    stage. Stages that never started, or never finished, are left out.

    Args:
        timeline: Entries produced by `domain_stage_event` in occurrence order.

    Returns:
        dict[str, float]: Stage name to elapsed seconds, rounded to milliseconds.

    Raises:
        ValueError: Raised when an entry carries a malformed `at_utc`.
    """

    opened_at: dict[str, datetime] = {}
    durations: dict[str, float] = {}
    for stage_event in timeline:
        stage = str(stage_event["stage"])
        occurred_at = datetime.fromisoformat(str(stage_event["at_utc"]))
        if stage_event["status"] == STAGE_STATUS_STARTED:
            opened_at[stage] = occurred_at
        elif stage in opened_at:
            elapsed = occurred_at - opened_at.pop(stage)
            durations[stage] = round(elapsed.total_seconds(), 3)
    return durations
