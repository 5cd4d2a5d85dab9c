"""Typed interfaces for job-layer orchestration responsibilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RestageConfig:
    """Immutable per-run restage configuration.

    Attributes:
        state_filter: Application state qualifying for restage (compared case-insensitively).
        min_age_days: Applications whose current droplet is younger than this are skipped.
        stage_timeout_seconds: Deadline for a build to reach STAGED.
        restart_timeout_seconds: Deadline for a restarted application to reach STARTED.
        poll_interval_seconds: Delay between consecutive state probes.
    """

    state_filter: str = "started"
    min_age_days: int = 0
    stage_timeout_seconds: float = 120
    restart_timeout_seconds: float = 120
    poll_interval_seconds: float = 1.0

    def config_validate(self) -> None:
        """Validate configuration values.

        Returns:
            None: Validation has no return value.

        Raises:
            ValueError: Raised when any value is out of range.
        """

        if not self.state_filter.strip():
            raise ValueError("state_filter must not be blank")
        if self.min_age_days < 0:
            raise ValueError("min_age_days must be >= 0")
        if self.stage_timeout_seconds <= 0:
            raise ValueError("stage_timeout_seconds must be > 0")
        if self.restart_timeout_seconds <= 0:
            raise ValueError("restart_timeout_seconds must be > 0")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")


class ApplicationOutcomeStatus(str, Enum):
    """Final per-application sweep status."""

    SKIPPED_STATE = "skipped_state"
    SKIPPED_AGE = "skipped_age"
    METADATA_ERROR = "metadata_error"
    BUILD_ERROR = "build_error"
    BUILD_FAILED = "build_failed"
    RESTART_ERROR = "restart_error"
    RESTART_FAILED = "restart_failed"
    RESTAGED = "restaged"


@dataclass(frozen=True)
class ApplicationOutcome:
    """Outcome of processing one application during a sweep.

    Attributes:
        app_guid: Application identifier.
        app_name: Application name.
        status: Final status.
        error_message: Error text for error statuses.
        timeline: Structured stage events captured while processing.
        stage_durations: Seconds spent in each build or restart stage that finished.
    """

    app_guid: str
    app_name: str
    status: ApplicationOutcomeStatus
    error_message: str | None = None
    timeline: list[dict[str, object]] = field(default_factory=list)
    stage_durations: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class SweepResult:
    """Result contract for one sweep pass.

    Attributes:
        exit_code: Process exit code, 1 only when applications could not be enumerated or none exist.
        outcomes: Per-application outcomes in listing order.
        fatal_error: Fatal error text for exit code 1.
    """

    exit_code: int
    outcomes: list[ApplicationOutcome] = field(default_factory=list)
    fatal_error: str | None = None

    def sweep_count_by_status(self) -> dict[str, int]:
        """Return outcome counts keyed by status value.

        Returns:
            dict[str, int]: Counts for statuses that occurred.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        counts: dict[str, int] = {}
        for outcome in self.outcomes:
            counts[outcome.status.value] = counts.get(outcome.status.value, 0) + 1
        return counts
