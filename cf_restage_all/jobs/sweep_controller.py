"""Job-layer sweep controller iterating applications and restaging qualifying ones.

Each application is processed inside its own error boundary: platform adapter
errors and the builtin families they derive from (`ConnectionError`,
`TimeoutError`, `LookupError`, `ValueError`, `RuntimeError`) are reported for
that application and the sweep moves on. Any other exception type is a
programming error and propagates out of the sweep.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from cf_restage_all.adapters import PlatformAdapterError, PlatformAdapterPort
from cf_restage_all.console import SweepReporterPort
from cf_restage_all.domain import Application, domain_droplet_age_days, domain_stage_durations, domain_stage_event

from .build_orchestrator import BuildOrchestrator
from .interfaces import ApplicationOutcome, ApplicationOutcomeStatus, RestageConfig, SweepResult
from .restart_orchestrator import RestartOrchestrator

log = structlog.get_logger(__name__)

_APPLICATION_ERRORS = (PlatformAdapterError, ConnectionError, TimeoutError, LookupError, ValueError, RuntimeError)


class ApplicationSweepController:
    """Sequentially filter applications and restage each qualifying one."""

    def __init__(
        self,
        platform_adapter: PlatformAdapterPort,
        build_orchestrator: BuildOrchestrator,
        restart_orchestrator: RestartOrchestrator,
        reporter: SweepReporterPort,
        config: RestageConfig,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize sweep controller dependencies.

        Args:
            platform_adapter: Adapter used for listing and age lookups.
            build_orchestrator: Build phase orchestrator.
            restart_orchestrator: Restart phase orchestrator.
            reporter: User-facing outcome line sink.
            config: Per-run restage configuration.
            clock: Optional UTC clock used for droplet age computation.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if platform_adapter is None:
            raise ValueError("platform_adapter must not be None")
        if build_orchestrator is None:
            raise ValueError("build_orchestrator must not be None")
        if restart_orchestrator is None:
            raise ValueError("restart_orchestrator must not be None")
        if reporter is None:
            raise ValueError("reporter must not be None")
        config.config_validate()

        self._platform_adapter = platform_adapter
        self._build_orchestrator = build_orchestrator
        self._restart_orchestrator = restart_orchestrator
        self._reporter = reporter
        self._config = config
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def job_run_sweep(self) -> SweepResult:
        """Run one sweep pass over all applications in scope.

        Returns:
            SweepResult: Exit code and per-application outcomes. Exit code is 1 only when
                applications could not be listed or the list is empty.

        Raises:
            RuntimeError: This method reports failures instead of raising them.
        """

        try:
            applications = self._platform_adapter.adapter_list_applications()
        except _APPLICATION_ERRORS as error:
            return self._job_fatal(str(error))
        if not applications:
            return self._job_fatal("No apps to restage")

        log.info("restage_sweep_started", application_count=len(applications))
        outcomes = [self._job_process_application(application) for application in applications]
        sweep_result = SweepResult(exit_code=0, outcomes=outcomes)
        log.info("restage_sweep_completed", **sweep_result.sweep_count_by_status())
        return sweep_result

    def _job_fatal(self, message: str) -> SweepResult:
        self._reporter.report_error(f"Fatal Error: {message}")
        log.error("restage_sweep_aborted", error_message=message)
        return SweepResult(exit_code=1, fatal_error=message)

    def _job_process_application(self, application: Application) -> ApplicationOutcome:
        """Filter one application and run build and restart phases when it qualifies.

        Args:
            application: Listed application.

        Returns:
            ApplicationOutcome: Final status with stage timeline.

        Raises:
            RuntimeError: Per-application errors are reported, never raised.
        """

        timeline: list[dict[str, object]] = []

        if application.state.strip().lower() != self._config.state_filter.strip().lower():
            self._reporter.report_warning(
                f"Skipping restage on {application.name} in {application.state} state"
            )
            self._job_mark(timeline, "filter", "skipped", {"state": application.state})
            return self._job_outcome(application, ApplicationOutcomeStatus.SKIPPED_STATE, timeline)

        try:
            current_droplet = self._platform_adapter.adapter_get_current_droplet(application.guid)
            age_days = domain_droplet_age_days(current_droplet.created_at, now=self._clock())
        except _APPLICATION_ERRORS as error:
            self._reporter.report_error(f"Error: {error}")
            self._job_mark(timeline, "filter", "failed")
            return self._job_outcome(application, ApplicationOutcomeStatus.METADATA_ERROR, timeline, error)

        if age_days < self._config.min_age_days:
            self._reporter.report_warning(f"Skipping restage on {application.name} as app age is {age_days}")
            self._job_mark(timeline, "filter", "skipped", {"age_days": age_days})
            return self._job_outcome(application, ApplicationOutcomeStatus.SKIPPED_AGE, timeline)

        self._job_mark(timeline, "filter", "completed", {"age_days": age_days})
        self._reporter.report_info(f"Starting restage of {application.name}")

        self._job_mark(timeline, "build", "started")
        try:
            is_built = self._build_orchestrator.job_restage(application)
        except _APPLICATION_ERRORS as error:
            self._reporter.report_error(f"Error generating build: {error}")
            self._job_mark(timeline, "build", "failed")
            return self._job_outcome(application, ApplicationOutcomeStatus.BUILD_ERROR, timeline, error)
        if not is_built:
            self._reporter.report_error("Failed to restage application")
            self._job_mark(timeline, "build", "failed")
            return self._job_outcome(application, ApplicationOutcomeStatus.BUILD_FAILED, timeline)
        self._job_mark(timeline, "build", "completed")

        self._job_mark(timeline, "restart", "started")
        try:
            is_restarted = self._restart_orchestrator.job_restart_and_confirm(application)
        except _APPLICATION_ERRORS as error:
            self._reporter.report_error(f"Error restarting: {error}")
            self._job_mark(timeline, "restart", "failed")
            return self._job_outcome(application, ApplicationOutcomeStatus.RESTART_ERROR, timeline, error)
        if not is_restarted:
            self._reporter.report_error(f"{application.name} has NOT been restaged successfully")
            self._job_mark(timeline, "restart", "failed")
            return self._job_outcome(application, ApplicationOutcomeStatus.RESTART_FAILED, timeline)

        self._job_mark(timeline, "restart", "completed")
        self._reporter.report_info(f"{application.name} has been restaged successfully")
        return self._job_outcome(application, ApplicationOutcomeStatus.RESTAGED, timeline)

    def _job_mark(
        self,
        timeline: list[dict[str, object]],
        stage: str,
        status: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        timeline.append(domain_stage_event(stage=stage, status=status, occurred_at=self._clock(), details=details))

    def _job_outcome(
        self,
        application: Application,
        status: ApplicationOutcomeStatus,
        timeline: list[dict[str, object]],
        error: Exception | None = None,
    ) -> ApplicationOutcome:
        stage_durations = domain_stage_durations(timeline)
        log.info(
            "restage_application_finished",
            app_guid=application.guid,
            app_name=application.name,
            status=status.value,
            error_type=type(error).__name__ if error is not None else None,
            stage_durations=stage_durations,
        )
        return ApplicationOutcome(
            app_guid=application.guid,
            app_name=application.name,
            status=status,
            error_message=str(error) if error is not None else None,
            timeline=timeline,
            stage_durations=stage_durations,
        )
