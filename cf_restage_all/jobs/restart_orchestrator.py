"""Job-layer restart orchestrator: restart and wait for STARTED."""

from __future__ import annotations

import structlog

from cf_restage_all.adapters import PlatformAdapterPort
from cf_restage_all.console import PollProgressPort
from cf_restage_all.domain import Application

from .interfaces import RestageConfig
from .poller import PollMessages, job_poll_wait_until

log = structlog.get_logger(__name__)

RESTART_POLL_MESSAGES = PollMessages(
    label="Restarting Application",
    success="Application Restarted",
    failure="Failed to restart application",
    timeout="Timed out waiting for application restart",
)


class RestartOrchestrator:
    """Drive one application through restart and started-state confirmation."""

    def __init__(
        self,
        platform_adapter: PlatformAdapterPort,
        config: RestageConfig,
        progress: PollProgressPort | None = None,
    ):
        """Initialize restart orchestrator dependencies.

        Args:
            platform_adapter: Adapter for platform API calls.
            config: Per-run restage configuration.
            progress: Optional progress sink used while waiting for startup.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if platform_adapter is None:
            raise ValueError("platform_adapter must not be None")
        config.config_validate()

        self._platform_adapter = platform_adapter
        self._config = config
        self._progress = progress

    def job_restart_and_confirm(self, application: Application) -> bool:
        """Trigger restart and wait until the application reports STARTED.

        Args:
            application: Application to restart.

        Returns:
            bool: True when STARTED was observed before the restart timeout, else False.

        Raises:
            PlatformAdapterError: Raised for transport or decode failures.
        """

        self._platform_adapter.adapter_restart_application(application.guid)
        log.info("restage_restart_triggered", app_guid=application.guid)

        poll_outcome = job_poll_wait_until(
            probe=lambda: self._platform_adapter.adapter_get_application(application.guid).domain_is_started(),
            interval_seconds=self._config.poll_interval_seconds,
            timeout_seconds=self._config.restart_timeout_seconds,
            progress=self._progress,
            messages=RESTART_POLL_MESSAGES,
        )
        if poll_outcome.error is not None:
            raise poll_outcome.error
        if poll_outcome.timed_out:
            log.warning(
                "restage_restart_timed_out",
                app_guid=application.guid,
                restart_timeout_seconds=self._config.restart_timeout_seconds,
            )
        return poll_outcome.succeeded
