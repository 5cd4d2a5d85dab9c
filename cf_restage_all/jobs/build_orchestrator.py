"""Job-layer build orchestrator: build, wait for STAGED, assign droplet."""

from __future__ import annotations

import structlog

from cf_restage_all.adapters import PlatformAdapterPort, PlatformDecodeError
from cf_restage_all.console import PollProgressPort
from cf_restage_all.domain import Application

from .interfaces import RestageConfig
from .poller import PollMessages, job_poll_wait_until

log = structlog.get_logger(__name__)

BUILD_POLL_MESSAGES = PollMessages(
    label="Processing Build",
    success="Build created",
    failure="Build failed",
    timeout="Timed out waiting for build",
)


class BuildOrchestrator:
    """Drive one application through build submission, staging wait and droplet assignment."""

    def __init__(
        self,
        platform_adapter: PlatformAdapterPort,
        config: RestageConfig,
        progress: PollProgressPort | None = None,
    ):
        """Initialize build orchestrator dependencies.

        Args:
            platform_adapter: Adapter for platform API calls.
            config: Per-run restage configuration.
            progress: Optional progress sink used while waiting for staging.

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

    def job_restage(self, application: Application) -> bool:
        """Rebuild application from its current package and assign the resulting droplet.

        A build that settles in a non-STAGED terminal state (for example FAILED)
        is treated like a pending build until the stage timeout elapses.

        Args:
            application: Application to rebuild.

        Returns:
            bool: True when the build staged and the droplet assignment was echoed back;
                False when staging timed out or the echoed droplet guid did not match.

        Raises:
            PlatformAdapterError: Raised for transport, decode or not-found failures.
        """

        current_droplet = self._platform_adapter.adapter_get_current_droplet(application.guid)
        build = self._platform_adapter.adapter_submit_build(current_droplet.package_guid)
        log.info(
            "restage_build_submitted",
            app_guid=application.guid,
            package_guid=current_droplet.package_guid,
            build_guid=build.guid,
        )

        poll_outcome = job_poll_wait_until(
            probe=lambda: self._platform_adapter.adapter_get_build(build.guid).domain_is_staged(),
            interval_seconds=self._config.poll_interval_seconds,
            timeout_seconds=self._config.stage_timeout_seconds,
            progress=self._progress,
            messages=BUILD_POLL_MESSAGES,
        )
        if poll_outcome.error is not None:
            raise poll_outcome.error
        if not poll_outcome.succeeded:
            log.warning(
                "restage_build_timed_out",
                app_guid=application.guid,
                build_guid=build.guid,
                stage_timeout_seconds=self._config.stage_timeout_seconds,
            )
            return False

        staged_build = self._platform_adapter.adapter_get_build(build.guid)
        if not staged_build.droplet_guid:
            raise PlatformDecodeError(f"staged build {build.guid} has no droplet")

        is_assigned = self._platform_adapter.adapter_assign_droplet(application.guid, staged_build.droplet_guid)
        log.info(
            "restage_droplet_assigned",
            app_guid=application.guid,
            droplet_guid=staged_build.droplet_guid,
            assigned=is_assigned,
        )
        return is_assigned
