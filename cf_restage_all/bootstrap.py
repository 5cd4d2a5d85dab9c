"""Application bootstrap wiring for startup validation and dependency assembly."""

from rich.console import Console

from cf_restage_all.adapters import CloudFoundryV3Adapter, PlatformAdapterPort
from cf_restage_all.config import PlatformSettings, config_resolve_platform_target
from cf_restage_all.console import RichConsoleReporter, RichSpinnerProgress
from cf_restage_all.jobs import (
    ApplicationSweepController,
    BuildOrchestrator,
    RestageConfig,
    RestartOrchestrator,
)


def bootstrap_create_platform_adapter(settings: PlatformSettings) -> CloudFoundryV3Adapter:
    """Build the platform adapter for the resolved connection target.

    Args:
        settings: Validated runtime settings.

    Returns:
        CloudFoundryV3Adapter: Adapter owning one reusable HTTP client.

    Raises:
        SettingsLoadError: Raised when API URL or access token cannot be resolved.
    """

    target = config_resolve_platform_target(settings)
    return CloudFoundryV3Adapter(
        api_url=target.api_url,
        access_token=target.access_token,
        space_guid=target.space_guid,
        request_timeout_seconds=settings.cf_request_timeout_seconds,
        verify_ssl=target.verify_ssl,
    )


def bootstrap_create_sweep_controller(
    platform_adapter: PlatformAdapterPort,
    config: RestageConfig,
    console: Console | None = None,
) -> ApplicationSweepController:
    """Build sweep controller with orchestrators sharing one adapter and console.

    Args:
        platform_adapter: Platform adapter reused across all calls.
        config: Per-run restage configuration.
        console: Optional rich console for outcome lines and progress.

    Returns:
        ApplicationSweepController: Fully wired sweep controller.

    Raises:
        ValueError: Raised when config values are invalid.
    """

    output_console = console or Console(highlight=False)
    progress = RichSpinnerProgress(console=output_console)
    return ApplicationSweepController(
        platform_adapter=platform_adapter,
        build_orchestrator=BuildOrchestrator(platform_adapter=platform_adapter, config=config, progress=progress),
        restart_orchestrator=RestartOrchestrator(platform_adapter=platform_adapter, config=config, progress=progress),
        reporter=RichConsoleReporter(console=output_console),
        config=config,
    )
