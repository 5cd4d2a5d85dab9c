"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from cf_restage_all.domain import Application, Build, CurrentDroplet


class PlatformAdapterPort(Protocol):
    """Port definition for the platform control-plane operations used by a sweep."""

    def adapter_list_applications(self) -> list[Application]:
        """List applications in the configured scope in listing order.

        Returns:
            list[Application]: Applications visible to the operator.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_get_current_droplet(self, app_guid: str) -> CurrentDroplet:
        """Fetch current droplet metadata of one application.

        Args:
            app_guid: Application identifier.

        Returns:
            CurrentDroplet: Current droplet with creation time and package guid.

        Raises:
            PlatformNotFoundError: Raised when the application has no current droplet.
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_submit_build(self, package_guid: str) -> Build:
        """Submit a new build for a package.

        Args:
            package_guid: Source package identifier.

        Returns:
            Build: Created build in its initial state.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_get_build(self, build_guid: str) -> Build:
        """Fetch current build state.

        Args:
            build_guid: Build identifier.

        Returns:
            Build: Latest observed build record.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_assign_droplet(self, app_guid: str, droplet_guid: str) -> bool:
        """Set application current droplet.

        Args:
            app_guid: Application identifier.
            droplet_guid: Droplet identifier to assign.

        Returns:
            bool: True when the echoed droplet guid matches `droplet_guid`.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_restart_application(self, app_guid: str) -> None:
        """Trigger application restart without waiting for the new state.

        Args:
            app_guid: Application identifier.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

    def adapter_get_application(self, app_guid: str) -> Application:
        """Fetch one application record.

        Args:
            app_guid: Application identifier.

        Returns:
            Application: Latest observed application record.

        Raises:
            PlatformTransportError: Raised when upstream communication fails.
            PlatformDecodeError: Raised when response shape is unexpected.
        """
