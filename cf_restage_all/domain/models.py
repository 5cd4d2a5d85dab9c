"""Typed domain models shared across runtime layers.

This module provides simple data contracts for the platform entities a
restage sweep observes: applications, builds and current droplets.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ApplicationState(str, Enum):
    """Application lifecycle states reported by the platform."""

    STARTED = "STARTED"
    STOPPED = "STOPPED"
    STARTING = "STARTING"


class BuildState(str, Enum):
    """Build lifecycle states reported by the platform."""

    PENDING = "PENDING"
    STAGING = "STAGING"
    STAGED = "STAGED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Application:
    """Application record as listed or fetched from the platform.

    Attributes:
        guid: Opaque application identifier.
        name: Human-readable application name.
        state: Lifecycle state text (for example `STARTED`).
    """

    guid: str
    name: str
    state: str

    def domain_is_started(self) -> bool:
        """Return whether application reports the started lifecycle state.

        Returns:
            bool: True when state equals `STARTED`.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.state.upper() == ApplicationState.STARTED.value


@dataclass(frozen=True)
class Build:
    """Build tracking record observed through polling.

    Attributes:
        guid: Build identifier.
        state: Build lifecycle state text.
        droplet_guid: Resulting droplet identifier once staged, else None.
    """

    guid: str
    state: str
    droplet_guid: str | None = None

    def domain_is_staged(self) -> bool:
        """Return whether build reached the staged state.

        Returns:
            bool: True when state equals `STAGED`.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.state.upper() == BuildState.STAGED.value


@dataclass(frozen=True)
class CurrentDroplet:
    """Current droplet of an application.

    Attributes:
        guid: Droplet identifier.
        created_at: Timezone-aware droplet creation timestamp.
        package_guid: Source package identifier the droplet was built from.
    """

    guid: str
    created_at: datetime
    package_guid: str


@dataclass(frozen=True)
class PluginMetadata:
    """Static command metadata for CLI help surfaces.

    Attributes:
        name: Plugin name.
        version: Plugin version text.
        command_name: Command name.
        help_text: One-line command help text.
        usage: Usage synopsis.
        options: Option help texts keyed by flag.
    """

    name: str
    version: str
    command_name: str
    help_text: str
    usage: str
    options: dict[str, str]


PLUGIN_METADATA = PluginMetadata(
    name="cf-restage-all",
    version="1.0.0",
    command_name="restage-all",
    help_text="Restage applications within a particular space.",
    usage="cf restage-all [--a #] [--s started|stopped] [--rt #] [--st #]",
    options={
        "-a": "Restage all applications that contain a droplet older than X days. Default is 0.",
        "-s": "Restage all applications in this state. [started|stopped]. Default is started.",
        "-st": "Sets the build restage timeout (seconds) Default is 120.",
        "-rt": "Sets the app restart timeout (seconds) Default is 120.",
    },
)
