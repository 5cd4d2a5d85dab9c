"""Domain models used across application layer boundaries."""

from .age import domain_droplet_age_days
from .models import (
	PLUGIN_METADATA,
	Application,
	ApplicationState,
	Build,
	BuildState,
	CurrentDroplet,
	PluginMetadata,
)
from .timeline import STAGE_STATUS_STARTED, domain_stage_durations, domain_stage_event

__all__ = [
	"PLUGIN_METADATA",
	"STAGE_STATUS_STARTED",
	"Application",
	"ApplicationState",
	"Build",
	"BuildState",
	"CurrentDroplet",
	"PluginMetadata",
	"domain_droplet_age_days",
	"domain_stage_durations",
	"domain_stage_event",
]
