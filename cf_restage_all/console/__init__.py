"""Console output package for user-facing sweep reporting."""

from .reporter import (
	NullProgress,
	PollProgressPort,
	RichConsoleReporter,
	RichSpinnerProgress,
	SweepReporterPort,
)

__all__ = [
	"NullProgress",
	"PollProgressPort",
	"RichConsoleReporter",
	"RichSpinnerProgress",
	"SweepReporterPort",
]
