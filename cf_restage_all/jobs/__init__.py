"""Job layer package for restage workflow orchestration boundaries."""

from .build_orchestrator import BUILD_POLL_MESSAGES, BuildOrchestrator
from .interfaces import (
	ApplicationOutcome,
	ApplicationOutcomeStatus,
	RestageConfig,
	SweepResult,
)
from .poller import PollMessages, PollOutcome, job_poll_wait_until
from .restart_orchestrator import RESTART_POLL_MESSAGES, RestartOrchestrator
from .sweep_controller import ApplicationSweepController

__all__ = [
	"ApplicationOutcome",
	"ApplicationOutcomeStatus",
	"ApplicationSweepController",
	"BUILD_POLL_MESSAGES",
	"BuildOrchestrator",
	"PollMessages",
	"PollOutcome",
	"RESTART_POLL_MESSAGES",
	"RestageConfig",
	"RestartOrchestrator",
	"SweepResult",
	"job_poll_wait_until",
]
