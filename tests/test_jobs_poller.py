"""Regression tests for the bounded-wait polling primitive."""

from __future__ import annotations

import threading
import time

import pytest

from cf_restage_all.jobs import PollMessages, job_poll_wait_until
from platform_stubs import ProgressStub

_MESSAGES = PollMessages(label="Waiting", success="Done", failure="Broken", timeout="Too slow")


def test_jobs_poller_returns_success_on_first_probe() -> None:
    """Probe immediately and stop after the first completed probe.

    Returns:
        None: Assertions validate immediate success.

    Raises:
        AssertionError: Raised when probe is not invoked immediately.
    """

    probe_calls: list[float] = []

    def _probe() -> bool:
        probe_calls.append(time.monotonic())
        return True

    started_at = time.monotonic()
    outcome = job_poll_wait_until(probe=_probe, interval_seconds=5.0, timeout_seconds=5.0)

    assert outcome.succeeded
    assert outcome.error is None
    assert not outcome.timed_out
    assert len(probe_calls) == 1
    assert probe_calls[0] - started_at < 1.0


def test_jobs_poller_retries_until_probe_completes() -> None:
    """Keep probing at the interval until the probe reports completion.

    Returns:
        None: Assertions validate repeated probing.

    Raises:
        AssertionError: Raised when probing stops early.
    """

    results = [False, False, True]
    probe_calls: list[int] = []

    def _probe() -> bool:
        probe_calls.append(1)
        return results.pop(0)

    outcome = job_poll_wait_until(probe=_probe, interval_seconds=0.01, timeout_seconds=5.0)

    assert outcome.succeeded
    assert len(probe_calls) == 3


def test_jobs_poller_returns_probe_error_without_further_probing() -> None:
    """Return hard errors immediately and never probe again.

    Returns:
        None: Assertions validate error short-circuit.

    Raises:
        AssertionError: Raised when error handling is incorrect.
    """

    probe_calls: list[int] = []
    probe_error = ConnectionError("boom")

    def _probe() -> bool:
        probe_calls.append(1)
        raise probe_error

    outcome = job_poll_wait_until(probe=_probe, interval_seconds=0.01, timeout_seconds=5.0)
    time.sleep(0.05)

    assert not outcome.succeeded
    assert outcome.error is probe_error
    assert not outcome.timed_out
    assert len(probe_calls) == 1


def test_jobs_poller_timeout_is_soft_failure_and_stops_probing() -> None:
    """Report timeout without error and cancel the background probe loop.

    Returns:
        None: Assertions validate soft timeout and cancellation.

    Raises:
        AssertionError: Raised when timeout semantics are incorrect.
    """

    probe_calls: list[int] = []

    def _probe() -> bool:
        probe_calls.append(1)
        return False

    outcome = job_poll_wait_until(probe=_probe, interval_seconds=0.02, timeout_seconds=0.15)
    calls_at_return = len(probe_calls)
    time.sleep(0.1)

    assert not outcome.succeeded
    assert outcome.error is None
    assert outcome.timed_out
    assert calls_at_return >= 2
    # at most one probe may already have been past the cancellation check
    assert len(probe_calls) <= calls_at_return + 1


def test_jobs_poller_slow_probe_does_not_delay_timeout() -> None:
    """Detect the deadline while a probe call is still in flight.

    Returns:
        None: Assertions validate first-result-wins race.

    Raises:
        AssertionError: Raised when a blocked probe delays the timeout.
    """

    release_probe = threading.Event()

    def _blocking_probe() -> bool:
        release_probe.wait(5.0)
        return True

    started_at = time.monotonic()
    outcome = job_poll_wait_until(probe=_blocking_probe, interval_seconds=0.01, timeout_seconds=0.1)
    elapsed_seconds = time.monotonic() - started_at
    release_probe.set()

    assert outcome.timed_out
    assert not outcome.succeeded
    assert elapsed_seconds < 2.0


def test_jobs_poller_emits_progress_signals() -> None:
    """Emit start and result progress signals with configured texts.

    Returns:
        None: Assertions validate progress side effects.

    Raises:
        AssertionError: Raised when progress signals are missing.
    """

    success_progress = ProgressStub()
    job_poll_wait_until(
        probe=lambda: True,
        interval_seconds=0.01,
        timeout_seconds=1.0,
        progress=success_progress,
        messages=_MESSAGES,
    )
    timeout_progress = ProgressStub()
    job_poll_wait_until(
        probe=lambda: False,
        interval_seconds=0.01,
        timeout_seconds=0.05,
        progress=timeout_progress,
        messages=_MESSAGES,
    )

    def _raise() -> bool:
        raise ValueError("bad payload")

    error_progress = ProgressStub()
    job_poll_wait_until(
        probe=_raise,
        interval_seconds=0.01,
        timeout_seconds=1.0,
        progress=error_progress,
        messages=_MESSAGES,
    )

    assert success_progress.signals == [("start", "Waiting"), ("succeed", "Done")]
    assert timeout_progress.signals == [("start", "Waiting"), ("fail", "Too slow")]
    assert error_progress.signals == [("start", "Waiting"), ("fail", "Broken")]


@pytest.mark.parametrize(
    ("interval_seconds", "timeout_seconds", "message"),
    [(0, 1.0, "interval_seconds"), (1.0, 0, "timeout_seconds")],
)
def test_jobs_poller_rejects_non_positive_durations(
    interval_seconds: float,
    timeout_seconds: float,
    message: str,
) -> None:
    """Reject non-positive interval and timeout values.

    Args:
        interval_seconds: Candidate interval.
        timeout_seconds: Candidate timeout.
        message: Expected error fragment.

    Returns:
        None: Assertions validate input checks.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    with pytest.raises(ValueError, match=message):
        job_poll_wait_until(probe=lambda: True, interval_seconds=interval_seconds, timeout_seconds=timeout_seconds)
