"""Bounded-wait polling primitive racing a probe loop against a deadline."""

from __future__ import annotations

from dataclasses import dataclass
import queue
import threading
import time
from typing import Callable

import structlog

from cf_restage_all.console import NullProgress, PollProgressPort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PollOutcome:
    """Result contract for one bounded wait.

    Attributes:
        succeeded: True when the probe reported completion before the deadline.
        error: Exception raised by the probe, if any.
        timed_out: True when the deadline elapsed with no completion and no error.
    """

    succeeded: bool
    error: Exception | None = None
    timed_out: bool = False


@dataclass(frozen=True)
class PollMessages:
    """Progress texts emitted while waiting.

    Attributes:
        label: Text shown while waiting.
        success: Text shown when the probe completes.
        failure: Text shown when the probe raises.
        timeout: Text shown when the deadline elapses.
    """

    label: str
    success: str
    failure: str
    timeout: str


_DEFAULT_MESSAGES = PollMessages(
    label="Waiting",
    success="Done",
    failure="Failed",
    timeout="Timed out",
)


def job_poll_wait_until(
    probe: Callable[[], bool],
    interval_seconds: float,
    timeout_seconds: float,
    progress: PollProgressPort | None = None,
    messages: PollMessages | None = None,
) -> PollOutcome:
    """Invoke `probe` immediately and then every interval until done, error or deadline.

    The probe loop runs on a daemon thread while the caller waits on a result
    queue bounded by `timeout_seconds`; whichever happens first decides the
    outcome. A slow in-flight probe therefore never delays timeout detection.
    Once the caller stops waiting, the loop is cancelled through an event: it
    exits after the in-flight probe returns and never starts another one.

    Args:
        probe: Callable returning True when the awaited condition holds; raising marks a hard error.
        interval_seconds: Delay between consecutive probe invocations.
        timeout_seconds: Overall deadline measured from the call.
        progress: Optional progress sink for start/succeed/fail signals.
        messages: Optional progress texts.

    Returns:
        PollOutcome: Success, hard-error or soft-timeout outcome.

    Raises:
        ValueError: Raised when interval or timeout is not positive.
    """

    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be > 0")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be > 0")

    progress_sink = progress or NullProgress()
    poll_messages = messages or _DEFAULT_MESSAGES
    stop_event = threading.Event()
    results: queue.Queue[PollOutcome] = queue.Queue()

    def _job_poll_probe_loop() -> None:
        attempt = 0
        while not stop_event.is_set():
            attempt += 1
            try:
                is_done = probe()
            except Exception as error:  # pylint: disable=broad-exception-caught
                results.put(PollOutcome(succeeded=False, error=error))
                return
            if is_done:
                results.put(PollOutcome(succeeded=True))
                return
            log.debug("poll_probe_pending", label=poll_messages.label, attempt=attempt)
            if stop_event.wait(interval_seconds):
                return

    probe_thread = threading.Thread(target=_job_poll_probe_loop, name="restage-poll-probe", daemon=True)
    started_at = time.monotonic()
    progress_sink.progress_start(poll_messages.label)
    probe_thread.start()
    try:
        outcome = results.get(timeout=timeout_seconds)
    except queue.Empty:
        outcome = PollOutcome(succeeded=False, timed_out=True)
    finally:
        stop_event.set()

    if outcome.succeeded:
        progress_sink.progress_succeed(poll_messages.success)
    elif outcome.timed_out:
        progress_sink.progress_fail(poll_messages.timeout)
    else:
        progress_sink.progress_fail(poll_messages.failure)

    log.debug(
        "poll_finished",
        label=poll_messages.label,
        succeeded=outcome.succeeded,
        timed_out=outcome.timed_out,
        error=str(outcome.error) if outcome.error is not None else None,
        elapsed_seconds=round(time.monotonic() - started_at, 3),
    )
    return outcome
