"""User-facing console output for sweep outcome lines and polling progress."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn


class SweepReporterPort(Protocol):
    """Port for per-application outcome lines, colored by severity."""

    def report_info(self, message: str) -> None:
        """Report informational line."""

    def report_warning(self, message: str) -> None:
        """Report warning line (skips, soft failures)."""

    def report_error(self, message: str) -> None:
        """Report error line."""


class PollProgressPort(Protocol):
    """Port for cosmetic progress indication while a poll is waiting."""

    def progress_start(self, label: str) -> None:
        """Signal that waiting started."""

    def progress_succeed(self, message: str) -> None:
        """Signal that waiting finished successfully."""

    def progress_fail(self, message: str) -> None:
        """Signal that waiting finished without success."""


class RichConsoleReporter(SweepReporterPort):
    """Console reporter printing one colored line per event."""

    def __init__(self, console: Console | None = None):
        """Initialize reporter.

        Args:
            console: Optional rich console, defaults to stdout console.

        Returns:
            None: Initializer does not return a value.

        Raises:
            RuntimeError: This initializer does not raise runtime errors.
        """

        self._console = console or Console(highlight=False)

    def report_info(self, message: str) -> None:
        self._console.print(message, markup=False, highlight=False)

    def report_warning(self, message: str) -> None:
        self._console.print(message, style="yellow", markup=False, highlight=False)

    def report_error(self, message: str) -> None:
        self._console.print(message, style="red", markup=False, highlight=False)


class RichSpinnerProgress(PollProgressPort):
    """Transient `rich` spinner row, replaced by a colored result line when waiting ends."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console(highlight=False)
        self._progress: Progress | None = None

    def progress_start(self, label: str) -> None:
        self._progress_stop()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}", markup=False),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._progress.add_task(label, total=None)

    def progress_succeed(self, message: str) -> None:
        self._progress_stop()
        self._console.print(f"OK {message}", style="green", markup=False, highlight=False)

    def progress_fail(self, message: str) -> None:
        self._progress_stop()
        self._console.print(f"FAILED {message}", style="red", markup=False, highlight=False)

    def _progress_stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None


class NullProgress(PollProgressPort):
    """Progress sink that discards all signals."""

    def progress_start(self, label: str) -> None:
        _ = label

    def progress_succeed(self, message: str) -> None:
        _ = message

    def progress_fail(self, message: str) -> None:
        _ = message
