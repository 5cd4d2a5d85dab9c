"""Droplet age helpers used by sweep filtering."""

from __future__ import annotations

from datetime import datetime, timezone
import math


def domain_droplet_age_days(created_at: datetime, now: datetime | None = None) -> int:
    """Return whole days elapsed since droplet creation.

    Age is computed as `floor(hours_elapsed / 24)`.

    Args:
        created_at: Timezone-aware droplet creation timestamp.
        now: Optional reference time, defaults to current UTC time.

    Returns:
        int: Elapsed whole days, negative when creation lies in the future.

    Raises:
        ValueError: Raised when `created_at` is timezone-naive.
    """

    if created_at.tzinfo is None:
        raise ValueError("created_at must be timezone-aware")

    reference_time = now or datetime.now(timezone.utc)
    elapsed_hours = (reference_time - created_at).total_seconds() / 3600
    return int(math.floor(elapsed_hours / 24))
