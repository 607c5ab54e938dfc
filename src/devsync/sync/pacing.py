"""Pause strategies applied between successful publishes.

dev.to throttles article creation; devsync waits a fixed interval after
every post rather than reacting to rate-limit responses.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol, runtime_checkable

log = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 5.0


@runtime_checkable
class Pacing(Protocol):
    """Called once after each successfully published file."""

    def wait(self) -> None:
        ...


class FixedDelay:
    """Sleep a constant number of seconds."""

    def __init__(self, seconds: float = DEFAULT_DELAY_SECONDS) -> None:
        if seconds < 0:
            raise ValueError(f"Delay must be >= 0, got {seconds}")
        self.seconds = seconds

    def wait(self) -> None:
        if self.seconds:
            log.debug("Waiting %.1fs before next post", self.seconds)
            time.sleep(self.seconds)


class NoDelay:
    """Do not wait at all."""

    def wait(self) -> None:
        return None


def pacing_from_config(config: dict, delay: float | None = None) -> Pacing:
    """Build the pacing strategy from ``push.delay_seconds`` (or an override)."""
    if delay is None:
        delay = config.get("push", {}).get("delay_seconds", DEFAULT_DELAY_SECONDS)
    seconds = float(delay)
    if seconds == 0:
        return NoDelay()
    return FixedDelay(seconds)
