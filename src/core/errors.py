"""Exception taxonomy for yield evaluation.

Every failure the core raises derives from ``YieldTrackerError`` so callers
can separate evaluation failures from programming errors.
"""

from typing import Optional


class YieldTrackerError(Exception):
    """Base exception for Lending Yield Tracker."""


class DivisionByZero(YieldTrackerError, ZeroDivisionError):
    """Fixed-point division by zero (math kernel misuse)."""


class UpstreamUnavailable(YieldTrackerError):
    """An on-chain read failed at the transport or contract level."""

    def __init__(self, source: str, detail: Optional[str] = None):
        self.source = source
        self.detail = detail
        message = f"{source} unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ClockSkew(YieldTrackerError):
    """Recorded market timestamp is ahead of the reference clock."""

    def __init__(self, last_update: int, now: int):
        self.last_update = last_update
        self.now = now
        super().__init__(
            f"Market last updated at {last_update}, after reference time {now}"
        )


class InvalidUpstreamShape(YieldTrackerError):
    """An off-chain payload failed structural validation."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid {source} payload: {reason}")


class FetchExhausted(YieldTrackerError):
    """All HTTP attempts against an off-chain endpoint failed."""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(f"Fetch failed after {attempts} attempts: {url}")
