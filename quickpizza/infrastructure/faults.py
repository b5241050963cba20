"""Fault Injection: named check points a test harness can force to fail.

Invariants:
    - State is per FaultInjector instance (no module-level registry), so tests
      can run in isolation and in parallel
    - inject() on a disarmed check point is a no-op
    - An armed Exception instance is raised as-is; a string message is wrapped
      in InjectedFaultError
    - A configured delay is awaited before the error (or before returning);
      cancellation during the delay propagates

Design Decisions:
    - from_headers mirrors the service's request-scoped arming:
      x-error-<point>: <message>, x-delay-<point>: <duration>
"""

import asyncio
import logging
import math
import re
from collections.abc import Mapping

from quickpizza.core.errors import InjectedFaultError

logger = logging.getLogger(__name__)

GET_INGREDIENTS = "get-ingredients"
RECORD_RECOMMENDATION = "record-recommendation"

_ERROR_PREFIX = "x-error-"
_DELAY_PREFIX = "x-delay-"

_DURATION_UNITS = {
    "ns": 1e-9, "us": 1e-6, "µs": 1e-6, "ms": 1e-3, "s": 1.0, "m": 60.0, "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION = re.compile(rf"(?:{_DURATION_PART.pattern})+")


def parse_duration(value: str) -> float:
    """Parse a duration into seconds.

    Accepts Go-style durations ('250ms', '1.5s', '1m30s', '100us', '2h')
    and bare seconds ('2'). Raises ValueError for anything else, including
    negative and non-finite values.
    """
    value = value.strip().lower()
    if _DURATION.fullmatch(value):
        return sum(
            float(number) * _DURATION_UNITS[unit]
            for number, unit in _DURATION_PART.findall(value)
        )
    seconds = float(value)
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"invalid duration: {value!r}")
    return seconds


class FaultInjector:
    """FaultHook with an armed set of check points."""

    def __init__(self) -> None:
        self._errors: dict[str, Exception] = {}
        self._delays: dict[str, float] = {}

    @property
    def armed(self) -> frozenset[str]:
        return frozenset(self._errors)

    def arm(self, check_point: str, error: Exception | str = "injected error") -> Exception:
        """Arm a check point; returns the exception that inject() will raise."""
        if isinstance(error, str):
            error = InjectedFaultError(check_point, error)
        self._errors[check_point] = error
        return error

    def disarm(self, check_point: str | None = None) -> None:
        if check_point is None:
            self._errors.clear()
            self._delays.clear()
            return
        self._errors.pop(check_point, None)
        self._delays.pop(check_point, None)

    def delay(self, check_point: str, seconds: float) -> None:
        if seconds <= 0:
            self._delays.pop(check_point, None)
            return
        self._delays[check_point] = seconds

    async def inject(self, check_point: str) -> None:
        seconds = self._delays.get(check_point)
        if seconds:
            await asyncio.sleep(seconds)
        error = self._errors.get(check_point)
        if error is not None:
            logger.warning(
                f"Injected fault at {check_point}: {error}",
                extra={"check_point": check_point},
            )
            raise error

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "FaultInjector":
        """Build an injector from request-style headers. Bad durations are ignored."""
        injector = cls()
        for name, value in headers.items():
            key = name.lower()
            if key.startswith(_ERROR_PREFIX) and key != _ERROR_PREFIX:
                injector.arm(key[len(_ERROR_PREFIX):], value)
            elif key.startswith(_DELAY_PREFIX) and key != _DELAY_PREFIX:
                try:
                    injector.delay(key[len(_DELAY_PREFIX):], parse_duration(value))
                except ValueError:
                    logger.warning(f"Ignoring invalid delay header {name}: {value!r}")
        return injector
