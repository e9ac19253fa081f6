"""Timing of a completed SQL operation, carried in a context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqllogger.context import Context


class _TimingKey:
    __slots__ = ()


_TIMING_KEY = _TimingKey()


@dataclass(frozen=True)
class Timing:
    """Start and end time of an operation."""

    start: datetime
    end: datetime

    def duration(self) -> timedelta:
        """Return the time between start and end."""
        return self.end - self.start


def with_timing(ctx: Context, timing: Timing) -> Context:
    """Return a context derived from ``ctx`` that carries ``timing``."""
    return ctx.with_value(_TIMING_KEY, timing)


def get_timing(ctx: Context) -> Timing | None:
    """Return the timing carried by ``ctx``, or None if there is none."""
    return ctx.value(_TIMING_KEY)