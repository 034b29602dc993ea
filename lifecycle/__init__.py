"""Lebenszyklus-Modul: Zeitquelle, Klassifizierer und Anzeige-Hilfen."""

from .clock import Clock, FixedClock, OffsetClock, SystemClock, ticks
from .classifier import (
    DEFAULT_GRACE_PERIOD,
    LifecyclePartition,
    LifecycleState,
    Viewer,
    classify,
    classify_all,
)

__all__ = [
    "Clock",
    "FixedClock",
    "OffsetClock",
    "SystemClock",
    "ticks",
    "DEFAULT_GRACE_PERIOD",
    "LifecyclePartition",
    "LifecycleState",
    "Viewer",
    "classify",
    "classify_all",
]
