"""Zeitquelle für den Klassifizierer.

Der Klassifizierer selbst liest nie die Uhr; Aufrufer holen ``now`` hier ab
und rufen ``classify_all`` in festem Takt erneut auf.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...

    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Echte Uhr (zeitzonenbewusst, Standard UTC)."""

    def __init__(self, tz: timezone = timezone.utc) -> None:
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class OffsetClock(SystemClock):
    """Echte Uhr, die ab einem gewählten Startzeitpunkt läuft."""

    def __init__(self, start: datetime, tz: timezone = timezone.utc) -> None:
        super().__init__(tz)
        self.offset = as_aware(start) - datetime.now(tz)

    def now(self) -> datetime:
        return super().now() + self.offset


class FixedClock:
    """Feste Zeit für Tests. ``sleep`` rückt die Zeit nur vor."""

    def __init__(self, instant: datetime) -> None:
        self._instant = as_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant

    def sleep(self, seconds: float) -> None:
        self.advance(timedelta(seconds=seconds))


def ticks(clock: Clock, interval: float = 1.0, limit: Optional[int] = None) -> Iterator[datetime]:
    """Liefert ``clock.now()`` im Abstand von ``interval`` Sekunden.

    Das erste Instant kommt sofort. Ohne ``limit`` endlos; der Aufrufer
    beendet durch Abbruch der Iteration.
    """
    if interval <= 0:
        raise ValueError(f"interval muss > 0 sein (ist {interval})")
    count = 0
    while limit is None or count < limit:
        if count:
            clock.sleep(interval)
        yield clock.now()
        count += 1


def as_aware(instant: datetime) -> datetime:
    """Naive Zeitstempel gelten als UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant
