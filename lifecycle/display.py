"""Anzeige-Hilfen für die Aufgabenliste: Restzeit, Archiv-Alter, Status-Tag."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from lifecycle.classifier import DEFAULT_GRACE_PERIOD
from lifecycle.clock import as_aware
from models.assignment import AdministrativeStatus, Assignment

# Abgabe ist bis zu einem Tag nach der Deadline noch möglich
DEFAULT_LATE_WINDOW = timedelta(days=1)


@dataclass(frozen=True)
class RemainingTime:
    """Restzeit bis zur Deadline, in Komponenten zerlegt."""

    days: int
    hours: int
    minutes: int
    seconds: int

    @property
    def text(self) -> str:
        # Unter 24 Stunden sekundengenau
        if self.days == 0:
            return f"{self.hours} Std. {self.minutes} Min. {self.seconds} Sek."
        return f"{self.days} T. {self.hours} Std."


@dataclass(frozen=True)
class ArchivedAge:
    """Zeit seit Archivierung (Monat = 30 Tage, Jahr = 365 Tage)."""

    years: int
    months: int
    days: int

    @property
    def text(self) -> str:
        if self.years > 0:
            return f"archiviert seit {self.years} J. {self.months} Mon. {self.days} T."
        if self.months > 0:
            return f"archiviert seit {self.months} Mon. {self.days} T."
        return f"archiviert seit {self.days} T."


def remaining_time(deadline: datetime, now: datetime) -> Optional[RemainingTime]:
    """Restzeit bis ``deadline``; None wenn bereits fällig."""
    diff = as_aware(deadline) - as_aware(now)
    if diff <= timedelta(0):
        return None
    total = int(diff.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return RemainingTime(days, hours, minutes, seconds)


def archived_age(
    deadline: datetime,
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> Optional[ArchivedAge]:
    """Alter seit Archivierung (deadline + Kulanz); None wenn noch nicht archiviert."""
    diff = as_aware(now) - (as_aware(deadline) + grace_period)
    if diff <= timedelta(0):
        return None
    years, rest = divmod(diff.days, 365)
    months, days = divmod(rest, 30)
    return ArchivedAge(years, months, days)


class StatusTag(str, Enum):
    ARCHIVED = "archived"
    OVERDUE = "overdue"
    ONGOING = "ongoing"
    CLOSED = "closed"
    GRADED = "graded"

    @property
    def label(self) -> str:
        return _TAG_STYLE[self][0]

    @property
    def color(self) -> str:
        return _TAG_STYLE[self][1]


_TAG_STYLE: dict[StatusTag, tuple[str, str]] = {
    StatusTag.ARCHIVED: ("Archiviert", "grey50"),
    StatusTag.OVERDUE:  ("Überfällig", "red"),
    StatusTag.ONGOING:  ("Laufend", "dark_orange"),
    StatusTag.CLOSED:   ("Geschlossen", "blue"),
    StatusTag.GRADED:   ("Bewertet", "green"),
}


def status_tag(
    status: AdministrativeStatus,
    deadline: datetime,
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> StatusTag:
    """Status-Tag für die Tabelle: Archiv vor Überfällig vor Server-Status."""
    now = as_aware(now)
    deadline = as_aware(deadline)
    if now > deadline + grace_period:
        return StatusTag.ARCHIVED
    if status == AdministrativeStatus.ONGOING and now > deadline:
        return StatusTag.OVERDUE
    return {
        AdministrativeStatus.ONGOING: StatusTag.ONGOING,
        AdministrativeStatus.CLOSED: StatusTag.CLOSED,
        AdministrativeStatus.GRADED: StatusTag.GRADED,
    }[AdministrativeStatus(status)]


def can_submit(
    assignment: Assignment,
    now: datetime,
    late_window: timedelta = DEFAULT_LATE_WINDOW,
) -> bool:
    """Abgabe-Button aktiv? Laufend, noch nicht abgegeben, Nachfrist nicht überschritten."""
    if assignment.administrative_status != AdministrativeStatus.ONGOING:
        return False
    if assignment.user_submitted:
        return False
    return as_aware(now) <= assignment.deadline + late_window
