"""Lebenszyklus-Klassifizierung von Hausaufgaben.

Jede Hausaufgabe fällt zu jedem Zeitpunkt in genau eine Kategorie. Die
Zuordnung ist eine reine Funktion von (Status, Deadline, abgegeben, now);
es gibt keinen Zustand zwischen zwei Aufrufen.

Prioritäten:
1. Abgegeben                           → SUBMITTED (immer)
2. now < deadline, Status ONGOING      → ONGOING
3. deadline ≤ now < deadline + Kulanz  → OVERDUE (ONGOING) / EXPIRED (CLOSED, GRADED)
4. now ≥ deadline + Kulanz             → ARCHIVED

Vom Server vorzeitig geschlossene Aufgaben (CLOSED/GRADED vor der Deadline)
gelten als EXPIRED.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from lifecycle.clock import as_aware
from models.assignment import AdministrativeStatus, Assignment

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = timedelta(days=3)


class LifecycleState(str, Enum):
    ONGOING = "ongoing"
    SUBMITTED = "submitted"
    OVERDUE = "overdue"
    EXPIRED = "expired"
    ARCHIVED = "archived"


class Viewer(str, Enum):
    """Blickwinkel: Studierende sehen OVERDUE, Kursverantwortliche EXPIRED."""

    STUDENT = "student"
    MANAGER = "manager"


_LABELS: dict[LifecycleState, tuple[str, str]] = {
    LifecycleState.ONGOING:   ("Laufend", "cyan"),
    LifecycleState.SUBMITTED: ("Abgegeben", "green"),
    LifecycleState.OVERDUE:   ("Verpasst", "red"),
    LifecycleState.EXPIRED:   ("Abgelaufen", "yellow"),
    LifecycleState.ARCHIVED:  ("Archiviert", "dim"),
}


def classify(
    assignment: Assignment,
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> LifecycleState:
    """Ordnet eine einzelne Hausaufgabe genau einer Kategorie zu."""
    if assignment.user_submitted:
        return LifecycleState.SUBMITTED

    now = as_aware(now)
    deadline = assignment.deadline
    is_ongoing = assignment.administrative_status == AdministrativeStatus.ONGOING

    if now >= deadline + grace_period:
        return LifecycleState.ARCHIVED
    if now < deadline:
        return LifecycleState.ONGOING if is_ongoing else LifecycleState.EXPIRED
    # Nach Deadline, innerhalb der Kulanzfrist. Der Klassifizierer wartet
    # nicht darauf, dass der Server den Status umstellt.
    return LifecycleState.OVERDUE if is_ongoing else LifecycleState.EXPIRED


class LifecyclePartition(BaseModel):
    """Ergebnis von classify_all: fünf disjunkte Listen in Eingabe-Reihenfolge."""

    ongoing: list[Assignment] = Field(default_factory=list)
    submitted: list[Assignment] = Field(default_factory=list)
    overdue: list[Assignment] = Field(default_factory=list)
    expired: list[Assignment] = Field(default_factory=list)
    archived: list[Assignment] = Field(default_factory=list)

    def bucket(self, state: LifecycleState) -> list[Assignment]:
        return getattr(self, state.value)

    def counts(self) -> dict[LifecycleState, int]:
        return {state: len(self.bucket(state)) for state in LifecycleState}

    def bucket_of(self, assignment_id: str) -> Optional[LifecycleState]:
        """Kategorie einer Aufgabe per ID, None wenn nicht enthalten."""
        for state in LifecycleState:
            if any(a.id == assignment_id for a in self.bucket(state)):
                return state
        return None

    def actionable(self, viewer: Viewer = Viewer.STUDENT) -> list[Assignment]:
        """Offene Aufgaben aus Sicht des Betrachters.

        Studierende: laufend + verpasst. Kursverantwortliche: laufend +
        abgelaufen (Abgabefenster geschlossen, noch nicht archiviert).
        """
        late = self.overdue if viewer == Viewer.STUDENT else self.expired
        return self.ongoing + late

    def __len__(self) -> int:
        return sum(self.counts().values())

    def print_rich(
        self,
        now: Optional[datetime] = None,
        grace_period: timedelta = DEFAULT_GRACE_PERIOD,
        late_window: Optional[timedelta] = None,
    ) -> None:
        """Gibt die Einteilung formatiert über Rich aus."""
        from rich.console import Console

        Console().print(self.render(now, grace_period, late_window))

    def render(
        self,
        now: Optional[datetime] = None,
        grace_period: timedelta = DEFAULT_GRACE_PERIOD,
        late_window: Optional[timedelta] = None,
    ):
        """Rich-Renderable (auch für Live-Anzeige).

        Ohne ``now`` bleiben Restzeit, Status-Tag und Abgabe-Spalte leer.
        """
        from rich.table import Table
        from rich import box

        from lifecycle.display import (
            DEFAULT_LATE_WINDOW,
            archived_age,
            can_submit,
            remaining_time,
            status_tag,
        )

        if late_window is None:
            late_window = DEFAULT_LATE_WINDOW

        title = "Hausaufgaben"
        if now is not None:
            title += f" ({now.strftime('%Y-%m-%d %H:%M:%S')})"
        table = Table(title=title, box=box.ROUNDED)
        table.add_column("Kategorie", width=12)
        table.add_column("ID", style="bold")
        table.add_column("Titel")
        table.add_column("Deadline")
        table.add_column("Status")
        table.add_column("Restzeit")
        table.add_column("Abgabe", justify="center")

        for state in LifecycleState:
            label, color = _LABELS[state]
            for a in self.bucket(state):
                tag = rest = submit = "–"
                if now is not None:
                    t = status_tag(a.administrative_status, a.deadline, now, grace_period)
                    tag = f"[{t.color}]{t.label}[/{t.color}]"
                    if state == LifecycleState.ARCHIVED:
                        age = archived_age(a.deadline, now, grace_period)
                        rest = age.text if age else "archiviert"
                    else:
                        remaining = remaining_time(a.deadline, now)
                        rest = remaining.text if remaining else "–"
                    submit = ("[green]✓[/green]" if can_submit(a, now, late_window)
                              else "[dim]✗[/dim]")
                table.add_row(
                    f"[{color}]{label}[/{color}]",
                    a.id,
                    a.title,
                    a.deadline.strftime("%Y-%m-%d %H:%M"),
                    tag,
                    rest,
                    submit,
                )
        counts = "  ".join(
            f"{_LABELS[s][0]}: {n}" for s, n in self.counts().items()
        )
        table.caption = counts
        return table


def classify_all(
    assignments: Iterable[Assignment],
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> LifecyclePartition:
    """Teilt alle Hausaufgaben in die fünf Kategorien auf.

    Jede Aufgabe landet in genau einer Liste, die Reihenfolge innerhalb
    einer Liste entspricht der Eingabe. Kein Caching: erneut aufrufen,
    um den Lauf der Zeit abzubilden.
    """
    partition = LifecyclePartition()
    for a in assignments:
        partition.bucket(classify(a, now, grace_period)).append(a)
    logger.debug(
        f"classify_all @ {now.isoformat()}: "
        + ", ".join(f"{s.value}={n}" for s, n in partition.counts().items())
    )
    return partition
