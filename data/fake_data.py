"""Testdaten-Generator für die Aufgabenliste.

Erzeugt einen Datensatz relativ zu einem Bezugszeitpunkt, der jede
Lebenszyklus-Kategorie mindestens einmal enthält:

  1. Laufend:     Deadline in der Zukunft, Status ONGOING
  2. Abgegeben:   beliebige Deadline, abgegeben
  3. Verpasst:    Deadline knapp vorbei, Status ONGOING (Server hinkt hinterher)
  4. Abgelaufen:  Deadline knapp vorbei, Status CLOSED/GRADED
  5. Archiviert:  Deadline länger als die Kulanzfrist vorbei

Danach werden zufällige Aufgaben (Seed-gesteuert) aufgefüllt.
"""

import random
from datetime import datetime, timedelta
from typing import Optional

from config.schema import AppConfig
from lifecycle.clock import as_aware
from models.assignment import AdministrativeStatus, Assignment
from models.course import COURSE_CATALOGUE, encode
from models.homework_data import HomeworkData
from models.profile import Profile

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "San", "Si", "Wei", "Fang", "Lei", "Jing", "Hao", "Yan", "Min", "Tao",
]

_LAST_NAMES = [
    "Zhang", "Li", "Wang", "Zhao", "Chen", "Liu", "Yang", "Huang", "Zhou", "Wu",
]

_TEMPLATES = [
    "{StudentId}-{ClassName}-{FullName}",
    "{StudentId}{FullName}",
    "{ClassName}_{StudentId}_{FullName}",
    "Blatt-{StudentId}",
]

_TOPICS = [
    "Übungsblatt", "Laborbericht", "Projektskizze", "Hausarbeit", "Quiz",
]


class FakeHomeworkGenerator:
    """Erzeugt reproduzierbare Demo-Daten (gleicher Seed → gleiche Daten)."""

    def __init__(self, config: AppConfig, seed: int = 42) -> None:
        self.config = config
        self.rng = random.Random(seed)

    def generate(self, now: datetime, extra: int = 5) -> HomeworkData:
        now = as_aware(now)
        grace = self.config.lifecycle.grace_period
        codes = self.config.naming.class_codes
        class_code = self.rng.choice(sorted(codes)) if codes else "0000"

        profile = Profile.from_class_code(
            student_id=f"2023{self.rng.randint(0, 9999):04d}",
            class_code=class_code,
            full_name=f"{self.rng.choice(_LAST_NAMES)} {self.rng.choice(_FIRST_NAMES)}",
            class_codes=codes,
        )

        # Feste Fälle: jede Kategorie einmal
        fixed = [
            (now + timedelta(days=2), AdministrativeStatus.ONGOING, False),
            (now - timedelta(days=1), AdministrativeStatus.ONGOING, True),
            (now - timedelta(hours=6), AdministrativeStatus.ONGOING, False),
            (now - timedelta(hours=12), AdministrativeStatus.CLOSED, False),
            (now - grace - timedelta(days=10), AdministrativeStatus.GRADED, False),
        ]
        assignments = [
            self._make(i + 1, deadline, status, submitted, class_code)
            for i, (deadline, status, submitted) in enumerate(fixed)
        ]

        for i in range(extra):
            offset = timedelta(hours=self.rng.randint(-24 * 30, 24 * 14))
            status = self.rng.choice(list(AdministrativeStatus))
            submitted = self.rng.random() < 0.4
            assignments.append(
                self._make(len(fixed) + i + 1, now + offset, status, submitted, class_code)
            )

        chosen = self.rng.sample(COURSE_CATALOGUE, k=self.rng.randint(1, 3))
        return HomeworkData(
            profile=profile,
            assignments=assignments,
            courses=encode(c.id for c in chosen),
        )

    def _make(
        self,
        number: int,
        deadline: datetime,
        status: AdministrativeStatus,
        submitted: bool,
        class_code: str,
        template: Optional[str] = None,
    ) -> Assignment:
        return Assignment(
            id=str(number),
            deadline=deadline.replace(microsecond=0),
            administrative_status=status,
            user_submitted=submitted,
            title=f"{self.rng.choice(_TOPICS)} {number}",
            class_code=class_code,
            file_name=template or self.rng.choice(_TEMPLATES),
        )
