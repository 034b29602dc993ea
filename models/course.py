"""Kurskatalog + Bitmasken-Codec für die Kurswahl.

Jeder Kurs hat einen festen, explizit vergebenen Bit-Wert. Die Bits werden
NIE aus der Position in der Liste abgeleitet, damit ein Umsortieren des
Katalogs gespeicherte Masken nicht verschiebt.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field


class CourseId(str, Enum):
    SOFTWARE_ENGINEERING = "software_engineering"
    MICROCOMPUTER_INTERFACE = "microcomputer_interface"
    OPERATING_SYSTEM = "operating_system"
    AI_INTRODUCTION = "ai_introduction"
    COMPUTER_ORGANIZATION = "computer_organization"
    NEURAL_NETWORK = "neural_network"
    BIG_DATA_ANALYSIS = "big_data_analysis"


class CourseOption(BaseModel, frozen=True):
    """Ein Eintrag im Kurskatalog."""

    id: CourseId
    label: str
    description: str = ""
    # Bit-Wert (Zweierpotenz), fest vergeben
    code: int = Field(gt=0)


COURSE_CATALOGUE: tuple[CourseOption, ...] = (
    CourseOption(id=CourseId.SOFTWARE_ENGINEERING, label="Software Engineering",
                 description="Software-Lebenszyklus, Projektmanagement", code=1),
    CourseOption(id=CourseId.MICROCOMPUTER_INTERFACE, label="Mikrocomputer-Schnittstellen",
                 description="Mikrorechner-Prinzipien und Schnittstellentechnik", code=2),
    CourseOption(id=CourseId.OPERATING_SYSTEM, label="Betriebssysteme",
                 description="Prozesse, Speicherverwaltung, Dateisysteme", code=4),
    CourseOption(id=CourseId.AI_INTRODUCTION, label="Einführung in die KI",
                 description="Grundlagen und Anwendungen der künstlichen Intelligenz", code=8),
    CourseOption(id=CourseId.COMPUTER_ORGANIZATION, label="Rechnerorganisation",
                 description="Rechneraufbau und Rechnerarchitektur", code=16),
    CourseOption(id=CourseId.NEURAL_NETWORK, label="Neuronale Netze",
                 description="Neuronale Netze und Deep Learning", code=32),
    CourseOption(id=CourseId.BIG_DATA_ANALYSIS, label="Big-Data-Analyse",
                 description="Verarbeitung und Analyse großer Datenmengen", code=64),
)

_BY_ID: dict[CourseId, CourseOption] = {c.id: c for c in COURSE_CATALOGUE}

# Alle gültigen Bits; alles außerhalb ist bedeutungslos
CATALOGUE_MASK: int = sum(c.code for c in COURSE_CATALOGUE)


# ─── Codec ───

def encode(selected: Iterable[CourseId]) -> int:
    """Summiert die Bit-Werte aller gewählten Kurse (leere Auswahl → 0).

    Ungültige IDs sind eine Vorbedingungsverletzung des Aufrufers; da
    ``CourseId`` eine geschlossene Aufzählung ist, sind sie hier nicht
    darstellbar.
    """
    mask = 0
    for course_id in selected:
        mask |= _BY_ID[CourseId(course_id)].code
    return mask


def decode(mask: int) -> set[CourseId]:
    """Liefert alle Kurse, deren Bit in ``mask`` gesetzt ist.

    Fremde Bits (z.B. 128) werden ignoriert und beim erneuten encode()
    nicht zurückgegeben.
    """
    return {c.id for c in COURSE_CATALOGUE if mask & c.code}


# ─── Katalog-Abfragen ───

def course_label(course_id: CourseId) -> str:
    """Anzeigename eines Kurses; unbekannte Werte werden unverändert zurückgegeben."""
    try:
        return _BY_ID[CourseId(course_id)].label
    except ValueError:
        return str(course_id)


def course_by_label(label: str) -> Optional[CourseOption]:
    return next((c for c in COURSE_CATALOGUE if c.label == label), None)


def course_by_code(code: int) -> Optional[CourseOption]:
    """Kurs mit exakt diesem Bit-Wert (keine Maske!)."""
    return next((c for c in COURSE_CATALOGUE if c.code == code), None)


def selected_labels(mask: int) -> list[str]:
    """Anzeigenamen der gewählten Kurse in Katalog-Reihenfolge."""
    return [c.label for c in COURSE_CATALOGUE if mask & c.code]


def select_options() -> list[dict[str, str]]:
    """Optionen für eine Auswahlliste (label / value / title)."""
    return [
        {"label": c.label, "value": c.id.value, "title": c.description}
        for c in COURSE_CATALOGUE
    ]


class CourseSelection(BaseModel):
    """Kurswahl an der Systemgrenze: Maske muss nicht-negativ sein."""

    mask: int = Field(0, ge=0)

    @classmethod
    def from_courses(cls, selected: Iterable[CourseId]) -> "CourseSelection":
        return cls(mask=encode(selected))

    @property
    def courses(self) -> set[CourseId]:
        return decode(self.mask)

    @property
    def is_empty(self) -> bool:
        return not self.courses
