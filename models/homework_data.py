"""HomeworkData: Profil + Hausaufgaben eines Nutzers als JSON-Datensatz (Pydantic v2)."""

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from models.assignment import Assignment
from models.course import CourseSelection, selected_labels
from models.profile import Profile


class HomeworkData(BaseModel):
    """Momentaufnahme der vom Server geladenen Daten für einen Nutzer."""

    profile: Profile = Profile()
    assignments: list[Assignment] = []
    # Kurswahl als Bitmaske (nicht-negativ, fremde Bits erlaubt)
    courses: int = Field(0, ge=0)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    @model_validator(mode="after")
    def _unique_ids(self):
        counts = Counter(a.id for a in self.assignments)
        dupes = sorted(i for i, n in counts.items() if n > 1)
        if dupes:
            raise ValueError(f"Doppelte Aufgaben-IDs: {dupes}")
        return self

    @property
    def course_selection(self) -> CourseSelection:
        return CourseSelection(mask=self.courses)

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        labels = selected_labels(self.course_selection.mask)
        p = self.profile
        lines = [
            f"Student: {p.full_name or '–'} ({p.student_id or '–'})",
            f"Klasse: {p.class_name or '–'}",
            f"Kurse: {', '.join(labels) or '–'}",
            f"Hausaufgaben: {len(self.assignments)} "
            f"({sum(1 for a in self.assignments if a.user_submitted)} abgegeben)",
        ]
        return "\n".join(lines)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "HomeworkData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
