"""Profil des handelnden Nutzers (für die Dateinamen-Prüfung)."""

from typing import Mapping

from pydantic import BaseModel, ConfigDict


class Profile(BaseModel):
    """Studentennummer, aufgelöster Klassenname und voller Name."""

    model_config = ConfigDict(frozen=True)

    student_id: str = ""
    class_name: str = ""
    full_name: str = ""

    @classmethod
    def from_class_code(
        cls,
        student_id: str,
        class_code: str,
        full_name: str,
        class_codes: Mapping[str, str],
    ) -> "Profile":
        """Löst den Klassencode in den Anzeigenamen auf.

        Unbekannte Codes werden unverändert als Klassenname übernommen.
        """
        return cls(
            student_id=student_id,
            class_name=resolve_class_name(class_code, class_codes),
            full_name=full_name,
        )


def resolve_class_name(class_code: str, class_codes: Mapping[str, str]) -> str:
    return class_codes.get(class_code) or class_code
