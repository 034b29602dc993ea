"""Datenmodell für eine Hausaufgabe aus Sicht eines einzelnen Nutzers (Pydantic v2)."""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AdministrativeStatus(IntEnum):
    """Vom Server gesetzter Status. Codes wie im Backend."""

    ONGOING = 1
    CLOSED = 2
    GRADED = 3


class Assignment(BaseModel):
    """Eine Hausaufgabe. Wird vom Klassifizierer nie verändert."""

    model_config = ConfigDict(frozen=True)

    id: str
    deadline: datetime
    administrative_status: AdministrativeStatus = AdministrativeStatus.ONGOING
    user_submitted: bool = False
    title: str = ""
    class_code: str = ""
    # Geforderte Benennungsvorlage, z.B. "{StudentId}-{FullName}"
    file_name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v) -> str:
        # Backend liefert numerische IDs
        return str(v)

    @field_validator("deadline")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        """Naive Zeitstempel werden als UTC interpretiert."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
