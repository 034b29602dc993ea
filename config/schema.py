from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ─── LEBENSZYKLUS ───

class LifecycleConfig(BaseModel):
    """Zeitliche Parameter der Aufgaben-Klassifizierung."""
    # Kulanzfrist nach der Deadline, danach wird archiviert
    grace_period_days: float = Field(3, gt=0, le=60,
        description="Tage nach Deadline bis zur Archivierung")
    # Wie lange nach der Deadline noch abgegeben werden darf
    late_submission_days: float = Field(1, ge=0, le=60,
        description="Nachfrist für verspätete Abgaben (Tage)")
    # Takt der Neubewertung in der Live-Ansicht
    refresh_interval_seconds: float = Field(1.0, gt=0, le=3600,
        description="Neubewertung alle n Sekunden")

    @property
    def grace_period(self) -> timedelta:
        return timedelta(days=self.grace_period_days)

    @property
    def late_window(self) -> timedelta:
        return timedelta(days=self.late_submission_days)


# ─── DATEINAMEN ───

class NamingConfig(BaseModel):
    """Einstellungen für die Dateinamen-Prüfung."""
    # Trennzeichen zwischen expandierten Platzhaltern
    separator: str = Field("-", min_length=1, max_length=3,
        description="Trennzeichen zwischen Platzhaltern")
    # Klassencode → Klassenname
    class_codes: dict[str, str] = Field(default_factory=dict,
        description="Zuordnung Klassencode → Klassenname")

    @field_validator("separator")
    @classmethod
    def _no_whitespace(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("Trennzeichen darf keine Leerzeichen enthalten")
        return v


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    level: LogLevel = Field(LogLevel.WARNING,
        description="Log-Level der Kommandozeile")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration."""
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
