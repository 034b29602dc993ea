"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import AppConfig, LifecycleConfig, NamingConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header() -> str:
    return (
        "# ============================================\n"
        "# Hausaufgaben-Kern — Konfiguration\n"
        f"# Erstellt: {date.today().isoformat()}\n"
        "# ============================================\n"
    )


_SECTION_COMMENTS = {
    "lifecycle": (
        "Lebenszyklus",
        "Kulanzfrist bis zur Archivierung, Nachfrist für Abgaben, Takt der Neubewertung.",
    ),
    "naming": (
        "Dateinamen",
        "Trennzeichen und Zuordnung Klassencode → Klassenname.",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "homework_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um die Konfiguration anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        logger.info(f"Konfiguration geladen: {target}")
        return config

    def load_or_default(self) -> AppConfig:
        """Wie load(), aber ohne Datei die Standard-Konfiguration."""
        if self.first_run_check():
            from config.defaults import default_app_config
            return default_app_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit Kommentaren."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header() + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "lifecycle" in cm:
            lc = CommentedMap(cm["lifecycle"])
            lc.yaml_add_eol_comment("Tage", "grace_period_days")
            cm["lifecycle"] = lc

        return cm

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: AppConfig) -> AppConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] Lebenszyklus (Kulanz, Nachfrist, Takt)")
            console.print("  [bold]2.[/bold] Dateinamen (Trennzeichen, Klassencodes)")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            if choice == "1":
                config = config.model_copy(
                    update={"lifecycle": self._edit_lifecycle(config.lifecycle)}
                )
            elif choice == "2":
                config = config.model_copy(
                    update={"naming": self._edit_naming(config.naming)}
                )
            elif choice == "0":
                self.save(config)
                break
            else:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")

        return config

    def _edit_lifecycle(self, lc: LifecycleConfig) -> LifecycleConfig:
        grace = FloatPrompt.ask("Kulanzfrist (Tage)", default=lc.grace_period_days)
        late = FloatPrompt.ask("Nachfrist (Tage)", default=lc.late_submission_days)
        refresh = FloatPrompt.ask("Neubewertung (Sekunden)",
                                  default=lc.refresh_interval_seconds)
        return LifecycleConfig(
            grace_period_days=grace,
            late_submission_days=late,
            refresh_interval_seconds=refresh,
        )

    def _edit_naming(self, nc: NamingConfig) -> NamingConfig:
        show_class_codes(nc)
        separator = Prompt.ask("Trennzeichen", default=nc.separator)
        codes = dict(nc.class_codes)
        while True:
            console.print("\n[1] Klasse hinzufügen/ändern  [2] Klasse entfernen  [0] Fertig")
            sub = Prompt.ask("Auswahl", default="0")
            if sub == "0":
                break
            elif sub == "1":
                code = Prompt.ask("Klassencode")
                codes[code] = Prompt.ask("Klassenname", default=codes.get(code, ""))
            elif sub == "2":
                code = Prompt.ask("Welchen Klassencode entfernen?")
                if codes.pop(code, None) is None:
                    console.print(f"[yellow]Code '{code}' nicht vorhanden.[/yellow]")
        if codes != nc.class_codes and not Confirm.ask("Änderungen übernehmen?", default=True):
            codes = dict(nc.class_codes)
        return NamingConfig(separator=separator, class_codes=codes)


def show_class_codes(nc: NamingConfig) -> None:
    table = Table(title="Klassencodes", box=box.ROUNDED)
    table.add_column("Code", style="bold")
    table.add_column("Klasse")
    for code, name in nc.class_codes.items():
        table.add_row(code, name)
    console.print(table)
