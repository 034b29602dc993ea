"""Hausaufgaben-Kern — Haupt-CLI.

Verwendung:
  python main.py setup                        Konfiguration anlegen
  python main.py config show                  Konfiguration anzeigen
  python main.py config edit                  Konfiguration bearbeiten
  python main.py generate                     Demo-Datensatz erzeugen
  python main.py classify                     Aufgaben einteilen
  python main.py classify --watch             Einteilung jede Sekunde neu
  python main.py check-name <vorlage> <datei> Dateinamen prüfen
  python main.py courses list                 Kurskatalog anzeigen
  python main.py courses encode <kurs>...     Kurse → Bitmaske
  python main.py courses decode <maske>       Bitmaske → Kurse
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()
logger = logging.getLogger(__name__)

# Standard-Pfad für den gespeicherten Datensatz
DEFAULT_DATA_JSON = Path("output/homework_data.json")

_DATETIME_FORMATS = ["%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d"]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_abort():
    """Lädt die Konfiguration (oder Standardwerte) und richtet das Logging ein."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _setup_logging(config.logging.level.value)
    return mgr, config


def _load_data_or_abort(json_path: str):
    from models.homework_data import HomeworkData
    p = Path(json_path)
    try:
        return HomeworkData.load_json(p)
    except FileNotFoundError as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Verwenden Sie zunächst [bold]python main.py generate[/bold]."
        )
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Datensatz ungültig: {p}[/red]\n{e}")
        sys.exit(1)


def _now_or_system(now: Optional[datetime]) -> datetime:
    from lifecycle.clock import SystemClock, as_aware
    return as_aware(now) if now is not None else SystemClock().now()


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Legt die Konfiguration mit Standardwerten an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]python main.py config edit[/bold] zum Bearbeiten."
        )
        if not click.confirm("Trotzdem neu anlegen?", default=False):
            return

    mgr.save(default_app_config())
    console.print("[bold green]Einrichtung abgeschlossen![/bold green]")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.manager import show_class_codes
    mgr, config = _load_config_or_abort()

    lc = config.lifecycle
    console.print(Panel(
        f"Kulanzfrist: [bold]{lc.grace_period_days:g}[/bold] Tage  |  "
        f"Nachfrist: [bold]{lc.late_submission_days:g}[/bold] Tage  |  "
        f"Takt: [bold]{lc.refresh_interval_seconds:g}[/bold] s",
        title="Lebenszyklus",
        border_style="cyan",
    ))
    console.print(f"[bold]Trennzeichen:[/bold] '{config.naming.separator}'")
    show_class_codes(config.naming)
    console.print(f"[bold]Log-Level:[/bold] {config.logging.level.value}")


@cmd_config.command("edit")
def config_edit():
    """Bearbeitet die Konfiguration interaktiv."""
    mgr, config = _load_config_or_abort()
    mgr.edit_interactive(config)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--extra", default=5, help="Anzahl zusätzlicher Zufalls-Aufgaben.")
@click.option("--now", type=click.DateTime(_DATETIME_FORMATS), default=None,
              help="Bezugszeitpunkt (Standard: jetzt, UTC).")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad für JSON-Export.")
def cmd_generate(seed: int, extra: int, now: Optional[datetime], json_path: str):
    """Erzeugt einen Demo-Datensatz (Profil, Hausaufgaben, Kurswahl)."""
    mgr, config = _load_config_or_abort()
    from data.fake_data import FakeHomeworkGenerator

    gen = FakeHomeworkGenerator(config, seed=seed)
    data = gen.generate(_now_or_system(now), extra=extra)
    console.print(f"\n[dim]{data.summary()}[/dim]")

    out_path = Path(json_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── CLASSIFY ─────────────────────────────────────────────────────────────────

@click.command("classify")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--now", type=click.DateTime(_DATETIME_FORMATS), default=None,
              help="Fester Zeitpunkt statt Systemuhr.")
@click.option("--viewer", type=click.Choice(["student", "manager"]), default="student",
              help="Blickwinkel für offene Aufgaben.")
@click.option("--watch", is_flag=True, default=False,
              help="Einteilung im konfigurierten Takt neu berechnen.")
@click.option("--count", type=int, default=None,
              help="Anzahl Durchläufe im Watch-Modus (Standard: endlos).")
def cmd_classify(json_path: str, now: Optional[datetime], viewer: str,
                 watch: bool, count: Optional[int]):
    """Teilt die Hausaufgaben in Lebenszyklus-Kategorien ein."""
    mgr, config = _load_config_or_abort()
    from lifecycle.classifier import Viewer, classify_all
    from lifecycle.clock import OffsetClock, SystemClock, ticks

    data = _load_data_or_abort(json_path)
    grace = config.lifecycle.grace_period

    if not watch:
        instant = _now_or_system(now)
        partition = classify_all(data.assignments, instant, grace)
        partition.print_rich(instant, grace, config.lifecycle.late_window)
        open_items = partition.actionable(Viewer(viewer))
        console.print(f"[bold]Offen ({viewer}):[/bold] {len(open_items)}")
        return

    # Mit --now läuft die Uhr ab diesem Zeitpunkt weiter
    clock = OffsetClock(now) if now is not None else SystemClock()
    interval = config.lifecycle.refresh_interval_seconds
    logger.info(f"Watch-Modus: Neubewertung alle {interval:g}s")
    try:
        with Live(console=console, auto_refresh=False) as live:
            for instant in ticks(clock, interval, limit=count):
                partition = classify_all(data.assignments, instant, grace)
                live.update(partition.render(instant, grace, config.lifecycle.late_window),
                            refresh=True)
    except KeyboardInterrupt:
        console.print("[dim]Beendet.[/dim]")


# ─── CHECK-NAME ───────────────────────────────────────────────────────────────

@click.command("check-name")
@click.argument("template")
@click.argument("filename")
@click.option("--student-id", default=None, help="Studentennummer.")
@click.option("--class-code", default=None, help="Klassencode (wird aufgelöst).")
@click.option("--name", "full_name", default=None, help="Voller Name.")
@click.option("--json-path", default=None,
              help="Profil aus gespeichertem Datensatz übernehmen.")
def cmd_check_name(template: str, filename: str, student_id: Optional[str],
                   class_code: Optional[str], full_name: Optional[str],
                   json_path: Optional[str]):
    """Prüft einen Dateinamen gegen eine Benennungsvorlage."""
    mgr, config = _load_config_or_abort()
    from models.profile import Profile, resolve_class_name
    from naming.template import NamingRule

    try:
        rule = NamingRule(template=template)
    except ValueError as e:
        console.print(f"[red]Ungültige Vorlage:[/red] {e}")
        sys.exit(1)

    base = _load_data_or_abort(json_path).profile if json_path else Profile()
    profile = Profile(
        student_id=student_id if student_id is not None else base.student_id,
        class_name=(resolve_class_name(class_code, config.naming.class_codes)
                    if class_code is not None else base.class_name),
        full_name=full_name if full_name is not None else base.full_name,
    )

    result = rule.check(profile, filename, config.naming.separator)
    # Nur Warnung: Abgabe ist auch bei Abweichung möglich
    mark = "[green]✓[/green]" if result.matched else "[yellow]![/yellow]"
    console.print(f"{mark} {escape(result.message)}", soft_wrap=True)


# ─── COURSES ──────────────────────────────────────────────────────────────────

@click.group("courses")
def cmd_courses():
    """Kurskatalog und Bitmasken."""


@cmd_courses.command("list")
def courses_list():
    """Zeigt den Kurskatalog mit Bit-Werten."""
    from models.course import COURSE_CATALOGUE

    table = Table(title="Kurskatalog", box=box.ROUNDED)
    table.add_column("Bit", justify="right")
    table.add_column("ID", style="bold")
    table.add_column("Kurs")
    table.add_column("Beschreibung")
    for c in COURSE_CATALOGUE:
        table.add_row(str(c.code), c.id.value, c.label, c.description)
    console.print(table)


@cmd_courses.command("encode")
@click.argument("course_ids", nargs=-1)
def courses_encode(course_ids: tuple[str, ...]):
    """Berechnet die Bitmaske für die angegebenen Kurs-IDs."""
    from models.course import CourseId, encode

    valid = {c.value for c in CourseId}
    unknown = [c for c in course_ids if c not in valid]
    if unknown:
        console.print(
            f"[red]Unbekannte Kurs-IDs: {', '.join(unknown)}[/red]\n"
            f"Gültig: {', '.join(sorted(valid))}"
        )
        sys.exit(1)
    console.print(encode(CourseId(c) for c in course_ids))


@cmd_courses.command("decode")
@click.argument("mask", type=click.IntRange(min=0))
def courses_decode(mask: int):
    """Zeigt die Kurse einer Bitmaske (fremde Bits werden ignoriert)."""
    from models.course import CATALOGUE_MASK, COURSE_CATALOGUE, decode

    selected = decode(mask)
    for c in COURSE_CATALOGUE:
        if c.id in selected:
            console.print(f"  {c.code:>3}  {c.id.value}  [dim]{c.label}[/dim]")
    foreign = mask & ~CATALOGUE_MASK
    if foreign:
        console.print(f"[dim]Ignorierte Bits: {foreign}[/dim]")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Hausaufgaben-Kern: Lebenszyklus, Dateinamen, Kurswahl.

    Starten Sie mit: python main.py setup
    """


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_classify)
cli.add_command(cmd_check_name)
cli.add_command(cmd_courses)


if __name__ == "__main__":
    main()
