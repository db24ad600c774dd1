"""Interaktiver Wizard zur Eingabe einer Lernplan-Anfrage.

Führt den Nutzer durch Prüfungsdatum, Lernzeit, Niveau und Themenliste.
Nutzt rich für Konsolenausgabe und Eingabeaufforderungen.
"""

from datetime import date, timedelta
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import PlannerConfig
from models.request import StudyRequest
from models.topic import Priority, Topic

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def _show_topics_table(topics: list[Topic]) -> None:
    """Zeigt die bisher erfassten Themen als rich-Tabelle an."""
    table = Table(title="Themen", box=box.ROUNDED)
    table.add_column("Nr.", style="bold", width=4)
    table.add_column("Thema")
    table.add_column("Priorität")
    table.add_column("Stunden", justify="right")
    colors = {Priority.HIGH: "red", Priority.MEDIUM: "yellow", Priority.LOW: "green"}
    for i, t in enumerate(topics, 1):
        c = colors[t.priority]
        table.add_row(str(i), t.name, f"[{c}]{t.priority.value}[/{c}]", f"{t.hours:g}")
    if topics:
        table.add_row("", "[bold]Gesamt[/bold]", "",
                      f"[bold]{sum(t.hours for t in topics):g}[/bold]")
    console.print(table)


# ─── SCHRITT 1: Ziel ───

def _wizard_exam_date(today: date) -> date:
    _header("Schritt 1 — Prüfungsdatum")
    default = (today + timedelta(days=14)).isoformat()
    while True:
        raw = Prompt.ask("Prüfungsdatum (JJJJ-MM-TT)", default=default)
        try:
            exam = date.fromisoformat(raw.strip())
        except ValueError:
            _warn("Ungültiges Datum. Format: 2026-06-30")
            continue
        if exam <= today:
            _warn("Das Prüfungsdatum muss in der Zukunft liegen.")
            continue
        _success(f"{(exam - today).days} Tage bis zur Prüfung.")
        return exam


# ─── SCHRITT 2: Verfügbarkeit ───

def _wizard_availability(config: PlannerConfig) -> tuple[float, str]:
    _header("Schritt 2 — Verfügbarkeit & Niveau")
    while True:
        hours = FloatPrompt.ask("Lernstunden pro Tag",
                                default=config.default_daily_hours)
        if 0 < hours <= 24:
            break
        _warn("Bitte einen Wert zwischen 0 und 24 eingeben.")
    _info("Niveau z.B. 'Class 12 CBSE', '1st year engineering', 'University'.")
    level = Prompt.ask("Akademisches Niveau", default=config.default_academic_level)
    return hours, level


# ─── SCHRITT 3: Themen ───

def _wizard_topics() -> list[Topic]:
    _header("Schritt 3 — Themen")
    _info("Für jedes Thema: Name, Priorität und geschätzte Stunden.")
    topics: list[Topic] = []
    while True:
        name = Prompt.ask("Thema (leer = fertig)", default="")
        if not name.strip():
            if topics:
                break
            _warn("Mindestens ein Thema ist nötig.")
            continue
        prio_raw = Prompt.ask("Priorität", choices=["High", "Medium", "Low"],
                              default="Medium")
        hours = FloatPrompt.ask("Geschätzte Stunden", default=2.0)
        try:
            topics.append(Topic(name=name, priority=prio_raw, hours=hours))
        except ValidationError as e:
            _warn(f"Thema verworfen: {e.errors()[0]['msg']}")
            continue
        _show_topics_table(topics)

        if len(topics) > 1 and Confirm.ask("Ein Thema entfernen?", default=False):
            idx = Prompt.ask("Nr.", default=str(len(topics)))
            if idx.isdigit() and 1 <= int(idx) <= len(topics):
                removed = topics.pop(int(idx) - 1)
                _success(f"'{removed.name}' entfernt.")
                _show_topics_table(topics)
    return topics


def run_wizard(config: PlannerConfig, today: Optional[date] = None) -> Optional[StudyRequest]:
    """Führt alle Schritte aus und gibt die Anfrage zurück (None bei Abbruch)."""
    today = today or date.today()
    console.print(Panel(
        "[bold]Lernplan-Assistent[/bold]\n"
        "Prüfungsdatum, Lernzeit und Themen eingeben.",
        border_style="cyan",
    ))
    exam_date = _wizard_exam_date(today)
    hours, level = _wizard_availability(config)
    topics = _wizard_topics()

    request = StudyRequest(
        exam_date=exam_date, daily_hours=hours,
        academic_level=level, topics=topics,
    )

    _header("Zusammenfassung")
    console.print(
        f"Prüfung: [bold]{exam_date.isoformat()}[/bold] | "
        f"{hours:g}h/Tag | Niveau: {level or '-'}"
    )
    _show_topics_table(topics)
    report = request.validate_feasibility(today, config.scheduling)
    report.print_rich()

    if not Confirm.ask("Anfrage übernehmen?", default=True):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return None
    return request
