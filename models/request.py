"""StudyRequest: Eingaben eines Planungslaufs + Machbarkeits-Check (Pydantic v2)."""

from collections import Counter
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from models.topic import Topic
from config.schema import SchedulingConfig


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Planung unmöglich)
    warnings: list[str]    # Hinweise (Planung knapp aber möglich)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ PLANBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT PLANBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


class StudyRequest(BaseModel):
    """Alle Eingaben für einen Planungslauf."""

    exam_date: date
    daily_hours: float = Field(gt=0, le=24)
    academic_level: str = ""
    topics: list[Topic] = Field(min_length=1)

    @property
    def total_hours(self) -> float:
        return round(sum(t.hours for t in self.topics), 6)

    def horizon_days(self, today: date) -> int:
        """Anzahl planbarer Tage von heute bis zum Vortag der Prüfung."""
        return (self.exam_date - today).days

    def validate_feasibility(
        self, today: date, config: Optional[SchedulingConfig] = None,
    ) -> FeasibilityReport:
        """Schneller Vorab-Check vor der Planung.

        Der Scheduler bleibt maßgeblich: Weil ein Tag erst ab
        ``min_free_hours`` Restzeit belegt wird, kann eine Planung auch bei
        ausreichender Gesamtkapazität scheitern.
        """
        cfg = config or SchedulingConfig()
        errors: list[str] = []
        warnings: list[str] = []

        days = self.horizon_days(today)
        if days <= 0:
            errors.append(
                f"Prüfungsdatum {self.exam_date.isoformat()} liegt nicht in der Zukunft "
                f"(heute: {today.isoformat()})."
            )
            return FeasibilityReport(is_feasible=False, errors=errors, warnings=warnings)

        if self.daily_hours < cfg.min_free_hours:
            errors.append(
                f"{self.daily_hours:g}h pro Tag reichen für keinen Lernblock "
                f"(mindestens {cfg.min_free_hours:g}h nötig)."
            )

        capacity = round(days * self.daily_hours, 6)
        need = self.total_hours
        if need > capacity:
            errors.append(
                f"Gesamtbedarf {need:g}h übersteigt die Kapazität von {capacity:g}h "
                f"({days} Tage × {self.daily_hours:g}h). Lernzeit pro Tag erhöhen "
                f"oder Prüfungsdatum verschieben."
            )
        elif need > capacity * 0.9:
            warnings.append(
                f"Sehr knapper Plan: {need:g}h Bedarf bei {capacity:g}h Kapazität – "
                f"für Wiederholungen bleibt kaum Zeit."
            )

        dupes = [n for n, c in Counter(t.name for t in self.topics).items() if c > 1]
        if dupes:
            warnings.append(
                f"Mehrfach vorhandene Themen ({', '.join(dupes)}) teilen sich "
                f"die Tageseinträge."
            )

        return FeasibilityReport(is_feasible=not errors, errors=errors, warnings=warnings)
