"""Validierung fertiger Lernpläne.

Prüft einen (ggf. von Platte geladenen) Plan auf Verletzungen der
Planungsregeln als Sicherheitsnetz unabhängig vom Scheduler.
"""

from collections import defaultdict
from datetime import timedelta
from typing import Literal, Optional

from pydantic import BaseModel

from config.schema import SchedulingConfig
from models.schedule import SessionKind, StudyPlan

_TOLERANCE = 1e-6


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "day_capacity"
    description: str
    entity: str          # Tag ("Tag 3") oder Themenname


class ValidationReport(BaseModel):
    """Ergebnis der Plan-Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=22)
        table.add_column("Entität", width=16)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class PlanValidator:
    """Prüft einen StudyPlan auf Verletzungen der Planungsregeln."""

    def __init__(self, config: Optional[SchedulingConfig] = None) -> None:
        # Ohne explizite Config gelten die Parameter, mit denen der Plan erstellt wurde
        self.config = config

    def validate(self, plan: StudyPlan) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []
        cfg = self.config or plan.scheduling

        violations.extend(self._check_day_sequence(plan))
        violations.extend(self._check_day_capacity(plan))
        violations.extend(self._check_entry_totals(plan))
        violations.extend(self._check_new_hours(plan))
        violations.extend(self._check_reviews(plan, cfg))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_day_sequence(self, plan: StudyPlan) -> list[ValidationViolation]:
        """Tagnummern lückenlos ab 1, Daten fortlaufend ab 'heute', Ende vor Prüfung."""
        violations: list[ValidationViolation] = []
        for i, day in enumerate(plan.days):
            expected_date = plan.today + timedelta(days=i)
            if day.day_number != i + 1 or day.date != expected_date:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="day_sequence",
                    entity=f"Tag {day.day_number}",
                    description=(
                        f"Erwartet Tag {i + 1} am {expected_date.isoformat()}, "
                        f"gefunden Tag {day.day_number} am {day.date.isoformat()}."
                    ),
                ))
        expected_days = (plan.request.exam_date - plan.today).days
        if len(plan.days) != expected_days:
            violations.append(ValidationViolation(
                severity="error",
                constraint="horizon",
                entity="Plan",
                description=(
                    f"{len(plan.days)} Tage im Plan, bis zur Prüfung sind es "
                    f"{expected_days} Tage."
                ),
            ))
        return violations

    def _check_day_capacity(self, plan: StudyPlan) -> list[ValidationViolation]:
        """Verplante Stunden ≤ verfügbare Stunden, Tagessumme konsistent."""
        violations: list[ValidationViolation] = []
        for day in plan.days:
            entity = f"Tag {day.day_number}"
            if day.total_scheduled_hours > day.available_hours + _TOLERANCE:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="day_capacity",
                    entity=entity,
                    description=(
                        f"{day.total_scheduled_hours:g}h verplant, nur "
                        f"{day.available_hours:g}h verfügbar."
                    ),
                ))
            summed = sum(e.total_hours for e in day.topics)
            if abs(summed - day.total_scheduled_hours) > _TOLERANCE:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="day_total",
                    entity=entity,
                    description=(
                        f"Tagessumme {day.total_scheduled_hours:g}h ≠ Summe der "
                        f"Themen {summed:g}h."
                    ),
                ))
        return violations

    def _check_entry_totals(self, plan: StudyPlan) -> list[ValidationViolation]:
        """Je Tag höchstens ein Eintrag pro Thema; total_hours = Summe der Sitzungen."""
        violations: list[ValidationViolation] = []
        for day in plan.days:
            seen: set[str] = set()
            for entry in day.topics:
                if entry.topic_name in seen:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="duplicate_entry",
                        entity=entry.topic_name,
                        description=f"Tag {day.day_number}: Thema mehrfach eingetragen.",
                    ))
                seen.add(entry.topic_name)
                summed = sum(s.hours for s in entry.sessions)
                if abs(summed - entry.total_hours) > _TOLERANCE:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="entry_total",
                        entity=entry.topic_name,
                        description=(
                            f"Tag {day.day_number}: total_hours {entry.total_hours:g}h "
                            f"≠ Sitzungssumme {summed:g}h."
                        ),
                    ))
        return violations

    def _check_new_hours(self, plan: StudyPlan) -> list[ValidationViolation]:
        """NEW-Stunden je Thema = angefragte Stunden (gleichnamige Themen addiert)."""
        violations: list[ValidationViolation] = []
        requested: dict[str, float] = defaultdict(float)
        for topic in plan.request.topics:
            requested[topic.name] += topic.hours

        for name, hours in requested.items():
            planned = plan.new_hours(name)
            if abs(planned - hours) > _TOLERANCE:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="topic_hours",
                    entity=name,
                    description=f"{planned:g}h neuer Stoff verplant, angefragt {hours:g}h.",
                ))

        for name in plan.topic_names():
            if name not in requested:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_topic",
                    entity=name,
                    description="Thema ist im Plan, aber nicht in der Anfrage.",
                ))
        return violations

    def _check_reviews(
        self, plan: StudyPlan, cfg: SchedulingConfig,
    ) -> list[ValidationViolation]:
        """Wiederholung nur am ersten Lerntag + Offset; fehlt sie trotz freiem Zieltag = Fehler."""
        violations: list[ValidationViolation] = []
        offset = cfg.review_offset_days
        needed = max(cfg.min_free_hours, cfg.review_hours)
        names = {t.name for t in plan.request.topics}

        for name in sorted(names):
            first = plan.first_day(name)
            reviews = plan.review_days(name)
            if first is None:
                continue
            if not reviews:
                target = first + offset
                if (target <= plan.total_days
                        and plan.days[target - 1].remaining_hours >= needed):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="review_missing",
                        entity=name,
                        description=(
                            f"Tag {target} hat {plan.days[target - 1].remaining_hours:g} h "
                            f"frei, Wiederholung fehlt trotzdem."
                        ),
                    ))
                    continue
                reason = (
                    "außerhalb des Zeitraums" if target > plan.total_days
                    else "Tag war voll"
                )
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="review_skipped",
                    entity=name,
                    description=f"Keine Wiederholung an Tag {target} ({reason}).",
                ))
                continue
            # Gleichnamige Themen haben je einen eigenen Ankertag
            duplicates = sum(1 for t in plan.request.topics if t.name == name)
            if len(reviews) > duplicates:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="review_count",
                    entity=name,
                    description=f"{len(reviews)} Wiederholungstage: {reviews}.",
                ))
            if duplicates == 1 and reviews != [first + offset]:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="review_offset",
                    entity=name,
                    description=(
                        f"Wiederholung an Tag {reviews}, erwartet Tag {first + offset} "
                        f"(erster Lerntag {first} + {offset})."
                    ),
                ))
        return violations
