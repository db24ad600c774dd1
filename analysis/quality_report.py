"""Qualitätsbericht für fertige Lernpläne.

Analysiert die Verteilung je Thema und berechnet zusammenfassende
Metriken (Auslastung, Puffer vor der Prüfung, Wiederholungsquote).
"""

from typing import Optional

from pydantic import BaseModel

from models.schedule import SessionKind, StudyPlan
from models.topic import Priority


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class TopicMetrics(BaseModel):
    """Kennzahlen für ein einzelnes Thema."""

    topic_name: str
    priority: Priority
    requested_hours: float
    new_hours: float
    review_hours: float
    first_day: Optional[int]
    last_day: Optional[int]
    days_touched: int
    review_day: Optional[int]


class PlanQualityReport(BaseModel):
    """Vollständiger Qualitätsbericht für einen StudyPlan."""

    topic_metrics: list[TopicMetrics]
    total_days: int
    scheduled_hours: float
    available_hours: float
    utilization: float          # 0.0–1.0
    free_days: int
    buffer_days: int            # freie Tage am Ende vor der Prüfung
    review_coverage: float      # Anteil der Themen mit Wiederholung

    def print_rich(self) -> None:
        """Gibt den Bericht als Rich-Tabelle aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        console.print(Panel(
            f"Auslastung: [bold]{self.utilization:.0%}[/bold] "
            f"({self.scheduled_hours:g}h / {self.available_hours:g}h)  |  "
            f"Freie Tage: {self.free_days}  |  Puffer vor Prüfung: {self.buffer_days} Tage  |  "
            f"Wiederholungen: {self.review_coverage:.0%}",
            title="Plan-Qualität",
            border_style="cyan",
        ))

        table = Table(box=box.ROUNDED)
        table.add_column("Thema", style="bold")
        table.add_column("Prio")
        table.add_column("Std.", justify="right")
        table.add_column("Tage")
        table.add_column("Wiederholung")
        for m in self.topic_metrics:
            span = (
                f"{m.first_day}–{m.last_day}" if m.first_day != m.last_day
                else str(m.first_day)
            )
            review = f"Tag {m.review_day}" if m.review_day else "[dim]—[/dim]"
            table.add_row(m.topic_name, m.priority.value,
                          f"{m.new_hours:g}", span, review)
        console.print(table)


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class PlanQualityAnalyzer:
    """Berechnet einen PlanQualityReport aus einem StudyPlan."""

    def analyze(self, plan: StudyPlan) -> PlanQualityReport:
        metrics = [self._topic_metrics(plan, name, priority, hours)
                   for name, priority, hours in self._distinct_topics(plan)]

        available = plan.total_available_hours
        scheduled = plan.total_scheduled_hours

        buffer_days = 0
        for day in reversed(plan.days):
            if not day.is_free:
                break
            buffer_days += 1

        with_review = sum(1 for m in metrics if m.review_day is not None)

        return PlanQualityReport(
            topic_metrics=metrics,
            total_days=plan.total_days,
            scheduled_hours=scheduled,
            available_hours=available,
            utilization=round(scheduled / available, 4) if available else 0.0,
            free_days=sum(1 for d in plan.days if d.is_free),
            buffer_days=buffer_days,
            review_coverage=round(with_review / len(metrics), 4) if metrics else 0.0,
        )

    def _distinct_topics(self, plan: StudyPlan) -> list[tuple[str, Priority, float]]:
        """Themen in Planungsreihenfolge; gleichnamige werden zusammengefasst."""
        merged: dict[str, tuple[str, Priority, float]] = {}
        for t in sorted(plan.request.topics, key=lambda t: t.priority.rank):
            if t.name in merged:
                name, priority, hours = merged[t.name]
                merged[t.name] = (name, priority, hours + t.hours)
            else:
                merged[t.name] = (t.name, t.priority, t.hours)
        return list(merged.values())

    def _topic_metrics(
        self, plan: StudyPlan, name: str, priority: Priority, hours: float,
    ) -> TopicMetrics:
        entries = plan.get_topic_entries(name)
        new_days = [d.day_number for d, e in entries if e.hours_of(SessionKind.NEW) > 0]
        reviews = plan.review_days(name)
        return TopicMetrics(
            topic_name=name,
            priority=priority,
            requested_hours=hours,
            new_hours=plan.new_hours(name),
            review_hours=round(sum(e.hours_of(SessionKind.REVIEW) for _, e in entries), 6),
            first_day=new_days[0] if new_days else None,
            last_day=new_days[-1] if new_days else None,
            days_touched=len(entries),
            review_day=reviews[0] if reviews else None,
        )
