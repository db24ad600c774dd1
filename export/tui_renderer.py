"""Gemeinsamer Renderer für die Terminal-Anzeige von Lernplänen.

Wird von den CLI-Befehlen plan/show (Rich) verwendet.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.schedule import StudyPlan
    from models.resources import ResourceBundle
    from config.schema import SchedulingConfig


def render_plan_rows(
    plan: "StudyPlan",
    config: "SchedulingConfig | None" = None,
    include_free_days: bool = True,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Tagesplan zurück.

    Jede Zeile: [Tag, Datum, Thema, Sitzungen, Stunden]
    Tage ohne Einträge erscheinen als eine Zeile mit '—'.
    """
    from export.helpers import display_name, format_date, session_label

    rows: list[list[str]] = []
    for day in plan.days:
        header = [
            str(day.day_number),
            format_date(day.date),
        ]
        usage = f"{day.total_scheduled_hours:g}/{day.available_hours:g}"
        if day.is_free:
            if include_free_days:
                rows.append(header + ["—", "Keine Lerneinheiten", usage])
            continue
        for i, entry in enumerate(day.topics):
            sessions = "\n".join(
                session_label(s, config or plan.scheduling) for s in entry.sessions)
            cells = header if i == 0 else ["", ""]
            rows.append(cells + [
                display_name(entry),
                sessions,
                usage if i == 0 else "",
            ])
    return rows


def render_resource_lines(bundle: "ResourceBundle") -> list[str]:
    """Gibt die Zeilen des Ressourcen-Panels zurück (Rich-Markup)."""
    lines = [
        f"[bold]Kategorie:[/bold] {bundle.category.value}",
        "",
        "[bold]1. So lernst du das auf deinem Niveau:[/bold]",
    ]
    lines += [f"  • {s}" for s in bundle.how_to_learn]
    lines += [
        "",
        "[bold]2. Übungsaufgaben:[/bold]",
        f"  Umfang: {bundle.practice_advice.amount}",
    ]
    lines += [f"  • {s}" for s in bundle.practice_advice.sources]
    lines += ["", "[bold]3. Bücher:[/bold]"]
    lines += [f"  • {s}" for s in bundle.book_suggestions]
    lines += [
        "",
        "[bold]4. Schlüsselbegriffe:[/bold] " + ", ".join(bundle.key_concepts),
        "",
        "[bold]5. Karteikarten:[/bold] "
        f"{bundle.flashcard_advice.count} – {bundle.flashcard_advice.tool}",
    ]
    return lines
