"""Gemeinsame Hilfsfunktionen für Terminal-, Excel- und PDF-Ausgabe."""

from datetime import date

from config.schema import SchedulingConfig, SubjectCategory
from models.schedule import ScheduleSession, SessionKind, TopicDaySchedule
from models.topic import Priority

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "new":          "B3D4FF",
    "review":       "B3FFB3",
    "free":         "F5F5F5",
    "header":       "4472C4",
    "day":          "DDDDDD",
    "high":         "FFB3B3",
    "medium":       "FFF2B3",
    "low":          "D4FFD4",
    "MATH":         "D4B3FF",
    "PROGRAMMING":  "FFD4B3",
    "THEORY":       "E0E0E0",
}

WEEKDAY_NAMES = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def format_date(d: date) -> str:
    """'Mo 19.10.2026'"""
    return f"{WEEKDAY_NAMES[d.weekday()]} {d.strftime('%d.%m.%Y')}"


def format_hours(hours: float) -> str:
    """'1 Stunde', '2 Stunden', '1.5 Stunden'"""
    return f"{hours:g} Stunde" if hours == 1 else f"{hours:g} Stunden"


def session_label(session: ScheduleSession, config: SchedulingConfig | None = None) -> str:
    """Anzeigetext einer Sitzung: '2 Stunden - Neuer Stoff'."""
    cfg = config or SchedulingConfig()
    if session.kind == SessionKind.NEW:
        what = "Neuer Stoff"
    else:
        what = f"Wiederholung (von vor {cfg.review_offset_days} Tagen)"
    return f"{format_hours(session.hours)} - {what}"


def display_name(entry: TopicDaySchedule) -> str:
    """Themenname; reine Wiederholungseinträge erhalten den Zusatz ' Review'."""
    if entry.sessions and all(s.kind == SessionKind.REVIEW for s in entry.sessions):
        return f"{entry.topic_name} Review"
    return entry.topic_name


def session_color(entry: TopicDaySchedule) -> str:
    """Hex-Farbe eines Eintrags: Wiederholung grün, sonst blau."""
    if entry.sessions and all(s.kind == SessionKind.REVIEW for s in entry.sessions):
        return COLORS["review"]
    return COLORS["new"]


def priority_color(priority: Priority) -> str:
    return COLORS[priority.value.lower()]


def category_color(category: SubjectCategory) -> str:
    return COLORS.get(category.value, COLORS["THEORY"])
