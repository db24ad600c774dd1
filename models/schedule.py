"""Ergebnis-Modelle der Lernplanung: Sitzungen, Tage, Gesamtplan."""

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from config.schema import SchedulingConfig
from models.request import StudyRequest


class SessionKind(str, Enum):
    NEW = "NEW"          # Neuer Stoff
    REVIEW = "REVIEW"    # Wiederholung


class ScheduleSession(BaseModel):
    """Ein zugewiesener Zeitblock für ein Thema an einem Tag."""

    hours: float = Field(gt=0)
    kind: SessionKind


class TopicDaySchedule(BaseModel):
    """Alle Sitzungen eines Themas an einem Tag (Reihenfolge = Zuweisung)."""

    topic_name: str
    sessions: list[ScheduleSession] = []
    total_hours: float = 0.0

    def add_session(self, hours: float, kind: SessionKind) -> None:
        self.sessions.append(ScheduleSession(hours=hours, kind=kind))
        self.total_hours = _round_hours(self.total_hours + hours)

    def hours_of(self, kind: SessionKind) -> float:
        return _round_hours(sum(s.hours for s in self.sessions if s.kind == kind))

    @property
    def has_review(self) -> bool:
        return any(s.kind == SessionKind.REVIEW for s in self.sessions)


class DaySchedule(BaseModel):
    """Ein Kalendertag im Lernplan."""

    date: dt.date
    day_number: int                   # 1-basiert
    topics: list[TopicDaySchedule] = []
    total_scheduled_hours: float = 0.0
    available_hours: float

    @property
    def remaining_hours(self) -> float:
        return _round_hours(self.available_hours - self.total_scheduled_hours)

    @property
    def is_free(self) -> bool:
        return not self.topics

    def get_topic(self, topic_name: str) -> Optional[TopicDaySchedule]:
        """Eintrag für ein Thema (exakter Namensvergleich) oder None."""
        return next((t for t in self.topics if t.topic_name == topic_name), None)

    def add_session(self, topic_name: str, hours: float, kind: SessionKind) -> None:
        """Fügt eine Sitzung hinzu; gleiche Themen am selben Tag werden zusammengeführt."""
        entry = self.get_topic(topic_name)
        if entry is None:
            entry = TopicDaySchedule(topic_name=topic_name)
            self.topics.append(entry)
        entry.add_session(hours, kind)
        self.total_scheduled_hours = _round_hours(self.total_scheduled_hours + hours)


class StudyPlan(BaseModel):
    """Vollständiger Lernplan: Eingaben + Tagesplan eines Planungslaufs."""

    request: StudyRequest
    today: dt.date
    days: list[DaySchedule]
    # Planungsparameter des Laufs; Validierung und Labels beziehen sich darauf
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    generated_at: dt.datetime = Field(default_factory=dt.datetime.now)

    @property
    def total_days(self) -> int:
        return len(self.days)

    @property
    def total_scheduled_hours(self) -> float:
        return _round_hours(sum(d.total_scheduled_hours for d in self.days))

    @property
    def total_available_hours(self) -> float:
        return _round_hours(sum(d.available_hours for d in self.days))

    def topic_names(self) -> list[str]:
        """Alle Themennamen in Reihenfolge des ersten Auftretens im Plan."""
        names: list[str] = []
        for day in self.days:
            for entry in day.topics:
                if entry.topic_name not in names:
                    names.append(entry.topic_name)
        return names

    def get_topic_entries(self, topic_name: str) -> list[tuple[DaySchedule, TopicDaySchedule]]:
        """Alle (Tag, Eintrag)-Paare für ein Thema."""
        result = []
        for day in self.days:
            entry = day.get_topic(topic_name)
            if entry is not None:
                result.append((day, entry))
        return result

    def new_hours(self, topic_name: str) -> float:
        """Summe der NEW-Stunden eines Themas über alle Tage."""
        return _round_hours(sum(
            e.hours_of(SessionKind.NEW) for _, e in self.get_topic_entries(topic_name)
        ))

    def first_day(self, topic_name: str) -> Optional[int]:
        """Tagnummer (1-basiert) der ersten NEW-Sitzung eines Themas."""
        for day, entry in self.get_topic_entries(topic_name):
            if entry.hours_of(SessionKind.NEW) > 0:
                return day.day_number
        return None

    def review_days(self, topic_name: str) -> list[int]:
        """Tagnummern mit Wiederholungssitzung für ein Thema."""
        return [day.day_number for day, e in self.get_topic_entries(topic_name)
                if e.has_review]

    def save_json(self, path: Path) -> None:
        """Speichert den Plan als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "StudyPlan":
        """Lädt einen gespeicherten Plan aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Lernplan nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


def _round_hours(value: float) -> float:
    # Gleitkomma-Reste bei Dezimalstunden abschneiden
    return round(value, 6)
