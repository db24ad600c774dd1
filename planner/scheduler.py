"""Greedy Lernplan-Scheduler.

Ablauf:
  - Themen stabil nach Priorität sortieren (High < Medium < Low)
  - Pro Thema Blöcke von max. 2h immer auf den frühesten Tag legen,
    der noch ≥ 1h frei hat (Links-Packen → hohe Priorität zuerst)
  - Danach je Thema eine 1h-Wiederholung genau 2 Tage nach dem ersten
    Lerntag, falls dieser Tag existiert und noch Platz hat
  - Alles-oder-nichts: bei Kapazitätsmangel gibt es keinen Teilplan
"""

import logging
from datetime import date, timedelta
from typing import Optional

from config.schema import SchedulingConfig
from models.request import StudyRequest
from models.schedule import DaySchedule, SessionKind, StudyPlan
from models.topic import Topic

logger = logging.getLogger(__name__)


# ─── Fehler ───────────────────────────────────────────────────────────────────

class SchedulingError(Exception):
    """Basisklasse: Planungslauf abgebrochen, kein Plan erzeugt."""


class InvalidExamDateError(SchedulingError):
    """Prüfungsdatum ist heute oder liegt in der Vergangenheit."""

    def __init__(self, exam_date: date, today: date) -> None:
        self.exam_date = exam_date
        self.today = today
        super().__init__(
            f"Prüfungsdatum {exam_date.isoformat()} liegt nicht in der Zukunft "
            f"(heute: {today.isoformat()}). Bitte ein späteres Datum wählen."
        )


class InsufficientCapacityError(SchedulingError):
    """Kein Tag im Planungszeitraum hat noch genug Zeit für das nächste Thema."""

    def __init__(
        self,
        topic_name: str,
        unscheduled_hours: float,
        total_days: int,
        daily_hours: float,
    ) -> None:
        self.topic_name = topic_name
        self.unscheduled_hours = unscheduled_hours
        self.total_days = total_days
        self.daily_hours = daily_hours
        super().__init__(
            f"Nicht genug Zeit: Für '{topic_name}' fehlen noch "
            f"{unscheduled_hours:g}h, aber kein Tag der {total_days} Tage "
            f"({daily_hours:g}h/Tag) hat noch Platz.\n"
            f"Lernstunden pro Tag erhöhen oder das Prüfungsdatum verschieben."
        )


# ─── Scheduler ────────────────────────────────────────────────────────────────

class StudyScheduler:
    """Verteilt Themen und Wiederholungen auf die Tage bis zur Prüfung.

    Verwendung:
        scheduler = StudyScheduler()
        days = scheduler.schedule(exam_date, 3.0, topics, today=date.today())
    """

    def __init__(self, config: Optional[SchedulingConfig] = None) -> None:
        self.config = config or SchedulingConfig()

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def schedule(
        self,
        exam_date: date,
        daily_hours: float,
        topics: list[Topic],
        today: date,
    ) -> list[DaySchedule]:
        """Berechnet den Tagesplan.

        Raises:
            InvalidExamDateError: exam_date <= today
            InsufficientCapacityError: Themen passen nicht in den Zeitraum
        """
        ordered = sorted(topics, key=lambda t: t.priority.rank)

        total_days = (exam_date - today).days
        if total_days <= 0:
            raise InvalidExamDateError(exam_date, today)

        days = [
            DaySchedule(
                date=today + timedelta(days=i),
                day_number=i + 1,
                available_hours=daily_hours,
            )
            for i in range(total_days)
        ]
        logger.info(
            f"Planung: {len(ordered)} Themen, {total_days} Tage à {daily_hours:g}h"
        )

        anchors: list[tuple[Topic, int]] = []
        for topic in ordered:
            anchors.append((topic, self._allocate_topic(days, topic, daily_hours)))

        for topic, anchor in anchors:
            self._place_review(days, topic, anchor)

        logger.info(
            f"Plan fertig: {sum(d.total_scheduled_hours for d in days):g}h verplant, "
            f"{sum(1 for d in days if d.is_free)} freie Tage"
        )
        return days

    def build_plan(self, request: StudyRequest, today: date) -> StudyPlan:
        """Plant eine StudyRequest und verpackt das Ergebnis als StudyPlan."""
        days = self.schedule(
            request.exam_date, request.daily_hours, request.topics, today=today,
        )
        return StudyPlan(
            request=request, today=today, days=days, scheduling=self.config,
        )

    # ─── Zuweisung ────────────────────────────────────────────────────────────

    def _allocate_topic(
        self, days: list[DaySchedule], topic: Topic, daily_hours: float,
    ) -> int:
        """Legt alle NEW-Blöcke eines Themas; gibt den Ankertag (0-basiert) zurück."""
        left = topic.hours
        anchor: Optional[int] = None

        while left > 0:
            idx = self._first_day_with_room(days)
            if idx is None:
                logger.warning(
                    f"Kapazität erschöpft bei '{topic.name}' ({left:g}h offen)"
                )
                raise InsufficientCapacityError(
                    topic.name, left, len(days), daily_hours,
                )
            day = days[idx]
            block = min(self.config.max_block_hours, left, day.remaining_hours)
            day.add_session(topic.name, block, SessionKind.NEW)
            left = round(left - block, 6)
            if anchor is None:
                anchor = idx
            logger.debug(f"  {topic.name}: {block:g}h an Tag {day.day_number}")

        return anchor

    def _first_day_with_room(self, days: list[DaySchedule]) -> Optional[int]:
        """Index des frühesten Tages mit ≥ min_free_hours Restzeit."""
        for idx, day in enumerate(days):
            if day.remaining_hours >= self.config.min_free_hours:
                return idx
        return None

    def _place_review(self, days: list[DaySchedule], topic: Topic, anchor: int) -> None:
        """Eine Wiederholung am Ankertag + Offset, sonst ersatzlos entfallen."""
        target = anchor + self.config.review_offset_days
        needed = max(self.config.min_free_hours, self.config.review_hours)
        if target >= len(days):
            logger.debug(f"  Wiederholung '{topic.name}': Tag {target + 1} außerhalb")
            return
        day = days[target]
        if day.remaining_hours < needed:
            logger.debug(f"  Wiederholung '{topic.name}': Tag {day.day_number} voll")
            return
        day.add_session(topic.name, self.config.review_hours, SessionKind.REVIEW)
        logger.debug(f"  Wiederholung '{topic.name}' an Tag {day.day_number}")


def schedule(
    exam_date: date,
    daily_hours: float,
    topics: list[Topic],
    today: date,
    config: Optional[SchedulingConfig] = None,
) -> list[DaySchedule]:
    """Kurzform für ``StudyScheduler(config).schedule(...)``."""
    return StudyScheduler(config).schedule(exam_date, daily_hours, topics, today=today)
