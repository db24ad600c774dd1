"""Tests für die Pydantic-Modelle: Thema, Anfrage, Tagesplan."""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from config.schema import SchedulingConfig
from models import (
    DaySchedule,
    Priority,
    SessionKind,
    StudyPlan,
    StudyRequest,
    Topic,
    TopicDaySchedule,
)


TODAY = date(2026, 3, 2)


def _request(days: int = 3, daily: float = 2, topics=None) -> StudyRequest:
    return StudyRequest(
        exam_date=TODAY + timedelta(days=days),
        daily_hours=daily,
        topics=topics or [Topic(name="Calculus", hours=5)],
    )


# ─── THEMA & PRIORITÄT ────────────────────────────────────────────────────────

class TestTopic:
    def test_defaults(self):
        t = Topic(name="  Algebra  ", hours=3)
        assert t.name == "Algebra"
        assert t.priority == Priority.MEDIUM
        assert len(t.id) == 8

    def test_ids_are_unique(self):
        assert Topic(name="A", hours=1).id != Topic(name="A", hours=1).id

    @pytest.mark.parametrize("raw,expected", [
        ("High", Priority.HIGH),
        ("hoch", Priority.HIGH),
        ("M", Priority.MEDIUM),
        ("niedrig", Priority.LOW),
        (" low ", Priority.LOW),
    ])
    def test_priority_aliases(self, raw, expected):
        assert Topic(name="A", priority=raw, hours=1).priority == expected

    def test_unknown_priority_raises(self):
        with pytest.raises(ValidationError, match="Unbekannte Priorität"):
            Topic(name="A", priority="urgent", hours=1)

    def test_empty_name_raises(self):
        with pytest.raises(ValidationError):
            Topic(name="   ", hours=1)

    @pytest.mark.parametrize("hours", [0, -2])
    def test_hours_must_be_positive(self, hours):
        with pytest.raises(ValidationError):
            Topic(name="A", hours=hours)

    def test_topic_is_frozen(self):
        t = Topic(name="A", hours=1)
        with pytest.raises(ValidationError):
            t.hours = 2

    def test_priority_rank_order(self):
        ranked = sorted([Priority.LOW, Priority.HIGH, Priority.MEDIUM], key=lambda p: p.rank)
        assert ranked == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]


# ─── ANFRAGE & MACHBARKEIT ────────────────────────────────────────────────────

class TestStudyRequest:
    def test_requires_topics(self):
        with pytest.raises(ValidationError):
            StudyRequest(exam_date=TODAY, daily_hours=2, topics=[])

    @pytest.mark.parametrize("daily", [0, 25])
    def test_daily_hours_range(self, daily):
        with pytest.raises(ValidationError):
            _request(daily=daily)

    def test_total_hours_and_horizon(self):
        req = _request(days=5, topics=[Topic(name="A", hours=1.1), Topic(name="B", hours=2.2)])
        assert req.total_hours == 3.3
        assert req.horizon_days(TODAY) == 5

    def test_feasible_plan(self):
        report = _request().validate_feasibility(TODAY)
        assert report.is_feasible
        assert report.errors == []
        assert report.warnings == []

    def test_exam_not_in_future(self):
        report = _request(days=0).validate_feasibility(TODAY)
        assert not report.is_feasible
        assert len(report.errors) == 1
        assert "nicht in der Zukunft" in report.errors[0]

    def test_demand_exceeds_capacity(self):
        report = _request(topics=[Topic(name="A", hours=7)]).validate_feasibility(TODAY)
        assert not report.is_feasible
        assert "übersteigt die Kapazität" in report.errors[0]

    def test_tight_plan_warns(self):
        report = _request(topics=[Topic(name="A", hours=5.5)]).validate_feasibility(TODAY)
        assert report.is_feasible
        assert "knapper Plan" in report.warnings[0]

    def test_daily_hours_below_min_block(self):
        report = _request(daily=0.5, topics=[Topic(name="A", hours=1)]) \
            .validate_feasibility(TODAY)
        assert not report.is_feasible
        assert any("keinen Lernblock" in e for e in report.errors)

    def test_custom_min_free_hours(self):
        report = _request(daily=1.5).validate_feasibility(
            TODAY, SchedulingConfig(min_free_hours=2))
        assert not report.is_feasible

    def test_duplicate_names_warn(self):
        report = _request(days=10, topics=[Topic(name="A", hours=1),
                                           Topic(name="A", hours=2)]).validate_feasibility(TODAY)
        assert report.is_feasible
        assert any("Mehrfach" in w for w in report.warnings)


# ─── TAGESPLAN ────────────────────────────────────────────────────────────────

class TestDaySchedule:
    def _day(self) -> DaySchedule:
        return DaySchedule(date=TODAY, day_number=1, available_hours=4)

    def test_new_day_is_free(self):
        day = self._day()
        assert day.is_free
        assert day.remaining_hours == 4

    def test_same_topic_merges(self):
        day = self._day()
        day.add_session("Calculus", 2, SessionKind.NEW)
        day.add_session("Physics", 1, SessionKind.NEW)
        day.add_session("Calculus", 1, SessionKind.REVIEW)
        assert [e.topic_name for e in day.topics] == ["Calculus", "Physics"]
        entry = day.get_topic("Calculus")
        assert entry.total_hours == 3
        assert entry.hours_of(SessionKind.NEW) == 2
        assert entry.has_review
        assert day.total_scheduled_hours == 4
        assert day.remaining_hours == 0

    def test_get_topic_is_exact(self):
        day = self._day()
        day.add_session("Calculus", 1, SessionKind.NEW)
        assert day.get_topic("calculus") is None

    def test_decimal_hours_do_not_drift(self):
        entry = TopicDaySchedule(topic_name="A")
        for _ in range(3):
            entry.add_session(0.1, SessionKind.NEW)
        assert entry.total_hours == 0.3

    def test_session_hours_positive(self):
        day = self._day()
        with pytest.raises(ValidationError):
            day.add_session("A", 0, SessionKind.NEW)


# ─── GESAMTPLAN ───────────────────────────────────────────────────────────────

class TestStudyPlan:
    def _plan(self) -> StudyPlan:
        days = [DaySchedule(date=TODAY + timedelta(days=i), day_number=i + 1,
                            available_hours=2) for i in range(3)]
        days[0].add_session("B", 2, SessionKind.NEW)
        days[1].add_session("A", 1, SessionKind.NEW)
        days[2].add_session("B", 1, SessionKind.REVIEW)
        req = _request(topics=[Topic(name="A", hours=1), Topic(name="B", hours=2)])
        return StudyPlan(request=req, today=TODAY, days=days)

    def test_totals(self):
        plan = self._plan()
        assert plan.total_days == 3
        assert plan.total_scheduled_hours == 4
        assert plan.total_available_hours == 6

    def test_topic_lookups(self):
        plan = self._plan()
        assert plan.topic_names() == ["B", "A"]
        assert plan.new_hours("B") == 2
        assert plan.first_day("A") == 2
        assert plan.review_days("B") == [3]
        assert plan.first_day("C") is None

    def test_json_roundtrip(self, tmp_path):
        plan = self._plan()
        path = tmp_path / "sub" / "plan.json"
        plan.save_json(path)
        assert path.exists()
        assert StudyPlan.load_json(path) == plan

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StudyPlan.load_json(tmp_path / "fehlt.json")
