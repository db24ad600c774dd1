"""Tests für Plan-Validierung und Qualitätsbericht."""

from datetime import date, timedelta

import pytest

from analysis.plan_validator import PlanValidator, ValidationReport
from analysis.quality_report import PlanQualityAnalyzer, PlanQualityReport
from config.schema import SchedulingConfig
from models.request import StudyRequest
from models.schedule import SessionKind, StudyPlan
from models.topic import Priority, Topic
from planner.scheduler import StudyScheduler


TODAY = date(2026, 3, 2)


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _plan(days: int, daily: float, topics: list[Topic]) -> StudyPlan:
    request = StudyRequest(
        exam_date=TODAY + timedelta(days=days), daily_hours=daily, topics=topics,
    )
    return StudyScheduler().build_plan(request, today=TODAY)


@pytest.fixture
def tight_plan() -> StudyPlan:
    """High 3h + Low 2h bei 2h/Tag über 3 Tage (komplett ausgelastet)."""
    return _plan(3, 2, [
        Topic(name="History", priority=Priority.LOW, hours=2),
        Topic(name="Calculus", priority=Priority.HIGH, hours=3),
    ])


@pytest.fixture
def relaxed_plan() -> StudyPlan:
    """Ein Thema mit 2h bei 4h/Tag über 10 Tage."""
    return _plan(10, 4, [Topic(name="Algebra", hours=2)])


def _constraints(report: ValidationReport, severity: str = "error") -> set[str]:
    return {v.constraint for v in report.violations if v.severity == severity}


# ─── PlanValidator ────────────────────────────────────────────────────────────

class TestPlanValidator:
    def test_generated_plan_is_valid(self, tight_plan):
        report = PlanValidator().validate(tight_plan)
        assert report.is_valid
        assert _constraints(report) == set()

    def test_skipped_review_is_warning(self, tight_plan):
        report = PlanValidator().validate(tight_plan)
        warnings = [v for v in report.violations if v.severity == "warning"]
        assert [v.entity for v in warnings] == ["History"]
        assert warnings[0].constraint == "review_skipped"
        assert "außerhalb des Zeitraums" in warnings[0].description

    def test_day_over_capacity(self, tight_plan):
        tight_plan.days[0].add_session("Calculus", 1, SessionKind.NEW)
        report = PlanValidator().validate(tight_plan)
        assert not report.is_valid
        assert {"day_capacity", "topic_hours"} <= _constraints(report)

    def test_inconsistent_day_total(self, tight_plan):
        tight_plan.days[1].total_scheduled_hours = 0.5
        report = PlanValidator().validate(tight_plan)
        assert "day_total" in _constraints(report)

    def test_inconsistent_entry_total(self, tight_plan):
        tight_plan.days[0].topics[0].sessions[0].hours = 1
        report = PlanValidator().validate(tight_plan)
        assert {"entry_total", "topic_hours"} <= _constraints(report)

    def test_review_on_wrong_day(self, relaxed_plan):
        relaxed_plan.days[2].topics = []
        relaxed_plan.days[2].total_scheduled_hours = 0
        relaxed_plan.days[3].add_session("Algebra", 1, SessionKind.REVIEW)
        report = PlanValidator().validate(relaxed_plan)
        assert _constraints(report) == {"review_offset"}

    def test_review_offset_from_config(self, relaxed_plan):
        """Explizite Config überstimmt die im Plan gespeicherten Parameter."""
        report = PlanValidator(SchedulingConfig(review_offset_days=1)).validate(relaxed_plan)
        assert "review_offset" in _constraints(report)

    def test_uses_parameters_stored_in_plan(self):
        """Ein mit Offset 3 erstellter Plan ist ohne explizite Config valide."""
        request = StudyRequest(
            exam_date=TODAY + timedelta(days=10), daily_hours=4,
            topics=[Topic(name="Algebra", hours=2)],
        )
        sched = SchedulingConfig(review_offset_days=3, review_hours=2)
        plan = StudyScheduler(sched).build_plan(request, today=TODAY)
        assert plan.scheduling == sched
        assert plan.review_days("Algebra") == [4]
        assert PlanValidator().validate(plan).is_valid

    def test_stored_parameters_survive_json(self, tmp_path):
        request = StudyRequest(
            exam_date=TODAY + timedelta(days=10), daily_hours=4,
            topics=[Topic(name="Algebra", hours=2)],
        )
        plan = StudyScheduler(SchedulingConfig(review_offset_days=1)).build_plan(
            request, today=TODAY)
        path = tmp_path / "plan.json"
        plan.save_json(path)
        loaded = StudyPlan.load_json(path)
        assert loaded.scheduling.review_offset_days == 1
        assert PlanValidator().validate(loaded).is_valid

    def test_missing_review_with_free_target_day(self, relaxed_plan):
        """Zieltag hat Platz, aber keine Wiederholung: Fehler statt Warnung."""
        relaxed_plan.days[2].topics = []
        relaxed_plan.days[2].total_scheduled_hours = 0
        report = PlanValidator().validate(relaxed_plan)
        assert not report.is_valid
        assert _constraints(report) == {"review_missing"}
        assert _constraints(report, "warning") == set()

    def test_missing_review_on_full_day_is_warning(self, relaxed_plan):
        relaxed_plan.days[2].topics = []
        relaxed_plan.days[2].total_scheduled_hours = 0
        relaxed_plan.days[2].add_session("Algebra", 3.5, SessionKind.NEW)
        report = PlanValidator().validate(relaxed_plan)
        assert "review_missing" not in _constraints(report)
        assert "review_skipped" in _constraints(report, "warning")

    def test_unknown_topic(self, relaxed_plan):
        relaxed_plan.days[5].add_session("Ghost", 1, SessionKind.NEW)
        report = PlanValidator().validate(relaxed_plan)
        assert _constraints(report) == {"unknown_topic"}

    def test_day_sequence_gap(self, relaxed_plan):
        relaxed_plan.days[1].day_number = 5
        report = PlanValidator().validate(relaxed_plan)
        assert "day_sequence" in _constraints(report)

    def test_horizon_mismatch(self, relaxed_plan):
        relaxed_plan.days.pop()
        report = PlanValidator().validate(relaxed_plan)
        assert _constraints(report) == {"horizon"}

    def test_validates_loaded_plan(self, tight_plan, tmp_path):
        path = tmp_path / "plan.json"
        tight_plan.save_json(path)
        assert PlanValidator().validate(StudyPlan.load_json(path)).is_valid

    def test_duplicate_topic_names(self):
        plan = _plan(6, 2, [Topic(name="Calculus", hours=2),
                            Topic(name="Calculus", hours=2)])
        report = PlanValidator().validate(plan)
        assert report.is_valid


# ─── PlanQualityAnalyzer ──────────────────────────────────────────────────────

class TestPlanQualityAnalyzer:
    def test_tight_plan_metrics(self, tight_plan):
        report = PlanQualityAnalyzer().analyze(tight_plan)
        assert isinstance(report, PlanQualityReport)
        assert report.utilization == 1.0
        assert report.free_days == 0
        assert report.buffer_days == 0
        assert report.review_coverage == 0.5

        calc, hist = report.topic_metrics
        assert calc.topic_name == "Calculus"
        assert (calc.first_day, calc.last_day, calc.review_day) == (1, 2, 3)
        assert calc.days_touched == 3
        assert calc.review_hours == 1
        assert hist.topic_name == "History"
        assert (hist.first_day, hist.last_day, hist.review_day) == (2, 3, None)

    def test_relaxed_plan_buffer(self, relaxed_plan):
        report = PlanQualityAnalyzer().analyze(relaxed_plan)
        assert report.scheduled_hours == 3
        assert report.available_hours == 40
        assert report.utilization == 0.075
        assert report.free_days == 8
        assert report.buffer_days == 7
        assert report.review_coverage == 1.0

    def test_duplicates_are_merged(self):
        plan = _plan(6, 2, [Topic(name="A", hours=1), Topic(name="A", hours=2)])
        report = PlanQualityAnalyzer().analyze(plan)
        assert len(report.topic_metrics) == 1
        assert report.topic_metrics[0].requested_hours == 3
        assert report.topic_metrics[0].new_hours == 3
