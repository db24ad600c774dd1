from models.topic import Topic, Priority
from models.request import StudyRequest, FeasibilityReport
from models.schedule import (
    SessionKind,
    ScheduleSession,
    TopicDaySchedule,
    DaySchedule,
    StudyPlan,
)
from models.resources import ResourceBundle, PracticeAdvice, FlashcardAdvice

__all__ = [
    "Topic",
    "Priority",
    "StudyRequest",
    "FeasibilityReport",
    "SessionKind",
    "ScheduleSession",
    "TopicDaySchedule",
    "DaySchedule",
    "StudyPlan",
    "ResourceBundle",
    "PracticeAdvice",
    "FlashcardAdvice",
]
