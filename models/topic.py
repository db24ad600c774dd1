"""Datenmodell für ein Lernthema (Pydantic v2)."""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sortierschlüssel: High (0) < Medium (1) < Low (2)."""
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: str) -> "Priority":
        """Akzeptiert 'high', 'H', 'Hoch', ... unabhängig von Groß-/Kleinschreibung."""
        key = value.strip().lower()
        for alias, prio in _PRIORITY_ALIASES.items():
            if key == alias:
                return prio
        raise ValueError(
            f"Unbekannte Priorität '{value}' (erlaubt: High, Medium, Low)")


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}

_PRIORITY_ALIASES = {
    "high": Priority.HIGH, "h": Priority.HIGH, "hoch": Priority.HIGH,
    "medium": Priority.MEDIUM, "m": Priority.MEDIUM, "mittel": Priority.MEDIUM,
    "low": Priority.LOW, "l": Priority.LOW, "niedrig": Priority.LOW,
}


class Topic(BaseModel):
    """Ein Thema mit Priorität und geschätztem Zeitaufwand."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:8])
    name: str
    priority: Priority = Priority.MEDIUM
    hours: float = Field(gt=0)      # geschätzte Lernstunden

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Themenname darf nicht leer sein.")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        if isinstance(v, str) and not isinstance(v, Priority):
            return Priority.parse(v)
        return v
