"""Datenmodell für Lernressourcen-Empfehlungen (Pydantic v2)."""

from pydantic import BaseModel

from config.schema import SubjectCategory


class PracticeAdvice(BaseModel):
    """Wie viel üben und wo Aufgaben finden."""

    amount: str
    sources: list[str]


class FlashcardAdvice(BaseModel):
    """Karteikarten-Empfehlung."""

    count: str
    tool: str


class ResourceBundle(BaseModel):
    """Empfehlungspaket für ein Thema auf einem akademischen Niveau."""

    topic_name: str
    academic_level: str
    category: SubjectCategory
    how_to_learn: list[str]
    practice_advice: PracticeAdvice
    key_concepts: list[str]
    book_suggestions: list[str]
    flashcard_advice: FlashcardAdvice
