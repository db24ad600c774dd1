from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional
from enum import Enum


class SubjectCategory(str, Enum):
    MATH = "MATH"
    PROGRAMMING = "PROGRAMMING"
    THEORY = "THEORY"


# ─── PLANUNG (Scheduler-Parameter) ───

class SchedulingConfig(BaseModel):
    """Parameter der Lernplan-Heuristik.

    Die Defaults entsprechen dem festen Regelwerk:
    - Lernblöcke von höchstens 2 Stunden
    - Ein Tag wird nur belegt, solange noch ≥ 1 Stunde frei ist
    - Eine Wiederholung (1 Stunde) genau 2 Tage nach dem ersten Lerntag
    """
    # Maximale Länge eines Lernblocks in Stunden
    max_block_hours: float = Field(2.0, gt=0, le=12,
        description="Maximale Blocklänge (Stunden)")
    # Mindestens so viele freie Stunden muss ein Tag haben, um belegt zu werden
    min_free_hours: float = Field(1.0, gt=0, le=12,
        description="Mindest-Restkapazität eines Tages (Stunden)")
    # Abstand der Wiederholung zum ersten Lerntag eines Themas
    review_offset_days: int = Field(2, ge=1, le=30,
        description="Wiederholung n Tage nach dem ersten Lerntag")
    # Dauer einer Wiederholungseinheit
    review_hours: float = Field(1.0, gt=0, le=12,
        description="Dauer einer Wiederholung (Stunden)")


# ─── RESSOURCEN-TABELLEN ───

class LevelVariant(BaseModel):
    """Ergebnis für ein bestimmtes akademisches Niveau."""
    # Teilstrings, die im (kleingeschriebenen) Niveau vorkommen müssen (eines reicht)
    level_keywords: list[str]
    # Rückgabewert: Begriffsliste (Key Concepts) oder Buchtitel
    result: list[str] | str


class KeywordRule(BaseModel):
    """Eine Regel: Themen-Schlüsselwörter → niveauabhängiges Ergebnis.

    Varianten werden in Reihenfolge geprüft; die erste passende gewinnt,
    sonst gilt ``default``.
    """
    # Teilstrings im (kleingeschriebenen) Thema
    topic_keywords: list[str] = Field(min_length=1)
    # "any": ein Schlüsselwort genügt, "all": alle müssen vorkommen
    match: Literal["any", "all"] = "any"
    variants: list[LevelVariant] = Field(default_factory=list)
    default: list[str] | str

    def matches_topic(self, lower_topic: str) -> bool:
        hits = [kw in lower_topic for kw in self.topic_keywords]
        return all(hits) if self.match == "all" else any(hits)

    def resolve(self, lower_level: str) -> list[str] | str:
        for variant in self.variants:
            if any(kw in lower_level for kw in variant.level_keywords):
                return variant.result
        return self.default


class CategoryTemplate(BaseModel):
    """Textbausteine einer Fachkategorie.

    Platzhalter: ``{topic}``, ``{level}``, ``{book}``.
    """
    how_to_learn: list[str]
    practice_amount: str
    practice_sources: list[str]
    book_advice: str


class AdvisorTables(BaseModel):
    """Versionierte Stichwort- und Vorlagentabellen des Ressourcen-Beraters."""
    # Version der Tabellen (wird bei inhaltlichen Änderungen erhöht)
    tables_version: str = "1.0"
    # Stichwörter je Kategorie; geprüft wird immer MATH vor PROGRAMMING
    # (ResourceAdvisor.classify), THEORY ist Fallback ohne Stichwörter
    category_keywords: dict[SubjectCategory, list[str]]
    # Regeln für Key Concepts (Ergebnis: Liste)
    key_term_rules: list[KeywordRule]
    # Regeln für niveauabhängige Buchempfehlung (Ergebnis: String)
    book_rules: list[KeywordRule]
    # Fallback-Buch, falls keine Regel greift
    default_book: str = "Introduction to {topic} or Fundamentals of {topic}"
    # Vorlagen je Kategorie
    templates: dict[SubjectCategory, CategoryTemplate]
    # Zusätzliche Buch-Hinweise für alle Kategorien
    common_book_tips: list[str] = Field(default_factory=list)
    # Karteikarten-Empfehlung
    flashcard_count: str = "5-7 flashcards"
    flashcard_tool: str = (
        "Use Anki or Quizlet to create digital flashcards for key terms and definitions"
    )

    @model_validator(mode='after')
    def validate_templates(self):
        """Jede Kategorie braucht eine Vorlage; THEORY darf keine Stichwörter haben."""
        missing = [c.value for c in SubjectCategory if c not in self.templates]
        if missing:
            raise ValueError(f"Vorlagen fehlen für Kategorie(n): {', '.join(missing)}")
        if self.category_keywords.get(SubjectCategory.THEORY):
            raise ValueError("THEORY ist die Fallback-Kategorie und hat keine Stichwörter")
        for rule in self.key_term_rules:
            if isinstance(rule.default, str):
                raise ValueError(
                    f"Key-Term-Regel {rule.topic_keywords} muss eine Liste liefern")
        for rule in self.book_rules:
            if not isinstance(rule.default, str):
                raise ValueError(
                    f"Buch-Regel {rule.topic_keywords} muss einen Titel liefern")
        return self


# ─── AUSGABE ───

class OutputConfig(BaseModel):
    """Ausgabe-Pfade und Anzeige-Optionen."""
    # Verzeichnis für JSON-, Excel- und PDF-Dateien
    output_dir: str = Field("output", description="Ausgabeverzeichnis")
    # Titel auf Excel-/PDF-Ausgaben
    plan_title: str = Field("Lernplan", description="Titel der Exporte")
    # Ressourcen-Abschnitt in Exporten aufnehmen
    include_resources: bool = Field(True,
        description="Ressourcen-Empfehlungen exportieren")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Lernplan-Generators."""
    # Vorgabe für das akademische Niveau (z.B. "Class 12 CBSE")
    default_academic_level: str = Field("", description="Standard-Niveau")
    # Vorgabe für verfügbare Lernstunden pro Tag
    default_daily_hours: float = Field(3.0, gt=0, le=24,
        description="Standard-Lernstunden pro Tag")
    # Parameter der Planungs-Heuristik
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    # Stichwort- und Vorlagentabellen
    advisor: Optional[AdvisorTables] = None
    # Ausgabe-Optionen
    output: OutputConfig = Field(default_factory=OutputConfig)

    def advisor_tables(self) -> AdvisorTables:
        """Gibt die konfigurierten Tabellen zurück, sonst die Standardtabellen."""
        if self.advisor is not None:
            return self.advisor
        from config.defaults import default_advisor_tables
        return default_advisor_tables()
