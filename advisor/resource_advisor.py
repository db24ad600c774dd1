"""Regelbasierter Ressourcen-Berater.

Ordnet ein Thema über feste Stichwortlisten einer Kategorie zu
(MATH, PROGRAMMING, sonst THEORY) und füllt die Vorlagen der Kategorie
mit Thema und Niveau. Alle Inhalte stammen aus ``AdvisorTables``;
kein Lernen, keine externen Abfragen, deterministisch.
"""

import logging
from typing import Optional

from config.schema import AdvisorTables, SubjectCategory
from models.resources import FlashcardAdvice, PracticeAdvice, ResourceBundle

logger = logging.getLogger(__name__)

# Anzeige-Zusatz für Wiederholungseinträge ("Calculus Review")
REVIEW_SUFFIX = " Review"


def clean_topic_name(topic_name: str) -> str:
    """Entfernt den Wiederholungs-Zusatz aus einem Anzeigenamen."""
    name = topic_name.strip()
    if name.endswith(REVIEW_SUFFIX):
        name = name[: -len(REVIEW_SUFFIX)].rstrip()
    return name


def _fill(template: str, **values: str) -> str:
    # Leere Platzhalter samt einem angrenzenden Leerzeichen entfernen;
    # Leerzeichen in den Werten selbst bleiben unverändert
    for key, value in values.items():
        if not value:
            placeholder = "{" + key + "}"
            template = template.replace(" " + placeholder, "").replace(placeholder + " ", "")
    return template.format(**values)


class ResourceAdvisor:
    """Erzeugt ResourceBundles aus versionierten Stichwort-/Vorlagentabellen."""

    def __init__(self, tables: Optional[AdvisorTables] = None) -> None:
        if tables is None:
            from config.defaults import default_advisor_tables
            tables = default_advisor_tables()
        self.tables = tables

    # ─── Klassifikation ───────────────────────────────────────────────────────

    def classify(self, topic_name: str) -> SubjectCategory:
        """Kategorie per Teilstring-Suche; erste passende Liste gewinnt."""
        lower = topic_name.lower()
        for category in (SubjectCategory.MATH, SubjectCategory.PROGRAMMING):
            keywords = self.tables.category_keywords.get(category, [])
            if any(kw in lower for kw in keywords):
                return category
        return SubjectCategory.THEORY

    # ─── Einzelbausteine ──────────────────────────────────────────────────────

    def key_concepts(self, topic_name: str, academic_level: str) -> list[str]:
        """Niveauabhängige Schlüsselbegriffe; Fallback aus dem Themennamen."""
        lower_topic = topic_name.lower()
        lower_level = academic_level.lower()
        for rule in self.tables.key_term_rules:
            if rule.matches_topic(lower_topic):
                return list(rule.resolve(lower_level))
        return [lower_topic, "concepts", "applications"]

    def book_suggestion(self, topic_name: str, academic_level: str) -> str:
        """Niveauabhängige Buchempfehlung."""
        lower_topic = topic_name.lower()
        lower_level = academic_level.lower()
        for rule in self.tables.book_rules:
            if rule.matches_topic(lower_topic):
                return str(rule.resolve(lower_level))
        return self.tables.default_book.format(topic=topic_name)

    # ─── Gesamtpaket ──────────────────────────────────────────────────────────

    def suggest(self, topic_name: str, academic_level: str) -> ResourceBundle:
        """Vollständiges Empfehlungspaket für Thema + Niveau."""
        topic = clean_topic_name(topic_name)
        level = academic_level.strip()
        category = self.classify(topic)
        template = self.tables.templates[category]
        book = self.book_suggestion(topic, level)
        values = {"topic": topic, "level": level, "book": book}

        logger.debug(f"Ressourcen für '{topic}' ({level or '-'}): {category.value}")

        return ResourceBundle(
            topic_name=topic,
            academic_level=level,
            category=category,
            how_to_learn=[_fill(s, **values) for s in template.how_to_learn],
            practice_advice=PracticeAdvice(
                amount=template.practice_amount,
                sources=[_fill(s, **values) for s in template.practice_sources],
            ),
            key_concepts=self.key_concepts(topic, level),
            book_suggestions=[_fill(template.book_advice, **values)]
            + [_fill(s, **values) for s in self.tables.common_book_tips],
            flashcard_advice=FlashcardAdvice(
                count=self.tables.flashcard_count,
                tool=self.tables.flashcard_tool,
            ),
        )


# ─── Modul-Funktionen mit Standardtabellen ────────────────────────────────────

_default_advisor: Optional[ResourceAdvisor] = None


def _advisor() -> ResourceAdvisor:
    global _default_advisor
    if _default_advisor is None:
        _default_advisor = ResourceAdvisor()
    return _default_advisor


def classify(topic_name: str) -> SubjectCategory:
    """Kategorie eines Themas mit den Standardtabellen."""
    return _advisor().classify(topic_name)


def suggest(topic_name: str, academic_level: str) -> ResourceBundle:
    """Empfehlungspaket mit den Standardtabellen."""
    return _advisor().suggest(topic_name, academic_level)
