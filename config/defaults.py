from config.schema import (
    AdvisorTables,
    CategoryTemplate,
    KeywordRule,
    LevelVariant,
    OutputConfig,
    PlannerConfig,
    SchedulingConfig,
    SubjectCategory,
)


# ─── STICHWÖRTER JE KATEGORIE ─────────────────────────────────────────────────
# Reihenfolge ist Prüfreihenfolge: MATH vor PROGRAMMING. Alles andere → THEORY.

CATEGORY_KEYWORDS: dict[SubjectCategory, list[str]] = {
    SubjectCategory.MATH: [
        "calculus", "algebra", "geometry", "trigonometry", "probability",
        "statistics", "maths", "mathematics", "differential", "integral",
    ],
    SubjectCategory.PROGRAMMING: [
        "python", "java", "javascript", "coding", "programming",
        "data structures", "algorithms", "machine learning", "software",
        "html", "css", "react", "node",
    ],
}


# ─── KEY CONCEPTS ─────────────────────────────────────────────────────────────
# (topic_keywords, [(level_keywords, terms), ...], default_terms)

_KEY_TERMS = [
    (["calculus"], [
        (["class 11", "class 12"], ["limits", "derivatives", "applications of derivatives"]),
        (["engineering", "university"], ["differential calculus", "integral calculus", "multivariable calculus"]),
    ], ["derivatives", "integrals", "limits"]),
    (["algebra"], [
        (["class 9", "class 10"], ["linear equations", "quadratic equations", "polynomials"]),
    ], ["equations", "variables", "functions"]),
    (["shakespeare"], [
        (["class 9", "icse", "cbse"], ["Macbeth themes", "character analysis", "plot summary"]),
        (["ma", "literature"], ["critical analysis", "literary devices", "contextual interpretation"]),
    ], ["themes", "characters", "literary techniques"]),
    (["physics"], [
        (["class 11", "class 12"], ["mechanics", "thermodynamics", "electromagnetism"]),
    ], ["forces", "energy", "motion"]),
    (["chemistry"], [], ["molecules", "reactions", "bonds"]),
    (["biology"], [], ["cells", "genetics", "evolution"]),
    (["programming", "coding"], [
        (["1st year", "beginner"], ["syntax", "variables", "loops"]),
    ], ["algorithms", "data structures", "debugging"]),
    (["history"], [], ["timeline", "causes", "effects"]),
    (["english", "literature"], [], ["themes", "analysis", "structure"]),
]


# ─── BUCHEMPFEHLUNGEN ─────────────────────────────────────────────────────────

_BOOKS = [
    (["calculus"], "any", [
        (["engineering", "university"], "Thomas' Calculus or Stewart's Calculus"),
        (["class 12", "cbse"], "RD Sharma Class 12 Mathematics"),
    ], "Introduction to Calculus"),
    (["algebra"], "any", [
        (["class 10", "cbse"], "RD Sharma Class 10 Mathematics"),
    ], "Elementary Algebra"),
    (["physics"], "any", [
        (["class 12", "cbse"], "HC Verma Concepts of Physics"),
        (["engineering"], "Resnick, Halliday & Walker Physics"),
    ], "Fundamentals of Physics"),
    (["programming", "python"], "all", [],
     "Automate the Boring Stuff with Python or Python Crash Course"),
]


# ─── VORLAGEN JE KATEGORIE ────────────────────────────────────────────────────

CATEGORY_TEMPLATES: dict[SubjectCategory, CategoryTemplate] = {
    SubjectCategory.MATH: CategoryTemplate(
        how_to_learn=[
            "Focus on understanding formulas and practicing derivations. "
            "Watch videos that solve problems step-by-step.",
            'Search for "{topic} {level} solved examples" on YouTube',
            "Don't just memorize - understand the logic behind each step",
        ],
        practice_amount="20-30 problems per day",
        practice_sources=[
            'Search for "{topic} problem set with solutions"',
            'Look for "{topic} {level} practice worksheet PDF"',
            "Practice is key - solve problems daily to build muscle memory",
        ],
        book_advice=(
            'For {level}, common books are "{book}". '
            'Search for "engineering mathematics 1 book pdf" or similar.'
        ),
    ),
    SubjectCategory.PROGRAMMING: CategoryTemplate(
        how_to_learn=[
            "You must code along with the tutorial. Don't just watch.",
            'Search for "{topic} projects for beginners" or "{topic} crash course"',
            "Set up a development environment and practice coding immediately",
        ],
        practice_amount="Build 2-3 small projects",
        practice_sources=[
            "Solve problems on platforms like HackerRank or LeetCode for this topic",
            'Search for "{topic} coding challenges" or "{topic} mini projects"',
            "GitHub has tons of beginner-friendly project ideas",
        ],
        book_advice=(
            'Look for practical books like "Automate the Boring Stuff with Python" '
            'or "Head First Java" depending on your language.'
        ),
    ),
    SubjectCategory.THEORY: CategoryTemplate(
        how_to_learn=[
            "Focus on concepts, definitions, and case studies. "
            "Watch documentary-style videos or overview lectures.",
            'Search for "{topic} {level} concepts explained" on YouTube',
            "Create mind maps to connect related concepts",
        ],
        practice_amount="Focus on long and short answer questions",
        practice_sources=[
            'Search for "{topic} important questions" or "{topic} notes"',
            'Look for "{level} {topic} question bank PDF"',
            "Practice explaining concepts in your own words",
        ],
        book_advice=(
            "Look for textbooks by your university's prescribed author. "
            'Search for "{topic} textbook pdf" or "{level} {topic} notes".'
        ),
    ),
}

COMMON_BOOK_TIPS: list[str] = [
    'Search for "{topic} {level} textbook PDF" on Google Scholar',
    "Check your library for books specifically recommended for {level} students",
]


def default_advisor_tables() -> AdvisorTables:
    """Standard-Tabellen des Ressourcen-Beraters (Version 1.0)."""
    return AdvisorTables(
        tables_version="1.0",
        category_keywords={c: list(kws) for c, kws in CATEGORY_KEYWORDS.items()},
        key_term_rules=[
            KeywordRule(
                topic_keywords=topics,
                variants=[LevelVariant(level_keywords=lv, result=terms)
                          for lv, terms in variants],
                default=default,
            )
            for topics, variants, default in _KEY_TERMS
        ],
        book_rules=[
            KeywordRule(
                topic_keywords=topics,
                match=match,
                variants=[LevelVariant(level_keywords=lv, result=book)
                          for lv, book in variants],
                default=default,
            )
            for topics, match, variants, default in _BOOKS
        ],
        templates={c: t.model_copy(deep=True) for c, t in CATEGORY_TEMPLATES.items()},
        common_book_tips=list(COMMON_BOOK_TIPS),
    )


def default_planner_config() -> PlannerConfig:
    """Vollständige Standardkonfiguration.

    Lernblöcke ≤ 2h, Tage mit < 1h Rest werden übersprungen,
    Wiederholung (1h) zwei Tage nach dem ersten Lerntag.
    """
    return PlannerConfig(
        default_academic_level="",
        default_daily_hours=3.0,
        scheduling=SchedulingConfig(),
        advisor=default_advisor_tables(),
        output=OutputConfig(),
    )
