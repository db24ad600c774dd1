"""PDF-Export für den Lernplan (fpdf2)."""

from pathlib import Path
from typing import Optional

from advisor.resource_advisor import ResourceAdvisor
from config.schema import PlannerConfig
from models.resources import ResourceBundle
from models.schedule import DaySchedule, StudyPlan

from export.helpers import (
    COLORS, hex_to_rgb, display_name, format_date, session_color,
    session_label, category_color, today_str,
)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts."""
    text = (
        text
        .replace("—", " - ")   # em dash —
        .replace("–", "-")      # en dash –
        .replace("•", "-")      # bullet •
        .replace("≤", "<=")     # ≤
        .replace("’", "'")      # ’
    )
    return text.encode("latin-1", "replace").decode("latin-1")


# ─── A4-Hochformat-Dimensionen ────────────────────────────────────────────────
# Portrait A4: 210 × 297 mm
# Nutzbare Breite (Margin 10 links+rechts): 190 mm
# Spalten: Tag(10) + Datum(28) + Thema(52) + Sitzungen(80) + Std.(20) = 190 mm ✓

_COLS = {
    "tag":   10,
    "datum": 28,
    "thema": 52,
    "sess":  80,
    "std":   20,
}
_ROW_HEADER_H  = 7    # mm
_LINE_H        = 4.5  # mm pro Sitzungszeile
_FONT_HEADER   = 9    # pt
_FONT_CONTENT  = 8    # pt
_PAGE_BOTTOM   = 280  # mm, danach neue Seite


class _PlanPdf:
    """Interner Wrapper um fpdf.FPDF für Lernplan-Seiten."""

    def __init__(self, title: str):
        from fpdf import FPDF

        class _Pdf(FPDF):
            def __init__(inner, t):
                super().__init__(orientation="P", unit="mm", format="A4")
                inner._plan_title = t
                inner._entity_title = ""
                inner.alias_nb_pages()
                inner.set_auto_page_break(auto=False)
                inner.set_margins(left=10, top=22, right=10)

            def header(inner):
                inner.set_font("Helvetica", "B", 11)
                inner.set_xy(10, 8)
                inner.cell(90, 7, _pdf_safe(inner._plan_title), border=0, align="L")
                inner.cell(0, 7, _pdf_safe(inner._entity_title), border=0, align="R")
                inner.ln(0)
                inner.set_draw_color(150, 150, 150)
                inner.line(10, 18, inner.w - 10, 18)

            def footer(inner):
                inner.set_y(-14)
                inner.set_font("Helvetica", "I", 7)
                inner.cell(
                    0, 8,
                    f"{today_str()}  |  Seite {inner.page_no()}/{{nb}}",
                    border=0, align="C",
                )

        self._pdf = _Pdf(title)

    def set_entity(self, title: str) -> None:
        self._pdf._entity_title = title

    def add_page(self) -> None:
        self._pdf.add_page()

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._pdf.output(str(path))

    # ─── Zellen-Zeichnung ─────────────────────────────────────────────────────

    def draw_cell(
        self,
        x: float, y: float,
        w: float, h: float,
        text: str = "",
        bg_hex: str | None = None,
        bold: bool = False,
        font_size: int = _FONT_CONTENT,
        text_color: tuple[int, int, int] = (0, 0, 0),
        align: str = "L",
    ) -> None:
        """Zeichnet eine Zelle mit Hintergrund, Rand und mehrzeiligem Text."""
        pdf = self._pdf

        if bg_hex:
            r, g, b = hex_to_rgb(bg_hex)
            pdf.set_fill_color(r, g, b)
            pdf.rect(x, y, w, h, style="F")

        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h, style="D")

        if text:
            style = "B" if bold else ""
            pdf.set_font("Helvetica", style, font_size)
            pdf.set_text_color(*text_color)

            lines = [ln for ln in _pdf_safe(text).split("\n") if ln]
            y_text = y + max(0.5, (h - len(lines) * _LINE_H) / 2)
            for line in lines:
                pdf.set_xy(x + 1, y_text)
                pdf.cell(w - 2, _LINE_H, line[:60], border=0, align=align)
                y_text += _LINE_H

            pdf.set_text_color(0, 0, 0)

    def draw_header_row(self, x: float, y: float) -> float:
        """Zeichnet die Kopfzeile und gibt die Y-Position danach zurück."""
        cols = [("Tag", _COLS["tag"]), ("Datum", _COLS["datum"]),
                ("Thema", _COLS["thema"]), ("Sitzungen", _COLS["sess"]),
                ("Std.", _COLS["std"])]
        cx = x
        for label, w in cols:
            self.draw_cell(
                cx, y, w, _ROW_HEADER_H, label,
                bg_hex=COLORS["header"],
                bold=True,
                font_size=_FONT_HEADER,
                text_color=(255, 255, 255),
                align="C",
            )
            cx += w
        return y + _ROW_HEADER_H

    def write_paragraph(self, text: str, bold: bool = False, size: int = 9) -> None:
        pdf = self._pdf
        pdf.set_x(10)
        pdf.set_font("Helvetica", "B" if bold else "", size)
        pdf.multi_cell(0, 5, _pdf_safe(text))


class PdfExporter:
    """Exportiert einen StudyPlan als PDF (Tagesplan + Ressourcen-Seiten)."""

    def __init__(self, plan: StudyPlan, config: Optional[PlannerConfig] = None):
        from config.defaults import default_planner_config
        self.plan    = plan
        self.config  = config or default_planner_config()
        self.sched   = plan.scheduling
        self.advisor = ResourceAdvisor(self.config.advisor_tables())
        self._total_w = sum(_COLS.values())
        self._table_x = 10.0

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erzeugt die PDF: Tagesplan, danach je Thema eine Ressourcen-Seite."""
        req = self.plan.request
        pdf = _PlanPdf(self.config.output.plan_title)
        pdf.set_entity(
            f"Prüfung {req.exam_date.strftime('%d.%m.%Y')} | {req.daily_hours:g}h/Tag"
        )
        pdf.add_page()
        self._draw_schedule(pdf)

        if self.config.output.include_resources:
            for name in self.plan.topic_names():
                bundle = self.advisor.suggest(name, req.academic_level)
                pdf.set_entity(f"Ressourcen: {bundle.topic_name}")
                pdf.add_page()
                self._draw_resources(pdf, bundle)

        pdf.save(output_path)

    # ─── Tagesplan ────────────────────────────────────────────────────────────

    def _draw_schedule(self, pdf: _PlanPdf) -> None:
        x = self._table_x
        y = pdf.draw_header_row(x, 22.0)

        for day in self.plan.days:
            h = self._day_height(day)
            if y + h > _PAGE_BOTTOM:
                pdf.add_page()
                y = pdf.draw_header_row(x, 22.0)
            y = self._draw_day(pdf, x, y, day)

    def _day_height(self, day: DaySchedule) -> float:
        if day.is_free:
            return _LINE_H + 2
        return sum(len(e.sessions) * _LINE_H + 2 for e in day.topics)

    def _draw_day(self, pdf: _PlanPdf, x: float, y: float, day: DaySchedule) -> float:
        """Zeichnet einen Tag (eine Zeile je Thema) und gibt Y danach zurück."""
        total_h = self._day_height(day)
        usage = f"{day.total_scheduled_hours:g}/{day.available_hours:g}"

        pdf.draw_cell(x, y, _COLS["tag"], total_h, str(day.day_number),
                      bold=True, align="C", bg_hex=COLORS["day"])
        pdf.draw_cell(x + _COLS["tag"], y, _COLS["datum"], total_h,
                      format_date(day.date), bg_hex=COLORS["day"])
        std_x = self._total_w - _COLS["std"] + x
        pdf.draw_cell(std_x, y, _COLS["std"], total_h, usage, align="C")

        cx = x + _COLS["tag"] + _COLS["datum"]
        if day.is_free:
            pdf.draw_cell(cx, y, _COLS["thema"] + _COLS["sess"], total_h,
                          "Keine Lerneinheiten", bg_hex=COLORS["free"],
                          text_color=(120, 120, 120))
            return y + total_h

        ry = y
        for entry in day.topics:
            row_h = len(entry.sessions) * _LINE_H + 2
            color = session_color(entry)
            pdf.draw_cell(cx, ry, _COLS["thema"], row_h, display_name(entry), bg_hex=color)
            pdf.draw_cell(
                cx + _COLS["thema"], ry, _COLS["sess"], row_h,
                "\n".join(session_label(s, self.sched) for s in entry.sessions),
                bg_hex=color,
            )
            ry += row_h
        return y + total_h

    # ─── Ressourcen ───────────────────────────────────────────────────────────

    def _draw_resources(self, pdf: _PlanPdf, bundle: ResourceBundle) -> None:
        p = pdf._pdf
        r, g, b = hex_to_rgb(category_color(bundle.category))
        p.set_fill_color(r, g, b)
        p.set_xy(10, 22)
        p.set_font("Helvetica", "B", 12)
        p.cell(0, 8, _pdf_safe(
            f"{bundle.topic_name} ({bundle.academic_level or '-'}) - {bundle.category.value}"
        ), border=0, fill=True)
        p.ln(10)

        sections = [
            ("1. So lernst du das:", bundle.how_to_learn),
            (f"2. Übungsaufgaben ({bundle.practice_advice.amount}):",
             bundle.practice_advice.sources),
            ("3. Bücher:", bundle.book_suggestions),
            ("4. Schlüsselbegriffe:", [", ".join(bundle.key_concepts)]),
            ("5. Karteikarten:", [f"{bundle.flashcard_advice.count} - "
                                  f"{bundle.flashcard_advice.tool}"]),
        ]
        for title, items in sections:
            pdf.write_paragraph(title, bold=True, size=10)
            for item in items:
                pdf.write_paragraph(f"- {item}")
            p.ln(2)
