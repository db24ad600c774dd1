"""Excel-Export für den Lernplan (openpyxl)."""

from pathlib import Path
from typing import Optional

from advisor.resource_advisor import ResourceAdvisor
from analysis.quality_report import PlanQualityAnalyzer
from config.schema import PlannerConfig
from models.schedule import StudyPlan

from export.helpers import (
    COLORS, category_color, display_name, format_date, priority_color,
    session_color, session_label, today_str,
)


class ExcelExporter:
    """Exportiert einen StudyPlan in eine Excel-Datei (Übersicht, Themen, Ressourcen)."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_TAG_W     = 6
    COL_DATUM_W   = 16
    COL_THEMA_W   = 30
    COL_SESS_W    = 44
    COL_STD_W     = 12

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H  = 22

    def __init__(self, plan: StudyPlan, config: Optional[PlannerConfig] = None):
        from config.defaults import default_planner_config
        self.plan    = plan
        self.config  = config or default_planner_config()
        self.sched   = plan.scheduling
        self.advisor = ResourceAdvisor(self.config.advisor_tables())

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)
        self._sheet_themen(wb)
        if self.config.output.include_resources:
            self._sheet_ressourcen(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _align(self, wrap: bool = True, horizontal: str = "left"):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal=horizontal, vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], widths: list[int]) -> None:
        """Schreibt eine Kopfzeile und setzt die Spaltenbreiten."""
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, (text, width) in enumerate(zip(headers, widths), 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._align(wrap=False, horizontal="center")
            cell.border = border
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.row_dimensions[1].height = self.ROW_HEADER_H
        ws.freeze_panes = "A2"

    def _write_row(self, ws, row: int, values: list, color: Optional[str] = None,
                   bold: bool = False) -> None:
        from openpyxl.styles import Font
        border = self._thin_border()
        for col, value in enumerate(values, 1):
            c = ws.cell(row=row, column=col, value=value)
            c.alignment = self._align()
            c.border = border
            c.font = Font(bold=bold, size=9)
            if color:
                c.fill = self._fill(color)

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        """Tagesplan: eine Zeile je Tag und Thema."""
        from openpyxl.styles import Font
        ws = wb.create_sheet("Übersicht")
        self._write_header_row(
            ws,
            ["Tag", "Datum", "Thema", "Sitzungen", "Stunden"],
            [self.COL_TAG_W, self.COL_DATUM_W, self.COL_THEMA_W,
             self.COL_SESS_W, self.COL_STD_W],
        )

        row = 2
        for day in self.plan.days:
            usage = f"{day.total_scheduled_hours:g} / {day.available_hours:g}"
            if day.is_free:
                self._write_row(
                    ws, row,
                    [day.day_number, format_date(day.date), "—", "Keine Lerneinheiten", usage],
                    color=COLORS["free"],
                )
                row += 1
                continue
            for i, entry in enumerate(day.topics):
                self._write_row(
                    ws, row,
                    [
                        day.day_number if i == 0 else None,
                        format_date(day.date) if i == 0 else None,
                        display_name(entry),
                        "\n".join(session_label(s, self.sched) for s in entry.sessions),
                        usage if i == 0 else None,
                    ],
                    color=session_color(entry),
                )
                ws.row_dimensions[row].height = 14 * max(1, len(entry.sessions))
                row += 1

        row += 1
        req = self.plan.request
        info = (
            f"{self.config.output.plan_title} | Prüfung: {req.exam_date.strftime('%d.%m.%Y')} | "
            f"{req.daily_hours:g}h/Tag | Niveau: {req.academic_level or '-'} | "
            f"Erstellt: {today_str()}"
        )
        c = ws.cell(row=row, column=1, value=info)
        c.font = Font(italic=True, size=8, color="666666")

    # ─── Sheet: Themen ────────────────────────────────────────────────────────

    def _sheet_themen(self, wb) -> None:
        """Kennzahlen je Thema (Priorität, Tage, Wiederholung)."""
        ws = wb.create_sheet("Themen")
        self._write_header_row(
            ws,
            ["Thema", "Priorität", "Stunden", "Erster Tag", "Letzter Tag", "Wiederholung"],
            [self.COL_THEMA_W, 12, 10, 12, 12, 14],
        )
        report = PlanQualityAnalyzer().analyze(self.plan)
        for row, m in enumerate(report.topic_metrics, 2):
            self._write_row(
                ws, row,
                [m.topic_name, m.priority.value, m.new_hours, m.first_day,
                 m.last_day, f"Tag {m.review_day}" if m.review_day else "—"],
            )
            ws.cell(row=row, column=2).fill = self._fill(priority_color(m.priority))

        summary_row = len(report.topic_metrics) + 3
        self._write_row(
            ws, summary_row,
            ["Auslastung", f"{report.utilization:.0%}", report.scheduled_hours,
             f"Freie Tage: {report.free_days}", f"Puffer: {report.buffer_days}",
             f"Wdh.: {report.review_coverage:.0%}"],
            bold=True,
        )

    # ─── Sheet: Ressourcen ────────────────────────────────────────────────────

    def _sheet_ressourcen(self, wb) -> None:
        """Ressourcen-Empfehlungen je Thema (ein Block pro Thema)."""
        from openpyxl.styles import Font
        ws = wb.create_sheet("Ressourcen")
        self._write_header_row(ws, ["Abschnitt", "Empfehlung"], [24, 90])

        level = self.plan.request.academic_level
        row = 2
        for name in self.plan.topic_names():
            bundle = self.advisor.suggest(name, level)
            c = ws.cell(row=row, column=1, value=f"{bundle.topic_name} ({bundle.category.value})")
            c.font = Font(bold=True, size=10)
            c.fill = self._fill(category_color(bundle.category))
            ws.cell(row=row, column=2).fill = self._fill(category_color(bundle.category))
            row += 1

            sections = [
                ("So lernen", bundle.how_to_learn),
                ("Übungen", [bundle.practice_advice.amount] + bundle.practice_advice.sources),
                ("Bücher", bundle.book_suggestions),
                ("Schlüsselbegriffe", [", ".join(bundle.key_concepts)]),
                ("Karteikarten", [f"{bundle.flashcard_advice.count}: "
                                  f"{bundle.flashcard_advice.tool}"]),
            ]
            for label, items in sections:
                for i, text in enumerate(items):
                    self._write_row(ws, row, [label if i == 0 else None, text])
                    row += 1
            row += 1
