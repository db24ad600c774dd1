"""Lernplan-Generator — Haupt-CLI.

Verwendung:
  python main.py init                          Standard-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py wizard                        Anfrage interaktiv erfassen
  python main.py plan anfrage.yaml             Lernplan berechnen
  python main.py plan --exam-date 2026-06-30 --hours 3 \\
         --topic "Calculus:High:6" --topic "History:Low:3"
  python main.py show output/lernplan.json     Gespeicherten Plan anzeigen
  python main.py validate output/lernplan.json Plan prüfen
  python main.py resources "Linear Algebra"    Lernressourcen anzeigen
  python main.py export output/lernplan.json   Excel + PDF exportieren
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade für Anfrage und Plan
DEFAULT_REQUEST_YAML = Path("output/anfrage.yaml")
DEFAULT_PLAN_JSON = Path("output/lernplan.json")


def _load_config_or_abort(path: Optional[Path] = None):
    """Lädt die Konfiguration (Standardwerte ohne Datei) oder bricht ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr, mgr.load_or_default(path)
    except ValueError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)


def _load_plan_or_abort(path: Path):
    from models.schedule import StudyPlan
    try:
        return StudyPlan.load_json(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red bold]Plan-Datei ungültig:[/red bold] {path}\n{e}")
        sys.exit(1)


def _parse_topic(raw: str):
    """'Name:Priorität:Stunden' → Topic. Priorität optional (Standard: Medium)."""
    from models.topic import Topic
    parts = [p.strip() for p in raw.rsplit(":", 2)]
    if len(parts) == 3:
        name, prio, hours = parts
    elif len(parts) == 2:
        name, hours = parts
        prio = "Medium"
    else:
        raise click.BadParameter(
            f"'{raw}' – erwartet 'Name:Priorität:Stunden'", param_hint="--topic")
    try:
        return Topic(name=name, priority=prio, hours=float(hours))
    except (ValueError, ValidationError) as e:
        raise click.BadParameter(f"'{raw}': {e}", param_hint="--topic") from e


def _print_plan(plan, config) -> None:
    """Gibt den Tagesplan als Rich-Tabelle aus."""
    from export.tui_renderer import render_plan_rows

    req = plan.request
    console.print(Panel(
        f"[bold]Prüfung:[/bold] {req.exam_date.strftime('%d.%m.%Y')}  |  "
        f"{req.daily_hours:g}h/Tag  |  Niveau: {req.academic_level or '-'}  |  "
        f"{plan.total_days} Tage, {plan.total_scheduled_hours:g}h verplant",
        title=config.output.plan_title,
        border_style="cyan",
    ))

    table = Table(box=box.ROUNDED, show_lines=True)
    table.add_column("Tag", style="bold", justify="right")
    table.add_column("Datum")
    table.add_column("Thema")
    table.add_column("Sitzungen")
    table.add_column("Std.", justify="right")
    for row in render_plan_rows(plan, plan.scheduling):
        style = "green" if row[2].endswith(" Review") else None
        table.add_row(*row, style=style)
    console.print(table)


def _export_plan(plan, config, excel: Optional[str], pdf: Optional[str]) -> None:
    if excel:
        from export.excel_export import ExcelExporter
        ExcelExporter(plan, config).export(Path(excel))
        console.print(f"[green]✓[/green] Excel gespeichert: {excel}")
    if pdf:
        from export.pdf_export import PdfExporter
        PdfExporter(plan, config).export(Path(pdf))
        console.print(f"[green]✓[/green] PDF gespeichert: {pdf}")


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
def cmd_init(force: bool):
    """Legt die Standard-Konfiguration an (config/planner_config.yaml)."""
    from config.defaults import default_planner_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] neu anlegen."
        )
        return
    mgr.save(default_planner_config())


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Alternative Konfigurationsdatei.")
def config_show(config_path: Optional[Path]):
    """Zeigt die aktive Konfiguration an."""
    mgr, config = _load_config_or_abort(config_path)
    sc = config.scheduling
    tables = config.advisor_tables()

    console.print(Panel(
        f"Standard: [bold]{config.default_daily_hours:g}h/Tag[/bold]  |  "
        f"Niveau: {config.default_academic_level or '-'}",
        title="Lernplan-Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Planung", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Max. Blocklänge", f"{sc.max_block_hours:g}h")
    table.add_row("Mindest-Restzeit pro Tag", f"{sc.min_free_hours:g}h")
    table.add_row("Wiederholung nach", f"{sc.review_offset_days} Tagen")
    table.add_row("Dauer Wiederholung", f"{sc.review_hours:g}h")
    console.print(table)

    table2 = Table(title=f"Stichwörter (Tabellen v{tables.tables_version})", box=box.ROUNDED)
    table2.add_column("Kategorie", style="bold")
    table2.add_column("Stichwörter")
    for category, keywords in tables.category_keywords.items():
        table2.add_row(category.value, ", ".join(keywords))
    table2.add_row("THEORY", "[dim](alles andere)[/dim]")
    console.print(table2)

    console.print(
        f"[bold]Regeln:[/bold] {len(tables.key_term_rules)} Key-Concept-Regeln | "
        f"{len(tables.book_rules)} Buch-Regeln  |  "
        f"[bold]Ausgabe:[/bold] {config.output.output_dir}/"
    )


# ─── WIZARD ───────────────────────────────────────────────────────────────────

@click.command("wizard")
@click.option("--output", "-o", default=str(DEFAULT_REQUEST_YAML),
              help="Pfad für die Anfrage-Datei (YAML).")
def cmd_wizard(output: str):
    """Erfasst Prüfungsdatum, Lernzeit und Themen interaktiv."""
    from config.wizard import run_wizard

    mgr, config = _load_config_or_abort()
    request = run_wizard(config)
    if request is None:
        return
    mgr.save_request(request, Path(output))
    console.print(f"[green]✓[/green] Anfrage gespeichert: {output}")
    console.print(f"Jetzt planen: [bold]python main.py plan {output}[/bold]")


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.command("plan")
@click.argument("anfrage", required=False,
                type=click.Path(exists=True, path_type=Path))
@click.option("--exam-date", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Prüfungsdatum (JJJJ-MM-TT).")
@click.option("--hours", type=float, help="Lernstunden pro Tag.")
@click.option("--level", default=None, help="Akademisches Niveau, z.B. 'Class 12 CBSE'.")
@click.option("--topic", "topics", multiple=True,
              help="Thema als 'Name:Priorität:Stunden' (mehrfach).")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Planungsbeginn statt heute (JJJJ-MM-TT).")
@click.option("--save-json", "json_path", default=None,
              help="Plan als JSON speichern.")
@click.option("--excel", default=None, help="Plan als Excel exportieren.")
@click.option("--pdf", default=None, help="Plan als PDF exportieren.")
@click.option("--stats", is_flag=True, default=False, help="Qualitätsbericht anzeigen.")
def cmd_plan(anfrage, exam_date, hours, level, topics, today, json_path, excel, pdf, stats):
    """Berechnet den Lernplan aus einer Anfrage-Datei oder aus Optionen."""
    from models.request import StudyRequest
    from planner.scheduler import SchedulingError, StudyScheduler

    mgr, config = _load_config_or_abort()
    start = today.date() if today else date.today()

    try:
        if anfrage is not None:
            request = mgr.load_request(anfrage)
        else:
            if exam_date is None or not topics:
                raise click.UsageError(
                    "Anfrage-Datei oder --exam-date und mindestens ein --topic angeben.")
            request = StudyRequest(
                exam_date=exam_date.date(),
                daily_hours=hours if hours is not None else config.default_daily_hours,
                academic_level=level if level is not None else config.default_academic_level,
                topics=[_parse_topic(t) for t in topics],
            )
    except (ValueError, ValidationError) as e:
        console.print(f"[red bold]Ungültige Eingabe:[/red bold]\n{e}")
        sys.exit(1)

    report = request.validate_feasibility(start, config.scheduling)
    if report.warnings or report.errors:
        report.print_rich()

    try:
        plan = StudyScheduler(config.scheduling).build_plan(request, today=start)
    except SchedulingError as e:
        console.print(Panel(str(e), title="Kein Lernplan möglich", border_style="red"))
        sys.exit(1)

    _print_plan(plan, config)

    if stats:
        from analysis.quality_report import PlanQualityAnalyzer
        PlanQualityAnalyzer().analyze(plan).print_rich()

    if json_path:
        plan.save_json(Path(json_path))
        console.print(f"[green]✓[/green] Plan gespeichert: {json_path}")

    _export_plan(plan, config, excel, pdf)


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("plan_json", type=click.Path(path_type=Path), default=str(DEFAULT_PLAN_JSON))
@click.option("--stats", is_flag=True, default=False, help="Qualitätsbericht anzeigen.")
def cmd_show(plan_json: Path, stats: bool):
    """Zeigt einen gespeicherten Lernplan an."""
    mgr, config = _load_config_or_abort()
    plan = _load_plan_or_abort(plan_json)
    _print_plan(plan, config)
    if stats:
        from analysis.quality_report import PlanQualityAnalyzer
        PlanQualityAnalyzer().analyze(plan).print_rich()


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("plan_json", type=click.Path(path_type=Path), default=str(DEFAULT_PLAN_JSON))
def cmd_validate(plan_json: Path):
    """Prüft einen gespeicherten Plan auf Regelverletzungen."""
    from analysis.plan_validator import PlanValidator

    plan = _load_plan_or_abort(plan_json)
    report = PlanValidator().validate(plan)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── RESOURCES ────────────────────────────────────────────────────────────────

@click.command("resources")
@click.argument("topic")
@click.option("--level", default=None, help="Akademisches Niveau.")
def cmd_resources(topic: str, level: Optional[str]):
    """Zeigt Lernressourcen-Empfehlungen für ein Thema an."""
    from advisor.resource_advisor import ResourceAdvisor
    from export.tui_renderer import render_resource_lines

    mgr, config = _load_config_or_abort()
    academic_level = level if level is not None else config.default_academic_level
    bundle = ResourceAdvisor(config.advisor_tables()).suggest(topic, academic_level)
    console.print(Panel(
        "\n".join(render_resource_lines(bundle)),
        title=f"Lernhilfe: {bundle.topic_name} ({bundle.academic_level or '-'})",
        border_style="cyan",
    ))


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("plan_json", type=click.Path(path_type=Path), default=str(DEFAULT_PLAN_JSON))
@click.option("--excel", default=None, help="Excel-Pfad (Standard: <output_dir>/lernplan.xlsx).")
@click.option("--pdf", default=None, help="PDF-Pfad (Standard: <output_dir>/lernplan.pdf).")
def cmd_export(plan_json: Path, excel: Optional[str], pdf: Optional[str]):
    """Exportiert einen gespeicherten Plan als Excel und/oder PDF."""
    mgr, config = _load_config_or_abort()
    plan = _load_plan_or_abort(plan_json)
    if excel is None and pdf is None:
        out_dir = Path(config.output.output_dir)
        excel = str(out_dir / "lernplan.xlsx")
        pdf = str(out_dir / "lernplan.pdf")
    _export_plan(plan, config, excel, pdf)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Lernplan-Generator: Themen + Prüfungsdatum → Tagesplan mit Wiederholungen.

    Starten Sie mit: python main.py wizard
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_wizard)
cli.add_command(cmd_plan)
cli.add_command(cmd_show)
cli.add_command(cmd_validate)
cli.add_command(cmd_resources)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
