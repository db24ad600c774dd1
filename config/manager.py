"""Konfigurationsmanager: Laden und Speichern von Konfiguration und Lernplan-Anfragen.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import PlannerConfig
from models.request import StudyRequest

logger = logging.getLogger(__name__)
console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header(title: str) -> str:
    return (
        "# ============================================\n"
        f"# Lernplan-Generator — {title}\n"
        f"# Erstellt: {date.today().isoformat()}\n"
        "# ============================================\n"
    )


_SECTION_COMMENTS = {
    "scheduling": (
        "Planung",
        "Blocklänge, Mindest-Restzeit pro Tag und Wiederholungsregel.\n"
        "Standard: Blöcke ≤ 2h, Tag ab < 1h frei gesperrt, Wiederholung 1h nach 2 Tagen.",
    ),
    "advisor": (
        "Ressourcen-Tabellen",
        "Stichwörter, Key-Concept- und Buch-Regeln, Vorlagen je Kategorie.\n"
        "Platzhalter in Vorlagen: {topic}, {level}, {book}.",
    ),
    "output": (
        "Ausgabe",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "planner_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py init' aus, um sie anzulegen."
            )
        try:
            raw = self._read_yaml(target)
            return PlannerConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"{e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> PlannerConfig:
        """Wie load(), aber ohne Datei gelten die Standardwerte."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            from config.defaults import default_planner_config
            logger.debug(f"Keine Konfiguration unter {target} – verwende Standardwerte")
            return default_planner_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header("Konfiguration") + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            if field not in cm:
                continue
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    # ─── Lernplan-Anfragen ───

    def load_request(self, path: Path) -> StudyRequest:
        """Lädt eine StudyRequest aus YAML (exam_date, daily_hours, academic_level, topics)."""
        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(f"Anfrage-Datei nicht gefunden: {target}")
        try:
            raw = self._read_yaml(target)
            return StudyRequest.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Anfrage-Datei ungültig: {target}\n"
                f"{e}"
            ) from e

    def save_request(self, request: StudyRequest, path: Path) -> Path:
        """Speichert eine StudyRequest als YAML."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        raw = json.loads(request.model_dump_json())
        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header("Lernplan-Anfrage") + "\n")
            yaml.dump(CommentedMap(raw), f)
        logger.info(f"Anfrage gespeichert: {target}")
        return target

    def _read_yaml(self, path: Path):
        with open(path, "r", encoding="utf-8") as f:
            return yaml.load(f)
