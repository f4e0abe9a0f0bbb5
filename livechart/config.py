from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .downsampling import DEFAULT_MAX_POINTS
from .logger import LogManager

log = LogManager("config").get_logger()

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = PROJECT_ROOT / "config.json"


@dataclass(frozen=True)
class EngineConfig:
    endpoint: str = "http://localhost:8080/temperature"
    max_points: int = DEFAULT_MAX_POINTS
    request_timeout: float = 10.0
    # il servizio restituisce le letture dalla piu' recente alla piu' vecchia
    newest_first: bool = True
    preferences_path: str = str(PROJECT_ROOT / "preferences.json")
    html_output: Optional[str] = None
    log_dir: Optional[str] = None

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Applica solo gli override non None (es. flag CLI assenti)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """Carica config.json se presente; chiavi sconosciute ignorate, default robusti."""
    cfg_path = Path(path) if path is not None else CONFIG_PATH
    defaults = EngineConfig()
    if not cfg_path.exists():
        return defaults

    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("il contenuto deve essere un oggetto JSON")
    except (OSError, ValueError) as e:
        log.warning("Config non valida (%s). Uso defaults.", e)
        return defaults

    known = {f.name for f in fields(EngineConfig)}
    overrides: Dict[str, Any] = {k: v for k, v in data.items() if k in known}
    ignored = sorted(set(data) - known)
    if ignored:
        log.warning("Chiavi di config sconosciute ignorate: %s", ", ".join(ignored))

    max_points = overrides.get("max_points")
    if max_points is not None and (not isinstance(max_points, int) or max_points < 2):
        log.warning("max_points '%s' non valido. Uso %d.", max_points, DEFAULT_MAX_POINTS)
        overrides.pop("max_points")

    log.info("Config caricata: %s", cfg_path)
    return replace(defaults, **overrides)
