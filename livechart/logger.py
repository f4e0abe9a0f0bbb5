from __future__ import annotations

import logging
import os
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import Optional, Union

LOG_DIR_ENV = "LIVECHART_LOG_DIR"

CONSOLE_FMT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FMT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(lineno)d | %(message)s"


class LogManager:
    """
    Logger gerarchico 'livechart.*': file giornaliero + console.

    La cartella dei log e' ``$LIVECHART_LOG_DIR`` se impostata, altrimenti
    ``logs/`` accanto alla root; ``use_log_dir()`` la sposta a runtime
    (es. dalla config) sostituendo il solo file handler.
    """

    _configured: bool = False
    _base_logger_name: str = "livechart"
    _logfile_path: Optional[Path] = None

    def __init__(self, component: str = "engine", level: int = logging.INFO) -> None:
        self.component = component.strip() or "engine"
        self.level = level
        self._ensure_configured()

    @classmethod
    def _default_log_dir(cls) -> Path:
        env = os.environ.get(LOG_DIR_ENV)
        if env:
            return Path(env)
        # .../livechart/logger.py -> root = parent of 'livechart'
        return Path(__file__).resolve().parents[1] / "logs"

    @classmethod
    def _attach_file_handler(cls, base_logger: Logger, log_dir: Path) -> None:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / f"livechart_{datetime.now():%Y%m%d}.log"
        for h in list(base_logger.handlers):
            if isinstance(h, logging.FileHandler):
                if getattr(h, "baseFilename", None) == str(path):
                    cls._logfile_path = path
                    return
                base_logger.removeHandler(h)
                h.close()

        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FMT))
        base_logger.addHandler(fh)
        cls._logfile_path = path

    @classmethod
    def _ensure_configured(cls) -> None:
        if cls._configured:
            return

        base_logger = logging.getLogger(cls._base_logger_name)
        base_logger.setLevel(logging.DEBUG)
        base_logger.propagate = False

        cls._attach_file_handler(base_logger, cls._default_log_dir())

        has_console = any(
            isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
            for h in base_logger.handlers
        )
        if not has_console:
            sh = logging.StreamHandler()
            sh.setLevel(logging.INFO)
            sh.setFormatter(logging.Formatter(CONSOLE_FMT))
            base_logger.addHandler(sh)

        cls._configured = True
        base_logger.info("Logger configurato. File: %s", cls._logfile_path)

    @classmethod
    def use_log_dir(cls, log_dir: Union[str, Path]) -> Path:
        """Sposta il file di log in ``log_dir``; ritorna il nuovo percorso."""
        cls._ensure_configured()
        base_logger = logging.getLogger(cls._base_logger_name)
        cls._attach_file_handler(base_logger, Path(log_dir))
        base_logger.info("File di log: %s", cls._logfile_path)
        return cls._logfile_path

    def get_logger(self, level: Optional[int] = None) -> Logger:
        base = logging.getLogger(self._base_logger_name)
        logger = base.getChild(self.component)
        logger.setLevel(level if level is not None else self.level)
        return logger

    @classmethod
    def logfile_path(cls) -> Optional[Path]:
        return cls._logfile_path
