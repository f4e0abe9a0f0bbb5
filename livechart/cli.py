from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .console import build_controller
from .logger import LogManager


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grafico temperature con downsampling e auto-aggiornamento.")
    parser.add_argument("--config", type=Path, default=None, help="percorso di config.json")
    parser.add_argument("--endpoint", default=None, help="URL del servizio letture")
    parser.add_argument("--interval", type=int, default=None, help="secondi tra gli aggiornamenti (0 = off)")
    parser.add_argument("--max-points", type=int, default=None, help="punti massimi nel grafico")
    parser.add_argument("--html", default=None, help="file HTML in cui salvare il grafico")
    parser.add_argument("--log-dir", default=None, help="cartella dei file di log")
    parser.add_argument("--once", action="store_true", help="un solo aggiornamento e uscita")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> None:
    cfg = load_config(args.config).with_overrides(
        endpoint=args.endpoint,
        max_points=args.max_points,
        html_output=args.html,
        log_dir=args.log_dir,
    )
    if cfg.log_dir:
        LogManager.use_log_dir(cfg.log_dir)
    controller = build_controller(cfg)
    try:
        # primo disegno immediato, poi cadenza del timer
        await controller.refresh_now()
        if args.once:
            return
        controller.start()
        if args.interval is not None:
            controller.configure(args.interval)
        await asyncio.Event().wait()
    finally:
        controller.close()
