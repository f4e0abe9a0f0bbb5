from __future__ import annotations

import asyncio
from typing import List, Optional

from livechart.cli import parse_args, run
from livechart.logger import LogManager


def main(argv: Optional[List[str]] = None) -> None:
    """Avvia il motore di refresh da riga di comando."""
    logger = LogManager("cli").get_logger()
    args = parse_args(argv)
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrotto dall'utente")
    except Exception as exc:
        logger.error("Errore critico: %s", exc, exc_info=True)
        raise


if __name__ == "__main__":
    main()
