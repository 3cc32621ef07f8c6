from __future__ import annotations

import logging
import os
import sys


# Bavards en DEBUG, inutiles en prod.
_LOGGERS_BRUYANTS = ("sqlalchemy.engine", "httpx", "httpcore")


def configurer_logging(niveau: str | None = None) -> None:
    """Configuration de logging minimaliste.

    - format clé=valeur, sortie stdout (compatible Docker)
    - niveau configurable via `niveau` ou LOG_LEVEL (INFO par défaut)

    Idempotent : un second appel ne fait qu’ajuster le niveau.
    """

    niveau_str = (niveau or os.getenv("LOG_LEVEL", "INFO")).upper().strip()
    level = getattr(logging, niveau_str, logging.INFO)

    for nom in _LOGGERS_BRUYANTS:
        logging.getLogger(nom).setLevel(max(level, logging.WARNING))

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s",
    )
