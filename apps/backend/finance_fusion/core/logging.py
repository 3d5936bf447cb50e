from __future__ import annotations

import logging
import sys

_FMT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(_FMT))
    root.addHandler(h)

    # SQL echo stays opt-in through the sqlalchemy.engine logger
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
