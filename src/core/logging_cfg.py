from __future__ import annotations

import logging
import os
import sys
from typing import Optional

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    # 0 = warnings only (default), 1 = INFO, 2 = DEBUG
    level_map = {"0": logging.WARNING, "1": logging.INFO, "2": logging.DEBUG}
    lvl = level_map.get(os.getenv("LOG_LEVEL", "0"), logging.WARNING)
    if debug:
        lvl = logging.DEBUG

    log_file: Optional[str] = os.getenv("LOG_FILE")
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        # stdout is reserved for the report
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(level=lvl, format=FORMAT, handlers=[handler], force=True)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(lvl, logging.INFO))
