from __future__ import annotations

import json
import logging
import sys
from typing import Optional, Sequence, TextIO

from counting import RankedEntry

logger = logging.getLogger(__name__)

HEADER = "Top {k} words that occurred the most in the provided articles:"


def render(ranking: Sequence[RankedEntry], out: Optional[TextIO] = None, k: int = 10) -> None:
    """Indented JSON object in rank order; plain `word: count` lines if that fails."""
    out = out or sys.stdout
    message = HEADER.format(k=k)
    try:
        body = json.dumps({e.word: e.count for e in ranking}, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as err:
        logger.warning("unable to display result in json form: %s", err)
        out.write(message + "\n")
        for e in ranking:
            out.write(f"{e.word}: {e.count}\n")
        out.flush()
        return
    out.write(message + "\n" + body + "\n")
    out.flush()
