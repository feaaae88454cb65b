from __future__ import annotations

import os
from dataclasses import dataclass, field

WORDBANK_URL = os.getenv(
    "WORDBANK_URL", "https://raw.githubusercontent.com/dwyl/english-words/master/words.txt"
)
URLBANK_URL = os.getenv(
    "URLBANK_URL", "https://drive.google.com/uc?export=download&id=1TF4RPuj8iFwpa-lyhxG67V8NDlktmTGi"
)
DEFAULT_RPM = 10
CHANNEL_FACTOR = 5  # channel capacity per worker


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def default_workers() -> int:
    return os.cpu_count() or 4


@dataclass(frozen=True)
class Settings:
    workers: int = field(default_factory=default_workers)
    rpm: int = DEFAULT_RPM
    top: int = 10
    debug: bool = False
    wordbank_url: str = WORDBANK_URL
    urlbank_url: str = URLBANK_URL
    timeout: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT", 30.0))

    @property
    def channel_capacity(self) -> int:
        return max(1, self.workers) * CHANNEL_FACTOR
