from __future__ import annotations

import argparse
import signal
import sys
import threading
from typing import Any, Callable, List, Optional

from .config import DEFAULT_RPM, URLBANK_URL, WORDBANK_URL, Settings, default_workers
from .logging_cfg import setup_logging
from .pipeline import run
from .report import render
from .sources import SourceError


def _positive_int(raw: str) -> int:
    try:
        v = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}")
    if v < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {v}")
    return v


def _interrupt_handler(cancel: threading.Event, previous: Any) -> Callable[[int, Any], None]:
    """First SIGINT asks the fetcher to stop; a second one quits outright."""

    def handler(signum: int, frame: Any) -> None:
        if cancel.is_set():
            signal.signal(signal.SIGINT, previous)
            raise KeyboardInterrupt
        cancel.set()

    return handler


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="essay-wordrank",
        description="Count vocabulary words across a list of essays and print the most frequent ones.",
    )
    p.add_argument(
        "--workers",
        "--routines",
        dest="workers",
        type=_positive_int,
        default=default_workers(),
        help="number of parallel counting workers (default: logical CPU count)",
    )
    p.add_argument(
        "--rpm",
        type=_positive_int,
        default=DEFAULT_RPM,
        help=f"maximum essay requests per minute (default: {DEFAULT_RPM})",
    )
    p.add_argument("--top", type=_positive_int, default=10, help="number of words to report (default: 10)")
    p.add_argument("--debug", action="store_true", help="display debug messages")
    p.add_argument("--wordbank-url", default=WORDBANK_URL, help="line-delimited list of accepted words")
    p.add_argument("--urlbank-url", default=URLBANK_URL, help="line-delimited list of essay urls")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    settings = Settings(
        workers=args.workers,
        rpm=args.rpm,
        top=args.top,
        debug=args.debug,
        wordbank_url=args.wordbank_url,
        urlbank_url=args.urlbank_url,
    )

    cancel = threading.Event()
    previous = signal.getsignal(signal.SIGINT)
    signal.signal(signal.SIGINT, _interrupt_handler(cancel, previous))
    try:
        result = run(settings, cancel=cancel)
    except SourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    finally:
        signal.signal(signal.SIGINT, previous)

    render(result.ranking, out=sys.stdout, k=settings.top)
    return 130 if result.fetch.cancelled else 0


if __name__ == "__main__":
    raise SystemExit(main())
