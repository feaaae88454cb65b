from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Sequence


def run_parallel(funcs: Sequence[Callable[[], Any]]) -> List[Any]:
    """
    Run every thunk on its own thread and return results in submission order.

    One thread per thunk: pipeline stages block on each other, so none may
    wait for a free pool slot. Once all have finished, the first exception
    in submission order is re-raised.
    """
    with ThreadPoolExecutor(max_workers=max(len(funcs), 1)) as ex:
        futs = [ex.submit(f) for f in funcs]
    return [f.result() for f in futs]
