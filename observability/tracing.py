"""Timing helper for outbound gateway calls."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List


@contextmanager
def span(events: List[Dict[str, Any]], name: str) -> Iterator[Dict[str, Any]]:
    """Append ``{"span": name, "ms": elapsed, "ok": bool}`` to ``events`` on exit."""

    entry: Dict[str, Any] = {"span": name}
    start = time.perf_counter()
    try:
        yield entry
        entry["ok"] = True
    except BaseException:
        entry["ok"] = False
        raise
    finally:
        entry["ms"] = int((time.perf_counter() - start) * 1000)
        events.append(entry)


__all__ = ["span"]
