from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

log = logging.getLogger("sleuth.telemetry")


@contextmanager
def timed(stage: str, ctx: Dict[str, Any] | None = None) -> Iterator[Dict[str, Any]]:
    """Log elapsed ms for ``stage``.

    The yielded dict starts as a copy of ``ctx``; anything the caller adds to it
    is attached to the log record. ``outcome`` is ``ok`` unless the block raised.
    """
    fields: Dict[str, Any] = dict(ctx or {})
    start = time.perf_counter()
    try:
        yield fields
    except BaseException:
        fields.setdefault("outcome", "error")
        raise
    finally:
        fields.setdefault("outcome", "ok")
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        payload = {"stage": stage, "ms": elapsed_ms}
        payload.update(fields)
        log.info("%s took %d ms (%s)", stage, elapsed_ms, fields["outcome"], extra=payload)


__all__ = ["timed"]
