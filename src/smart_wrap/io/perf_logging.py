"""Slow-path warnings for the render pass.

A viewer re-runs classify and decorate whenever the visible window changes.
A stage slow enough to stall scrolling is logged once with the buffer size
and the calling stack.

// [LAW:one-source-of-truth] Stage budgets live in SLOW_STAGE_THRESHOLDS_MS.
"""

from __future__ import annotations

import logging
import time
import traceback
from collections.abc import Callable, Mapping
from contextlib import contextmanager


_enabled = True


def set_enabled(val: bool) -> None:
    global _enabled
    _enabled = val


SLOW_STAGE_THRESHOLDS_MS: dict[str, float] = {
    "smart_wrap.classify": 8.0,
    "smart_wrap.decorate_lines": 12.0,
    "smart_wrap.render_pass": 16.0,
}

_DEFAULT_THRESHOLD_MS = 16.0
_STACK_LIMIT = 40

Context = Mapping[str, object] | Callable[[], Mapping[str, object]]


def threshold_for(stage: str) -> float:
    return SLOW_STAGE_THRESHOLDS_MS.get(stage, _DEFAULT_THRESHOLD_MS)


@contextmanager
def monitor_slow_path(
    stage: str,
    *,
    logger: logging.Logger,
    context: Context | None = None,
    threshold_ms: float | None = None,
):
    """Warn with a stack when the wrapped block runs past the stage budget.

    context is evaluated only when the warning fires; pass a callable when
    building it costs anything.
    """
    if not _enabled:
        yield
        return
    budget_ms = threshold_for(stage) if threshold_ms is None else threshold_ms
    started_ns = time.perf_counter_ns()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter_ns() - started_ns) / 1_000_000
        if elapsed_ms >= budget_ms:
            fields = context() if callable(context) else (context or {})
            logger.warning(
                "perf threshold exceeded stage=%s elapsed_ms=%.2f threshold_ms=%.2f context=%s\n"
                "stacktrace:\n%s",
                stage,
                elapsed_ms,
                budget_ms,
                " ".join(f"{key}={fields[key]!r}" for key in sorted(fields)),
                "".join(traceback.format_stack(limit=_STACK_LIMIT)),
            )
