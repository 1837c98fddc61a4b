"""
L1 Domain — Download progress helpers (pure).

Human-readable sizes and progress milestones for the fetcher's logs.
No I/O, no network.
"""

from __future__ import annotations


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def _progress_step(done: int, total: int, last_pct: int, step: int = 10) -> int | None:
    """Return the new percentage if ``done`` crossed the next ``step`` mark.

    Returns None when there is nothing new to report, including when
    the server sent no Content-Length (``total`` is 0).
    """
    if total <= 0:
        return None
    pct = min(100, int(done * 100 / total))
    if pct >= last_pct + step:
        return pct - pct % step
    return None
