"""
Per-phase profiling of stringify, parse and the absent-value sweep.

Set ``JSONEXT_PROFILE`` in the environment to record, for each phase,
how often it ran, how long it took, how many nodes it touched and how
many tagged tokens it wrote or read. Without it the context manager
records nothing and the stats stay empty.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_PHASES = __debug__ and "JSONEXT_PROFILE" in os.environ


@dataclass
class PhaseStats:
    """Accumulated cost of one phase across calls."""

    phase: str
    calls: int = 0
    total_time_ns: int = 0
    nodes: int = 0
    tags: int = 0

    def record(self, duration_ns: int, nodes: int, tags: int) -> None:
        self.calls += 1
        self.total_time_ns += duration_ns
        self.nodes += nodes
        self.tags += tags

    @property
    def ns_per_node(self) -> float:
        return self.total_time_ns / self.nodes if self.nodes else 0.0


if PROFILE_PHASES:
    _phase_stats: dict[str, PhaseStats] = {}

    class ProfileContext:
        """
        Times one phase; the body fills in ``nodes`` and ``tags``.

        Exits normally or not, the call is recorded.
        """

        def __init__(self, phase: str) -> None:
            self.phase = phase
            self.nodes = 0
            self.tags = 0
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _phase_stats.setdefault(self.phase, PhaseStats(self.phase))
            stats.record(duration, self.nodes, self.tags)

    def get_phase_stats() -> dict[str, PhaseStats]:
        """Returns a snapshot of the statistics keyed by phase."""
        return dict(_phase_stats)

    def clear_phase_stats() -> None:
        _phase_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, phase: str) -> None:
            self.nodes = 0
            self.tags = 0

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_phase_stats() -> dict[str, PhaseStats]:
        return {}

    def clear_phase_stats() -> None:
        pass
