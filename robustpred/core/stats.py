"""Counters of the stage at which adaptive predicates resolve.

Recording is opt-in and context-local: :func:`record_stages` installs a
:class:`StageStats` in a ``contextvars.ContextVar``, so concurrent threads or
tasks each see only their own recorder. Without an active recorder the
predicates pay a single context-variable lookup per call.
"""
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, Optional


class Stage(IntEnum):
    FAST = 1      # plain floating-point determinant
    PARTIAL = 2   # exact minors, rounded combination
    TAIL = 3      # first-order correction from subtraction tails
    EXACT = 4     # complete expansion


@dataclass
class PredicateStats:
    fast: int = 0
    partial: int = 0
    tail: int = 0
    exact: int = 0

    @property
    def calls(self) -> int:
        return self.fast + self.partial + self.tail + self.exact

    def add(self, stage: Stage, count: int = 1) -> None:
        name = Stage(stage).name.lower()
        setattr(self, name, getattr(self, name) + count)

    def to_dict(self) -> Dict[str, Any]:
        calls = self.calls
        return {
            'calls': calls,
            'fast': self.fast,
            'partial': self.partial,
            'tail': self.tail,
            'exact': self.exact,
            'exact_rate': (self.exact / calls) if calls else 0.0,
        }


@dataclass
class StageStats:
    predicates: Dict[str, PredicateStats] = field(default_factory=dict)

    def record(self, predicate: str, stage: Stage, count: int = 1) -> None:
        entry = self.predicates.get(predicate)
        if entry is None:
            entry = self.predicates[predicate] = PredicateStats()
        entry.add(stage, count)

    def __getitem__(self, predicate: str) -> PredicateStats:
        return self.predicates.setdefault(predicate, PredicateStats())

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: s.to_dict() for name, s in self.predicates.items()}


_RECORDER: contextvars.ContextVar[Optional[StageStats]] = contextvars.ContextVar(
    'robustpred_stage_recorder', default=None
)


@contextmanager
def record_stages(stats: Optional[StageStats] = None) -> Iterator[StageStats]:
    """Collect stage resolutions of every predicate call made inside the block.

    Example
    -------
        with record_stages() as stats:
            orient2d(a, b, c)
        print(format_stats_table(stats.to_dict()))
    """
    if stats is None:
        stats = StageStats()
    token = _RECORDER.set(stats)
    try:
        yield stats
    finally:
        _RECORDER.reset(token)


def record_resolution(predicate: str, stage: Stage, count: int = 1) -> None:
    recorder = _RECORDER.get()
    if recorder is not None:
        recorder.record(predicate, stage, count)


def format_stats_table(stats_dict) -> str:
    """Return a human readable multi-line table of per-stage resolutions."""
    if not stats_dict:
        return "<no stats>"
    header = ["predicate", "calls", "fast", "partial", "tail", "exact", "exact%"]
    rows = []
    for name in sorted(stats_dict.keys()):
        s = stats_dict[name]
        rows.append([
            name, str(s['calls']), str(s['fast']), str(s['partial']),
            str(s['tail']), str(s['exact']), f"{s['exact_rate'] * 100.0:6.2f}",
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            col_w[i] = max(col_w[i], len(v))

    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))

    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


__all__ = [
    'Stage', 'PredicateStats', 'StageStats',
    'record_stages', 'record_resolution', 'format_stats_table',
]
