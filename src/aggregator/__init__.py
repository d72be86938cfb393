"""Session Aggregator — net-позиции участников из записей закрытой сессии."""

from .session_aggregator import (
    aggregate,
    aggregate_snapshot,
    positions_from_summary,
    summarize,
)

__all__ = [
    "aggregate",
    "aggregate_snapshot",
    "positions_from_summary",
    "summarize",
]
