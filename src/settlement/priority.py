"""MagnitudeQueue — очередь участников по убыванию |amount| с детерминированным tie-break.

Binary heap (heapq) с ключом (-magnitude, participant): наибольшая
величина извлекается первой, при равенстве — меньший participant id.
Контракт — порядок извлечения, а не структура.
"""

import heapq
from typing import Iterable, Optional


class MagnitudeQueue:
    """Приоритетная очередь (participant, magnitude), magnitude > 0."""

    def __init__(self, items: Iterable[tuple[str, int]] = ()) -> None:
        self._heap: list[tuple[int, str]] = []
        for participant, magnitude in items:
            self.push(participant, magnitude)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, participant: str, magnitude: int) -> None:
        if magnitude <= 0:
            raise ValueError(f"magnitude must be positive, got {magnitude} for {participant!r}")
        heapq.heappush(self._heap, (-magnitude, participant))

    def pop(self) -> tuple[str, int]:
        """Извлечение (participant, magnitude) с наибольшей величиной."""
        neg_magnitude, participant = heapq.heappop(self._heap)
        return participant, -neg_magnitude

    def peek(self) -> Optional[tuple[str, int]]:
        if not self._heap:
            return None
        neg_magnitude, participant = self._heap[0]
        return participant, -neg_magnitude

    def total(self) -> int:
        """Суммарная величина в очереди."""
        return -sum(neg_magnitude for neg_magnitude, _ in self._heap)
