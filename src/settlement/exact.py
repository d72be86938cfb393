"""Exact search — разбиение участников на максимум zero-sum групп.

Минимальное число переводов для n ненулевых участников равно n - k, где
k — максимальное число непересекающихся групп с нулевой суммой (каждая
группа без zero-sum подгрупп закрывается ровно |group| - 1 переводами).
Задача NP-трудная, поэтому поиск ограничен бюджетом узлов.

Depth-first branch-and-bound:
- pivot — участник с наименьшим id среди оставшихся
- перебор zero-sum подмножеств, содержащих pivot (без продолжения
  подмножества, уже давшего ноль: его расширение не добавит групп)
- отсечение: groups + len(remaining) // 2 <= best (в группе минимум 2 участника)

Каждый шаг перебора расходует один узел бюджета; исчерпание бюджета
прерывает поиск целиком (результат без групп, exhausted=True).
Порядок перебора фиксирован, поэтому результат детерминирован.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional


@dataclass(frozen=True)
class ExactSearchResult:
    """Результат exact search."""

    # Группы участников (в порядке обнаружения); None если бюджет исчерпан
    groups: Optional[tuple[tuple[str, ...], ...]]
    nodes: int
    exhausted: bool

    @property
    def transfer_count(self) -> Optional[int]:
        """Число переводов оптимального плана (n - k)."""
        if self.groups is None:
            return None
        return sum(len(group) for group in self.groups) - len(self.groups)


class _BudgetExhausted(Exception):
    pass


class ZeroSumPartitionSearch:
    """Поиск максимального разбиения на zero-sum группы в пределах бюджета узлов."""

    def __init__(self, amounts: Mapping[str, int], budget: int) -> None:
        """
        Args:
            amounts: {participant: signed amount}, Σ == 0; нулевые суммы игнорируются
            budget: максимум узлов перебора (> 0)
        """
        if budget <= 0:
            raise ValueError(f"budget must be positive, got {budget}")

        self._participants = sorted(p for p, a in amounts.items() if a != 0)
        self._amounts = [amounts[p] for p in self._participants]
        self._budget = budget
        self._upper_bound = len(self._participants) // 2

        self._nodes = 0
        self._best: Optional[list[tuple[int, ...]]] = None

    def run(self) -> ExactSearchResult:
        if not self._participants:
            return ExactSearchResult(groups=(), nodes=0, exhausted=False)

        try:
            self._search(tuple(range(len(self._participants))), [])
        except _BudgetExhausted:
            return ExactSearchResult(groups=None, nodes=self._nodes, exhausted=True)

        assert self._best is not None
        groups = tuple(
            tuple(self._participants[i] for i in group) for group in self._best
        )
        return ExactSearchResult(groups=groups, nodes=self._nodes, exhausted=False)

    def _tick(self) -> None:
        self._nodes += 1
        if self._nodes > self._budget:
            raise _BudgetExhausted()

    def _is_optimal(self) -> bool:
        return self._best is not None and len(self._best) >= self._upper_bound

    def _search(self, remaining: tuple[int, ...], groups: list[tuple[int, ...]]) -> None:
        self._tick()

        if not remaining:
            if self._best is None or len(groups) > len(self._best):
                self._best = list(groups)
            return

        if self._best is not None and len(groups) + len(remaining) // 2 <= len(self._best):
            return

        pivot, rest = remaining[0], remaining[1:]
        for subset in self._zero_sum_subsets(self._amounts[pivot], rest, 0):
            chosen = set(subset)
            groups.append((pivot,) + subset)
            self._search(tuple(i for i in rest if i not in chosen), groups)
            groups.pop()

            if self._is_optimal():
                return

    def _zero_sum_subsets(
        self, running: int, candidates: tuple[int, ...], start: int
    ) -> Iterator[tuple[int, ...]]:
        """Подмножества candidates[start:], доводящие running до 0 (лексикографически)."""
        for pos in range(start, len(candidates)):
            self._tick()
            idx = candidates[pos]
            total = running + self._amounts[idx]
            if total == 0:
                yield (idx,)
            else:
                for tail in self._zero_sum_subsets(total, candidates, pos + 1):
                    yield (idx,) + tail
