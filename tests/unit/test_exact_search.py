"""
Тесты для ZeroSumPartitionSearch

Проверяемые инварианты:
1. Максимальное число zero-sum групп → минимум переводов (n - k)
2. Бюджет узлов ограничивает перебор; исчерпание → exhausted, без групп
3. Детерминированный порядок перебора
"""

import pytest

from src.settlement import ZeroSumPartitionSearch


class TestZeroSumPartitionSearch:
    """Тесты exact search."""

    def test_two_independent_pairs(self):
        result = ZeroSumPartitionSearch(
            {"A": -10, "B": 10, "C": -20, "D": 20}, budget=1_000
        ).run()

        assert not result.exhausted
        assert result.groups == (("A", "B"), ("C", "D"))
        assert result.transfer_count == 2

    def test_beats_greedy_partition(self):
        """Greedy даёт 4 перевода, оптимум — 3 (группы {A,B,C} и {D,E})."""
        result = ZeroSumPartitionSearch(
            {"A": -5, "B": 2, "C": 3, "D": -4, "E": 4}, budget=1_000
        ).run()

        assert result.groups == (("A", "B", "C"), ("D", "E"))
        assert result.transfer_count == 3

    def test_single_group(self):
        result = ZeroSumPartitionSearch({"A": -3, "B": 1, "C": 2}, budget=1_000).run()
        assert result.groups == (("A", "B", "C"),)
        assert result.transfer_count == 2

    def test_zero_amounts_ignored(self):
        result = ZeroSumPartitionSearch({"A": -1, "B": 0, "C": 1}, budget=1_000).run()
        assert result.groups == (("A", "C"),)

    def test_empty(self):
        result = ZeroSumPartitionSearch({}, budget=10).run()
        assert result.groups == ()
        assert result.nodes == 0
        assert not result.exhausted
        assert result.transfer_count == 0

    def test_budget_exhausted(self):
        result = ZeroSumPartitionSearch(
            {"A": -10, "B": 10, "C": -20, "D": 20}, budget=1
        ).run()

        assert result.exhausted
        assert result.groups is None
        assert result.transfer_count is None
        assert result.nodes > 1

    def test_budget_must_be_positive(self):
        with pytest.raises(ValueError, match="budget"):
            ZeroSumPartitionSearch({"A": -1, "B": 1}, budget=0)

    def test_deterministic(self):
        amounts = {"E": 4, "D": -4, "C": 3, "B": 2, "A": -5}
        first = ZeroSumPartitionSearch(amounts, budget=1_000).run()
        second = ZeroSumPartitionSearch(dict(reversed(list(amounts.items()))), budget=1_000).run()
        assert first == second
