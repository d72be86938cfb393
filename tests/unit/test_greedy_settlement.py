"""
Тесты для greedy matching и MagnitudeQueue

Проверяемые инварианты:
1. Очередь извлекает наибольшую величину, при равенстве — меньший id
2. Каждый шаг обнуляет хотя бы одного участника
3. Несбалансированный вход → ValueError (не молчаливый остаток)
"""

import pytest

from src.core.domain import Transfer
from src.settlement import MagnitudeQueue, greedy_transfers


def _t(payer: str, payee: str, amount: int) -> Transfer:
    return Transfer(from_participant=payer, to_participant=payee, amount=amount)


# =============================================================================
# ТЕСТЫ: MagnitudeQueue
# =============================================================================


class TestMagnitudeQueue:
    """Тесты очереди по убыванию величины."""

    def test_pop_order(self):
        queue = MagnitudeQueue([("B", 50), ("A", 50), ("C", 100)])

        assert queue.pop() == ("C", 100)
        assert queue.pop() == ("A", 50)
        assert queue.pop() == ("B", 50)
        assert not queue

    def test_peek_does_not_remove(self):
        queue = MagnitudeQueue([("A", 10)])
        assert queue.peek() == ("A", 10)
        assert len(queue) == 1

    def test_peek_empty(self):
        assert MagnitudeQueue().peek() is None

    def test_total(self):
        queue = MagnitudeQueue([("A", 10), ("B", 15)])
        assert queue.total() == 25

    def test_non_positive_magnitude_rejected(self):
        queue = MagnitudeQueue()
        with pytest.raises(ValueError, match="must be positive"):
            queue.push("A", 0)


# =============================================================================
# ТЕСТЫ: greedy_transfers
# =============================================================================


class TestGreedyTransfers:
    """Тесты greedy largest-magnitude matching."""

    def test_single_pair(self):
        assert greedy_transfers({"A": -100, "B": 100}) == [_t("A", "B", 100)]

    def test_debtor_tie_broken_by_id(self):
        transfers = greedy_transfers({"A": -50, "B": -50, "C": 100})
        assert transfers == [_t("A", "C", 50), _t("B", "C", 50)]

    def test_creditor_tie_broken_by_id(self):
        transfers = greedy_transfers({"A": 50, "B": 50, "C": -100})
        assert transfers == [_t("C", "A", 50), _t("C", "B", 50)]

    def test_remainder_requeued(self):
        transfers = greedy_transfers({"A": -70, "B": -30, "C": 60, "D": 40})
        assert transfers == [
            _t("A", "C", 60),
            _t("B", "D", 30),
            _t("A", "D", 10),
        ]

    def test_at_most_n_minus_one_transfers(self):
        amounts = {"A": -5, "B": 2, "C": 3, "D": -4, "E": 4}
        transfers = greedy_transfers(amounts)
        assert transfers == [
            _t("A", "E", 4),
            _t("D", "C", 3),
            _t("A", "B", 1),
            _t("D", "B", 1),
        ]
        assert len(transfers) <= len(amounts) - 1

    def test_zero_amounts_ignored(self):
        assert greedy_transfers({"A": -10, "B": 0, "C": 10}) == [_t("A", "C", 10)]

    def test_empty(self):
        assert greedy_transfers({}) == []

    def test_unbalanced_rejected(self):
        with pytest.raises(ValueError, match="Unbalanced amounts"):
            greedy_transfers({"A": -10, "B": 5})
