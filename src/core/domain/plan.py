"""
SettlementPlan — Модель плана расчётов

Immutable Pydantic модель: упорядоченная последовательность Transfer.

Агрегатный инвариант: применение всех переводов к net-позициям доводит
баланс каждого участника ровно до 0 (проверяется PlanValidator).
"""

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from src.core.domain.participant import sorted_participants
from src.core.domain.transfer import Transfer


# =============================================================================
# ENUMS
# =============================================================================


class SettlementMode(str, Enum):
    """Каким алгоритмом построен план"""

    GREEDY = "greedy"  # Greedy largest-magnitude matching
    EXACT = "exact"  # Exact search завершился в пределах бюджета
    GREEDY_FALLBACK = "greedy_fallback"  # Бюджет exact search исчерпан → greedy


# =============================================================================
# SETTLEMENT PLAN MODEL
# =============================================================================


class SettlementPlan(BaseModel):
    """
    План расчётов сессии.

    Immutable модель (frozen=True). Два вызова settle на одном входе дают
    равные планы (включая порядок переводов).
    """

    transfers: tuple[Transfer, ...] = Field(
        default=(), description="Переводы в порядке исполнения"
    )
    mode: SettlementMode = Field(
        default=SettlementMode.GREEDY, description="Алгоритм, построивший план"
    )
    search_nodes: int = Field(
        default=0, ge=0, description="Узлы exact search (0 если поиск не запускался)"
    )

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> "SettlementPlan":
        return cls()

    def __len__(self) -> int:
        return len(self.transfers)

    def __iter__(self) -> Iterator[Transfer]:  # type: ignore[override]
        """Итерация по переводам (не по полям модели)."""
        return iter(self.transfers)

    @property
    def transfer_count(self) -> int:
        return len(self.transfers)

    def is_empty(self) -> bool:
        return not self.transfers

    def total_amount(self) -> int:
        """Сумма всех переводов (minor units)."""
        return sum(transfer.amount for transfer in self.transfers)

    def participants(self) -> list[str]:
        """Все участники, упомянутые в плане, по возрастанию id."""
        return sorted_participants(
            party
            for transfer in self.transfers
            for party in (transfer.from_participant, transfer.to_participant)
        )

    def to_records(self) -> list[dict]:
        """Сериализация для presentation/payments: [{"from", "to", "amount"}, ...]."""
        return [transfer.to_record() for transfer in self.transfers]

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "transfer_count": self.transfer_count,
            "search_nodes": self.search_nodes,
            "transfers": self.to_records(),
        }
