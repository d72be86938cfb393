"""
NetPosition — Модель net-позиции участника

Immutable Pydantic модель: знаковый баланс участника после закрытия сессии.

    amount = Σ cash_out - Σ buy_in

- amount > 0: участнику должны (creditor)
- amount < 0: участник должен (debtor)
- amount = 0: расчёт не требуется

Инвариант сессии: Σ amount = 0 (замкнутая экономическая система).
"""

from enum import Enum
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

from src.core.domain.participant import validate_participant_id


# =============================================================================
# ENUMS
# =============================================================================


class Side(str, Enum):
    """Сторона net-позиции"""

    CREDITOR = "creditor"
    DEBTOR = "debtor"
    SETTLED = "settled"


# =============================================================================
# NET POSITION MODEL
# =============================================================================


class NetPosition(BaseModel):
    """
    Net-позиция участника.

    Immutable модель (frozen=True). Позиции — производный read-only артефакт
    снапшота сессии: пересчитываются из нового снапшота, не мутируются.
    """

    participant: str = Field(..., description="Идентификатор участника")
    amount: int = Field(..., strict=True, description="Знаковый баланс (minor units)")

    model_config = {"frozen": True}

    @field_validator("participant")
    @classmethod
    def validate_participant(cls, v: str) -> str:
        return validate_participant_id(v)

    @property
    def side(self) -> Side:
        if self.amount > 0:
            return Side.CREDITOR
        if self.amount < 0:
            return Side.DEBTOR
        return Side.SETTLED

    @property
    def magnitude(self) -> int:
        """Абсолютная величина баланса."""
        return abs(self.amount)

    def is_creditor(self) -> bool:
        return self.amount > 0

    def is_debtor(self) -> bool:
        return self.amount < 0

    def is_settled(self) -> bool:
        return self.amount == 0


def positions_total(positions: Mapping[str, "NetPosition"]) -> int:
    """Сумма amount по mapping участник → NetPosition (должна быть 0)."""
    return sum(position.amount for position in positions.values())
