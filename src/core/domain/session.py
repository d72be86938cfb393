"""
Session — Снапшот сессии и сводки по участникам

SessionSnapshot — immutable снапшот записей сессии, который Entry Store
передаёт ядру. ParticipantSummary / SessionSummary — итоги по участникам
(внесено, выведено, net, число записей) для отображения и аудита.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.domain.entry import Entry
from src.core.domain.participant import validate_participant_id


# =============================================================================
# ENUMS
# =============================================================================


class SessionStatus(str, Enum):
    """Состояние сессии в Entry Store"""

    OPEN = "OPEN"  # Принимает новые записи
    CLOSED = "CLOSED"  # Заморожена, готова к расчёту


# =============================================================================
# SNAPSHOT
# =============================================================================


class SessionSnapshot(BaseModel):
    """
    Снапшот сессии (полный и неизменяемый для данного session_id/generation).

    generation увеличивается при каждом reopen: план, построенный по старому
    поколению, не переиспользуется.
    """

    session_id: str = Field(..., description="Идентификатор сессии")
    status: SessionStatus = Field(..., description="Состояние сессии на момент снапшота")
    generation: int = Field(1, ge=1, description="Поколение (reopen → +1)")
    entries: tuple[Entry, ...] = Field(default=(), description="Записи в порядке добавления")

    model_config = {"frozen": True}

    @field_validator("session_id")
    @classmethod
    def validate_session_id(cls, v: str) -> str:
        return validate_participant_id(v, name="session_id")

    def is_closed(self) -> bool:
        return self.status == SessionStatus.CLOSED


# =============================================================================
# SUMMARIES
# =============================================================================


class ParticipantSummary(BaseModel):
    """Итоги участника за сессию."""

    participant: str
    total_buy_in: int = Field(..., ge=0)
    total_cash_out: int = Field(..., ge=0)
    entry_count: int = Field(..., ge=1)

    model_config = {"frozen": True}

    @property
    def net(self) -> int:
        return self.total_cash_out - self.total_buy_in


class SessionSummary(BaseModel):
    """Итоги сессии: участники по возрастанию id и общие суммы."""

    participants: tuple[ParticipantSummary, ...] = ()
    total_buy_in: int = Field(0, ge=0)
    total_cash_out: int = Field(0, ge=0)
    entry_count: int = Field(0, ge=0)

    model_config = {"frozen": True}

    @property
    def imbalance(self) -> int:
        """total_cash_out - total_buy_in; 0 для сбалансированной сессии."""
        return self.total_cash_out - self.total_buy_in

    def is_balanced(self) -> bool:
        return self.imbalance == 0

    def for_participant(self, participant: str) -> ParticipantSummary:
        for summary in self.participants:
            if summary.participant == participant:
                return summary
        raise KeyError(participant)
