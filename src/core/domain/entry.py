"""
Entry — Запись buy-in / cash-out участника

Immutable Pydantic модель одной записи сессии. Записи неизменяемы после
создания; несколько записей на участника (top-ups) допустимы и суммируются
агрегатором.

Суммы — строго int в minor units (float, строки и bool отвергаются).
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.core.domain.participant import validate_participant_id
from src.core.math.minor_units import DEFAULT_CURRENCY_EXPONENT, to_minor_units


class Entry(BaseModel):
    """
    Запись сессии: сколько участник внёс (buy_in) и забрал (cash_out).

    Immutable модель (frozen=True). Исправление записи — новая запись
    после reopen сессии, никогда не мутация.
    """

    participant: str = Field(..., description="Идентификатор участника")
    buy_in: int = Field(..., ge=0, strict=True, description="Внесено (minor units)")
    cash_out: int = Field(..., ge=0, strict=True, description="Выведено (minor units)")
    entry_id: Optional[str] = Field(
        None, min_length=1, description="Идентификатор записи в Entry Store (для аудита)"
    )

    model_config = {"frozen": True}

    @field_validator("participant")
    @classmethod
    def validate_participant(cls, v: str) -> str:
        return validate_participant_id(v)

    @classmethod
    def from_major_units(
        cls,
        participant: str,
        buy_in: Union[int, str, Decimal] = 0,
        cash_out: Union[int, str, Decimal] = 0,
        exponent: int = DEFAULT_CURRENCY_EXPONENT,
        entry_id: Optional[str] = None,
    ) -> "Entry":
        """
        Создание записи из сумм в major units ("12.50" → 1250).

        Raises:
            ValueError: Если сумма не представима точно в minor units
        """
        return cls(
            participant=participant,
            buy_in=to_minor_units(buy_in, exponent),
            cash_out=to_minor_units(cash_out, exponent),
            entry_id=entry_id,
        )

    def net(self) -> int:
        """Вклад записи в net-позицию: cash_out - buy_in."""
        return self.cash_out - self.buy_in
