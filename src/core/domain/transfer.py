"""
Transfer — Модель перевода между участниками

Immutable Pydantic модель одного перевода плана расчётов: debtor (from)
платит creditor (to) положительную сумму в minor units.

Сериализуется как {"from": ..., "to": ..., "amount": ...}.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.participant import validate_participant_id
from src.core.math.minor_units import DEFAULT_CURRENCY_SYMBOL, minor_units_to_display


class Transfer(BaseModel):
    """
    Перевод from → to.

    Immutable модель (frozen=True). `from` — зарезервированное слово Python,
    поэтому поля называются from_participant / to_participant, а alias
    используется при сериализации.
    """

    from_participant: str = Field(..., alias="from", description="Плательщик (debtor)")
    to_participant: str = Field(..., alias="to", description="Получатель (creditor)")
    amount: int = Field(..., gt=0, strict=True, description="Сумма перевода (minor units)")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("from_participant", "to_participant")
    @classmethod
    def validate_participants(cls, v: str) -> str:
        return validate_participant_id(v)

    @model_validator(mode="after")
    def validate_distinct_parties(self) -> "Transfer":
        if self.from_participant == self.to_participant:
            raise ValueError(
                f"Transfer from and to must differ, got {self.from_participant!r} twice"
            )
        return self

    def to_record(self) -> dict:
        """Запись для внешней передачи: {"from", "to", "amount"}."""
        return {
            "from": self.from_participant,
            "to": self.to_participant,
            "amount": self.amount,
        }

    def describe(self, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
        """Человекочитаемое описание: 'A → B: $1.00'."""
        return (
            f"{self.from_participant} → {self.to_participant}: "
            f"{minor_units_to_display(self.amount, symbol=symbol)}"
        )
