"""Plan Validator — независимая проверка плана расчётов.

Проверяет план, построенный любым алгоритмом (greedy или exact),
повторным проигрыванием переводов на копии позиций:
- amount > 0 и from != to, иначе DEGENERATE_TRANSFER
- from и to присутствуют в исходном mapping, иначе UNKNOWN_PARTICIPANT
- после проигрывания все балансы ровно 0, иначе INCOMPLETE_PLAN

Перевод уменьшает долг плательщика и требование получателя:
balance[from] += amount, balance[to] -= amount (amount < 0 означает долг).

Входные данные не мутируются; повторный вызов даёт тот же результат.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from src.core.domain.plan import SettlementPlan
from src.core.domain.position import NetPosition
from src.core.errors import (
    DegenerateTransfer,
    IncompletePlan,
    PlanRejected,
    UnknownParticipant,
)
from src.core.math.minor_units import is_minor_units

logger = logging.getLogger(__name__)


class ValidationFailureReason(str, Enum):
    """Причина отклонения плана."""

    INCOMPLETE_PLAN = "IncompletePlan"
    DEGENERATE_TRANSFER = "DegenerateTransfer"
    UNKNOWN_PARTICIPANT = "UnknownParticipant"


_REASON_ERRORS: dict[ValidationFailureReason, type[PlanRejected]] = {
    ValidationFailureReason.INCOMPLETE_PLAN: IncompletePlan,
    ValidationFailureReason.DEGENERATE_TRANSFER: DegenerateTransfer,
    ValidationFailureReason.UNKNOWN_PARTICIPANT: UnknownParticipant,
}


@dataclass(frozen=True)
class ValidationFailure:
    """Описание нарушения."""

    reason: ValidationFailureReason

    # Диагностика
    transfer_index: Optional[int]  # None для INCOMPLETE_PLAN
    participant: Optional[str]
    details: str


@dataclass(frozen=True)
class ValidationResult:
    """Результат проверки: ok или failure."""

    ok: bool
    failure: Optional[ValidationFailure]

    # Ненулевые остатки после проигрывания (participant, residual), по возрастанию id
    residuals: tuple[tuple[str, int], ...] = ()

    def raise_for_failure(self) -> None:
        """
        Raises:
            IncompletePlan / DegenerateTransfer / UnknownParticipant: если план отклонён
        """
        if self.ok:
            return
        error_cls = _REASON_ERRORS[self.failure.reason]
        raise error_cls(self.failure.details, failure=self.failure)


def _fail(
    reason: ValidationFailureReason,
    details: str,
    transfer_index: Optional[int] = None,
    participant: Optional[str] = None,
    residuals: tuple[tuple[str, int], ...] = (),
) -> ValidationResult:
    logger.error("Settlement plan rejected (%s): %s", reason.value, details)
    return ValidationResult(
        ok=False,
        failure=ValidationFailure(
            reason=reason,
            transfer_index=transfer_index,
            participant=participant,
            details=details,
        ),
        residuals=residuals,
    )


class PlanValidator:
    """Проверка плана против исходных net-позиций."""

    def validate(
        self, positions: Mapping[str, NetPosition], plan: SettlementPlan
    ) -> ValidationResult:
        """
        Проигрывание плана на копии балансов.

        Args:
            positions: исходные {participant: NetPosition}
            plan: проверяемый план

        Returns:
            ValidationResult (ok=True если план корректен)
        """
        balances = {participant: position.amount for participant, position in positions.items()}

        for index, transfer in enumerate(plan.transfers):
            payer = transfer.from_participant
            payee = transfer.to_participant

            if not is_minor_units(transfer.amount) or transfer.amount <= 0:
                return _fail(
                    ValidationFailureReason.DEGENERATE_TRANSFER,
                    f"Transfer #{index} {payer!r} -> {payee!r} has non-positive amount "
                    f"{transfer.amount!r}",
                    transfer_index=index,
                    participant=payer,
                )
            if payer == payee:
                return _fail(
                    ValidationFailureReason.DEGENERATE_TRANSFER,
                    f"Transfer #{index} pays {payer!r} to itself",
                    transfer_index=index,
                    participant=payer,
                )

            for party in (payer, payee):
                if party not in balances:
                    return _fail(
                        ValidationFailureReason.UNKNOWN_PARTICIPANT,
                        f"Transfer #{index} references {party!r}, absent from the positions",
                        transfer_index=index,
                        participant=party,
                    )

            balances[payer] += transfer.amount
            balances[payee] -= transfer.amount

        residuals = tuple(
            (participant, balances[participant])
            for participant in sorted(balances)
            if balances[participant] != 0
        )
        if residuals:
            first, amount = residuals[0]
            return _fail(
                ValidationFailureReason.INCOMPLETE_PLAN,
                f"{len(residuals)} participant(s) not settled after replay, "
                f"first: {first!r} residual {amount}",
                participant=first,
                residuals=residuals,
            )

        return ValidationResult(ok=True, failure=None)


def validate(positions: Mapping[str, NetPosition], plan: SettlementPlan) -> ValidationResult:
    """Проверка плана (см. PlanValidator.validate)."""
    return PlanValidator().validate(positions, plan)
