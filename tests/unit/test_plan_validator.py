"""
Тесты для Plan Validator

Проверяемые инварианты:
1. Корректный план → ok
2. Перевод с amount <= 0 или from == to → DEGENERATE_TRANSFER
3. Участник вне позиций → UNKNOWN_PARTICIPANT
4. Ненулевой остаток после проигрывания → INCOMPLETE_PLAN (с остатками)
5. Идемпотентность: повторная проверка даёт тот же результат
"""

import pytest

from src.core.domain import NetPosition, SettlementPlan, Transfer
from src.core.errors import DegenerateTransfer, IncompletePlan, PlanRejected, UnknownParticipant
from src.validation import PlanValidator, ValidationFailureReason, validate


def _positions(amounts: dict) -> dict:
    return {p: NetPosition(participant=p, amount=a) for p, a in amounts.items()}


def _t(payer: str, payee: str, amount: int) -> Transfer:
    return Transfer(from_participant=payer, to_participant=payee, amount=amount)


def _raw(payer: str, payee: str, amount: int) -> Transfer:
    """Transfer в обход валидации модели (как от стороннего алгоритма)."""
    return Transfer.model_construct(from_participant=payer, to_participant=payee, amount=amount)


def _plan(*transfers: Transfer) -> SettlementPlan:
    return SettlementPlan.model_construct(transfers=tuple(transfers))


@pytest.fixture
def validator():
    return PlanValidator()


@pytest.fixture
def positions():
    return _positions({"A": -100, "B": 100, "C": 0})


# =============================================================================
# ТЕСТЫ: корректные планы
# =============================================================================


class TestValidPlans:
    """План, обнуляющий все позиции, принимается."""

    def test_simple_plan(self, validator, positions):
        result = validator.validate(positions, _plan(_t("A", "B", 100)))

        assert result.ok
        assert result.failure is None
        assert result.residuals == ()
        result.raise_for_failure()

    def test_empty_plan_for_settled_positions(self, validator):
        assert validator.validate(_positions({"A": 0}), _plan()).ok

    def test_empty_plan_for_empty_positions(self, validator):
        assert validator.validate({}, _plan()).ok

    def test_multi_hop_through_settled_participant(self, validator, positions):
        """Перевод через участника с нулевой позицией допустим."""
        plan = _plan(_t("A", "C", 100), _t("C", "B", 100))
        assert validator.validate(positions, plan).ok

    def test_split_transfers(self, validator, positions):
        plan = _plan(_t("A", "B", 60), _t("A", "B", 40))
        assert validator.validate(positions, plan).ok

    def test_module_level_validate(self, positions):
        assert validate(positions, _plan(_t("A", "B", 100))).ok


# =============================================================================
# ТЕСТЫ: INCOMPLETE_PLAN
# =============================================================================


class TestIncompletePlan:
    """Остатки после проигрывания."""

    def test_empty_plan_for_open_positions(self, validator, positions):
        result = validator.validate(positions, _plan())

        assert not result.ok
        assert result.failure.reason == ValidationFailureReason.INCOMPLETE_PLAN
        assert result.failure.transfer_index is None
        assert result.failure.participant == "A"
        assert result.residuals == (("A", -100), ("B", 100))
        assert result.failure.details.startswith("2 participant(s) not settled")

    def test_underpay(self, validator, positions):
        result = validator.validate(positions, _plan(_t("A", "B", 60)))
        assert result.residuals == (("A", -40), ("B", 40))

    def test_overpay(self, validator, positions):
        result = validator.validate(positions, _plan(_t("A", "B", 150)))

        assert result.failure.reason == ValidationFailureReason.INCOMPLETE_PLAN
        assert result.residuals == (("A", 50), ("B", -50))

    def test_wrong_direction(self, validator, positions):
        result = validator.validate(positions, _plan(_t("B", "A", 100)))
        assert result.residuals == (("A", -200), ("B", 200))

    def test_raise_for_failure(self, validator, positions):
        result = validator.validate(positions, _plan())

        with pytest.raises(IncompletePlan, match="not settled") as exc_info:
            result.raise_for_failure()

        assert exc_info.value.failure is result.failure
        assert exc_info.value.code == "incomplete_plan"
        assert isinstance(exc_info.value, PlanRejected)


# =============================================================================
# ТЕСТЫ: DEGENERATE_TRANSFER / UNKNOWN_PARTICIPANT
# =============================================================================


class TestMalformedTransfers:
    """Переводы, которые не должны появляться ни в одном плане."""

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount(self, validator, positions, amount):
        plan = _plan(_raw("A", "B", amount))
        result = validator.validate(positions, plan)

        assert result.failure.reason == ValidationFailureReason.DEGENERATE_TRANSFER
        assert result.failure.transfer_index == 0

        with pytest.raises(DegenerateTransfer):
            result.raise_for_failure()

    def test_float_amount(self, validator, positions):
        result = validator.validate(positions, _plan(_raw("A", "B", 100.0)))
        assert result.failure.reason == ValidationFailureReason.DEGENERATE_TRANSFER

    def test_bool_amount(self, validator):
        """True не считается суммой 1."""
        positions = _positions({"A": -1, "B": 1})
        result = validator.validate(positions, _plan(_raw("A", "B", True)))

        assert not result.ok
        assert result.failure.reason == ValidationFailureReason.DEGENERATE_TRANSFER
        assert result.failure.transfer_index == 0

    def test_self_transfer(self, validator, positions):
        plan = _plan(_t("A", "B", 100), _raw("C", "C", 5))
        result = validator.validate(positions, plan)

        assert result.failure.reason == ValidationFailureReason.DEGENERATE_TRANSFER
        assert result.failure.transfer_index == 1
        assert result.failure.participant == "C"

    def test_unknown_payee(self, validator, positions):
        result = validator.validate(positions, _plan(_t("A", "Z", 100)))

        assert result.failure.reason == ValidationFailureReason.UNKNOWN_PARTICIPANT
        assert result.failure.participant == "Z"

        with pytest.raises(UnknownParticipant, match="'Z'") as exc_info:
            result.raise_for_failure()
        assert exc_info.value.code == "unknown_participant"

    def test_unknown_payer_reported_first(self, validator, positions):
        result = validator.validate(positions, _plan(_t("Y", "Z", 100)))
        assert result.failure.participant == "Y"

    def test_degenerate_reported_before_unknown(self, validator, positions):
        result = validator.validate(positions, _plan(_raw("Y", "Z", 0)))
        assert result.failure.reason == ValidationFailureReason.DEGENERATE_TRANSFER


# =============================================================================
# ТЕСТЫ: чистота
# =============================================================================


class TestPurity:
    """Validator не мутирует вход и идемпотентен."""

    def test_idempotent(self, validator, positions):
        plan = _plan(_t("A", "B", 60))
        assert validator.validate(positions, plan) == validator.validate(positions, plan)

    def test_positions_not_mutated(self, validator, positions):
        before = dict(positions)
        validator.validate(positions, _plan(_t("A", "B", 100)))
        assert positions == before
