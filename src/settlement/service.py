"""SettlementService — конвейер расчёта сессии.

Entry Store snapshot → Session Aggregator → Settlement Engine → Plan Validator

План, не прошедший проверку, не возвращается: PlanRejected поднимается
вызывающему (частично корректный расчёт пользователю не показывается).
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from src.aggregator.session_aggregator import EntryLike, positions_from_summary, summarize
from src.core.contracts import validate_settlement_plan
from src.core.domain.plan import SettlementPlan
from src.core.domain.position import NetPosition
from src.core.domain.session import SessionSnapshot, SessionSummary
from src.core.errors import SessionNotClosed
from src.settlement.engine import SettlementEngine
from src.validation.plan_validator import PlanValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSettlement:
    """Результат расчёта сессии."""

    session_id: Optional[str]
    generation: Optional[int]

    summary: SessionSummary
    # Только чтение: MappingProxyType над копией
    positions: Mapping[str, NetPosition]
    plan: SettlementPlan

    def to_dict(self) -> dict:
        """Сериализация для presentation/payments."""
        return {
            "session_id": self.session_id,
            "generation": self.generation,
            "positions": {p: position.amount for p, position in self.positions.items()},
            "plan": self.plan.to_dict(),
        }


class SettlementService:
    """Оркестратор: aggregate → settle → validate."""

    def __init__(
        self,
        engine: Optional[SettlementEngine] = None,
        validator: Optional[PlanValidator] = None,
    ):
        """
        Args:
            engine: Settlement Engine (default: greedy-only engine)
            validator: Plan Validator (default: создается автоматически)
        """
        self.engine = engine or SettlementEngine()
        self.validator = validator or PlanValidator()

    def settle_entries(
        self,
        entries: Iterable[EntryLike],
        session_id: Optional[str] = None,
        generation: Optional[int] = None,
    ) -> SessionSettlement:
        """
        Расчёт по записям закрытой сессии.

        Raises:
            InvalidEntry, UnbalancedSession: ошибки агрегации (engine не вызывается)
            NonZeroSum: нарушение инварианта на входе engine
            PlanRejected: план не прошёл проверку
        """
        summary = summarize(entries)
        positions = positions_from_summary(summary)

        plan = self.engine.settle(positions)

        self.validator.validate(positions, plan).raise_for_failure()
        validate_settlement_plan(plan.to_dict())

        logger.info(
            "Settled session %s: %d participants, %d transfers, mode=%s",
            session_id,
            len(positions),
            plan.transfer_count,
            plan.mode.value,
        )
        return SessionSettlement(
            session_id=session_id,
            generation=generation,
            summary=summary,
            positions=MappingProxyType(dict(positions)),
            plan=plan,
        )

    def settle_session(self, snapshot: SessionSnapshot) -> SessionSettlement:
        """
        Расчёт по снапшоту закрытой сессии.

        Raises:
            SessionNotClosed: снапшот снят с открытой сессии
        """
        if not snapshot.is_closed():
            raise SessionNotClosed(snapshot.session_id)
        return self.settle_entries(
            snapshot.entries,
            session_id=snapshot.session_id,
            generation=snapshot.generation,
        )
