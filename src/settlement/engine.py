"""Settlement Engine — минимальный план переводов, обнуляющий все net-позиции.

Порядок:
1. Проверка mapping (ключ == position.participant, amount — int)
2. Проверка Σ amount == 0, иначе NonZeroSum (engine не угадывает план)
3. Greedy план (всегда)
4. Exact search, если число ненулевых участников в (0, limit]:
   - поиск завершён → план EXACT (переводов не больше, чем у greedy)
   - бюджет исчерпан → greedy план с mode GREEDY_FALLBACK

Engine не хранит состояние между вызовами: независимые сессии можно
рассчитывать параллельно.
"""

import logging
from typing import Mapping, Optional

from src.core.domain.plan import SettlementMode, SettlementPlan
from src.core.domain.position import NetPosition
from src.core.errors import InvalidPositionMapping, NonZeroSum
from src.core.math.minor_units import is_minor_units
from src.settlement.config import SettlementConfig
from src.settlement.exact import ZeroSumPartitionSearch
from src.settlement.greedy import greedy_transfers

logger = logging.getLogger(__name__)


def position_amounts(positions: Mapping[str, NetPosition]) -> dict[str, int]:
    """
    Знаковые суммы из mapping позиций, ключи по возрастанию id.

    Raises:
        InvalidPositionMapping: Ключ не совпадает с participant или amount не int
    """
    amounts: dict[str, int] = {}
    for key in sorted(positions):
        position = positions[key]
        if position.participant != key:
            raise InvalidPositionMapping(
                f"Position keyed {key!r} belongs to participant {position.participant!r}"
            )
        if not is_minor_units(position.amount):
            raise InvalidPositionMapping(
                f"Position amount for {key!r} must be an integer, got {position.amount!r}"
            )
        amounts[key] = position.amount
    return amounts


class SettlementEngine:
    """Settlement Engine: greedy matching + опциональный exact search.

    Tie-break: при равных величинах раньше выбирается меньший participant id,
    поэтому повторный вызов на том же входе даёт идентичный план.
    """

    def __init__(self, config: Optional[SettlementConfig] = None):
        """
        Args:
            config: конфигурация exact mode (default: exact mode выключен)
        """
        self.config = config or SettlementConfig()

    def settle(self, positions: Mapping[str, NetPosition]) -> SettlementPlan:
        """
        Построение плана расчётов.

        Args:
            positions: {participant: NetPosition} закрытой сессии

        Returns:
            SettlementPlan (пустой для пустого / полностью нулевого входа)

        Raises:
            NonZeroSum: Σ amount != 0 (нарушение инварианта агрегатора)
            InvalidPositionMapping: Некорректный mapping
        """
        amounts = position_amounts(positions)

        total = sum(amounts.values())
        if total != 0:
            logger.error(
                "Refusing to settle: %d positions sum to %d", len(amounts), total
            )
            raise NonZeroSum(total)

        nonzero = {p: a for p, a in amounts.items() if a != 0}
        if not nonzero:
            return SettlementPlan.empty()

        greedy = greedy_transfers(nonzero)

        if not self.config.allows_exact(len(nonzero)):
            logger.debug(
                "Greedy settlement: %d participants -> %d transfers",
                len(nonzero),
                len(greedy),
            )
            return SettlementPlan(transfers=tuple(greedy), mode=SettlementMode.GREEDY)

        result = ZeroSumPartitionSearch(
            nonzero, budget=self.config.exact_mode_search_budget
        ).run()

        if result.exhausted:
            logger.warning(
                "Exact search budget exhausted after %d nodes (%d participants), "
                "falling back to greedy plan with %d transfers",
                result.nodes,
                len(nonzero),
                len(greedy),
            )
            return SettlementPlan(
                transfers=tuple(greedy),
                mode=SettlementMode.GREEDY_FALLBACK,
                search_nodes=result.nodes,
            )

        transfers = []
        for group in result.groups:
            transfers.extend(greedy_transfers({p: nonzero[p] for p in group}))

        logger.debug(
            "Exact settlement: %d participants, %d groups, %d transfers "
            "(greedy: %d), %d nodes",
            len(nonzero),
            len(result.groups),
            len(transfers),
            len(greedy),
            result.nodes,
        )
        return SettlementPlan(
            transfers=tuple(transfers),
            mode=SettlementMode.EXACT,
            search_nodes=result.nodes,
        )


def settle(
    positions: Mapping[str, NetPosition],
    config: Optional[SettlementConfig] = None,
) -> SettlementPlan:
    """Построение плана расчётов (см. SettlementEngine.settle)."""
    return SettlementEngine(config).settle(positions)
