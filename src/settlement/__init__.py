"""Settlement — минимальный план переводов между участниками сессии.

- Greedy largest-magnitude matching с детерминированным tie-break
- Exact search (бюджет узлов) для небольших сессий
- Конвейер aggregate → settle → validate
"""

from .config import SettlementConfig, SettlementSettings
from .engine import SettlementEngine, settle
from .exact import ExactSearchResult, ZeroSumPartitionSearch
from .greedy import greedy_transfers
from .priority import MagnitudeQueue
from .service import SessionSettlement, SettlementService

__all__ = [
    "SettlementConfig",
    "SettlementSettings",
    "SettlementEngine",
    "settle",
    "ExactSearchResult",
    "ZeroSumPartitionSearch",
    "greedy_transfers",
    "MagnitudeQueue",
    "SessionSettlement",
    "SettlementService",
]
