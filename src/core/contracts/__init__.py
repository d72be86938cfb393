"""
Contract Validation Module

Валидация JSON контрактов на границах goker-ledger.
"""

from .validators import (
    ContractValidator,
    LedgerEntryContractValidator,
    SchemaLoader,
    SettlementPlanContractValidator,
    validate_ledger_entry,
    validate_settlement_plan,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LedgerEntryContractValidator",
    "SettlementPlanContractValidator",
    # Functions
    "validate_ledger_entry",
    "validate_settlement_plan",
]
