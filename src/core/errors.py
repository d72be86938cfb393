"""
Ledger Errors — единая иерархия исключений

Все ошибки ядра наследуются от LedgerError и несут стабильный
машиночитаемый code (для логов, аудита и внешнего presentation-слоя).

Таксономия:
- InvalidEntry: некорректная запись (отрицательная сумма, не-int)
- UnbalancedSession: сумма net-позиций сессии != 0
- NonZeroSum: engine получил несбалансированные позиции (нарушение инварианта)
- PlanRejected: план не прошёл независимую проверку (IncompletePlan,
  DegenerateTransfer, UnknownParticipant)
- Ошибки жизненного цикла сессии (SessionNotClosed, SessionClosed, UnknownSession)

Автоматических retry нет: все вычисления детерминированы,
повтор без новых данных бессмысленен.
"""

from typing import Optional


class LedgerError(Exception):
    """Базовая ошибка ledger."""

    code: str = "ledger_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# =============================================================================
# INPUT / AGGREGATION
# =============================================================================


class InvalidEntry(LedgerError):
    """Запись сессии отклонена до агрегации (никогда не clamp)."""

    code = "invalid_entry"

    def __init__(
        self,
        message: str,
        entry_index: Optional[int] = None,
        participant: Optional[str] = None,
    ) -> None:
        self.entry_index = entry_index
        self.participant = participant
        super().__init__(message)


class UnbalancedSession(LedgerError):
    """
    Сумма net-позиций закрытой сессии не равна нулю.

    Ошибка целостности upstream-данных: ядро не компенсирует дисбаланс
    синтетическим участником.
    """

    code = "unbalanced_session"

    def __init__(self, imbalance: int, total_buy_in: int, total_cash_out: int) -> None:
        self.imbalance = imbalance
        self.total_buy_in = total_buy_in
        self.total_cash_out = total_cash_out
        super().__init__(
            f"Session is unbalanced: total_cash_out={total_cash_out} - "
            f"total_buy_in={total_buy_in} = {imbalance} (must be 0)"
        )


# =============================================================================
# SETTLEMENT ENGINE
# =============================================================================


class NonZeroSum(LedgerError):
    """Позиции на входе engine не сбалансированы — engine отказывается строить план."""

    code = "non_zero_sum"

    def __init__(self, total: int) -> None:
        self.total = total
        super().__init__(
            f"Net positions sum to {total}, expected 0: refusing to settle an inconsistent ledger"
        )


class InvalidPositionMapping(LedgerError):
    """Ключ mapping не совпадает с participant внутри NetPosition."""

    code = "invalid_position_mapping"


class ConfigError(LedgerError):
    code = "invalid_config"


# =============================================================================
# PLAN VALIDATION
# =============================================================================


class PlanRejected(LedgerError):
    """План не прошёл проверку и не должен быть показан пользователю."""

    code = "plan_rejected"

    def __init__(self, message: str, failure=None) -> None:
        self.failure = failure
        super().__init__(message)


class IncompletePlan(PlanRejected):
    code = "incomplete_plan"


class DegenerateTransfer(PlanRejected):
    code = "degenerate_transfer"


class UnknownParticipant(PlanRejected):
    code = "unknown_participant"


# =============================================================================
# SESSION LIFECYCLE
# =============================================================================


class SessionNotClosed(LedgerError):
    code = "session_not_closed"

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} is still open: close it before settling")


class SessionClosed(LedgerError):
    code = "session_closed"

    def __init__(self, session_id: str, action: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} is closed: cannot {action}")


class UnknownSession(LedgerError):
    code = "unknown_session"

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Unknown session: {session_id!r}")
