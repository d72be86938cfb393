"""Session Aggregator — свёртка записей сессии в net-позиции участников.

Контракт:
- aggregate(entries) → {participant: NetPosition}
- Суммы buy_in и cash_out считаются независимо, точно, в int (никакого float)
- Отрицательная / нецелая сумма → InvalidEntry (никогда не clamp)
- Σ net != 0 → UnbalancedSession (ошибка целостности upstream, не корректируется)
- Чистая функция: вход не мутируется, результат — новый dict
"""

import logging
from typing import Any, Iterable, Mapping, Union

import jsonschema
from pydantic import ValidationError

from src.core.contracts import LedgerEntryContractValidator
from src.core.domain.entry import Entry
from src.core.domain.position import NetPosition
from src.core.domain.session import ParticipantSummary, SessionSnapshot, SessionSummary
from src.core.errors import InvalidEntry, SessionNotClosed, UnbalancedSession
from src.core.math.minor_units import is_minor_units

logger = logging.getLogger(__name__)

EntryLike = Union[Entry, Mapping[str, Any]]

# Контракт сырой записи Entry Store (contracts/schema/ledger_entry.json)
_ENTRY_CONTRACT = LedgerEntryContractValidator()


# =============================================================================
# ENTRY COERCION
# =============================================================================


def _coerce_entry(raw: EntryLike, index: int) -> Entry:
    """Приведение записи к Entry с повторной проверкой сумм.

    Сырые mapping сначала проверяются по контракту ledger_entry.
    Entry, построенный через model_construct, обходит pydantic-валидацию,
    поэтому суммы проверяются и для готовых экземпляров.
    """
    if isinstance(raw, Entry):
        entry = raw
    elif isinstance(raw, Mapping):
        row = dict(raw)
        participant = row.get("participant")
        try:
            _ENTRY_CONTRACT.validate(row)
        except jsonschema.ValidationError as e:
            raise InvalidEntry(
                f"Entry #{index} violates ledger_entry contract: {e.message} "
                f"(participant={participant!r})",
                entry_index=index,
                participant=participant if isinstance(participant, str) else None,
            ) from e
        try:
            entry = Entry.model_validate(row)
        except ValidationError as e:
            raise InvalidEntry(
                f"Entry #{index} rejected: {e.errors()[0]['msg']} "
                f"(participant={participant!r})",
                entry_index=index,
                participant=participant if isinstance(participant, str) else None,
            ) from e
    else:
        raise InvalidEntry(
            f"Entry #{index} must be an Entry or a mapping, got {type(raw).__name__}",
            entry_index=index,
        )

    for field_name in ("buy_in", "cash_out"):
        value = getattr(entry, field_name)
        if not is_minor_units(value) or value < 0:
            raise InvalidEntry(
                f"Entry #{index} rejected: {field_name}={value!r} must be a "
                f"non-negative integer amount of minor units (participant={entry.participant!r})",
                entry_index=index,
                participant=entry.participant,
            )

    return entry


# =============================================================================
# SUMMARY
# =============================================================================


def summarize(entries: Iterable[EntryLike]) -> SessionSummary:
    """
    Итоги по участникам без проверки zero-sum.

    Подходит и для открытой сессии (отображение текущих buy-in/cash-out).

    Raises:
        InvalidEntry: Если хотя бы одна запись некорректна
    """
    buy_in: dict[str, int] = {}
    cash_out: dict[str, int] = {}
    counts: dict[str, int] = {}

    for index, raw in enumerate(entries):
        entry = _coerce_entry(raw, index)
        buy_in[entry.participant] = buy_in.get(entry.participant, 0) + entry.buy_in
        cash_out[entry.participant] = cash_out.get(entry.participant, 0) + entry.cash_out
        counts[entry.participant] = counts.get(entry.participant, 0) + 1

    participants = tuple(
        ParticipantSummary(
            participant=participant,
            total_buy_in=buy_in[participant],
            total_cash_out=cash_out[participant],
            entry_count=counts[participant],
        )
        for participant in sorted(counts)
    )

    return SessionSummary(
        participants=participants,
        total_buy_in=sum(buy_in.values()),
        total_cash_out=sum(cash_out.values()),
        entry_count=sum(counts.values()),
    )


# =============================================================================
# AGGREGATION
# =============================================================================


def positions_from_summary(summary: SessionSummary) -> dict[str, NetPosition]:
    """
    Net-позиции из итогов сессии.

    Raises:
        UnbalancedSession: Если Σ cash_out != Σ buy_in
    """
    if not summary.is_balanced():
        logger.error(
            "Unbalanced session: buy_in=%d cash_out=%d imbalance=%d",
            summary.total_buy_in,
            summary.total_cash_out,
            summary.imbalance,
        )
        raise UnbalancedSession(
            imbalance=summary.imbalance,
            total_buy_in=summary.total_buy_in,
            total_cash_out=summary.total_cash_out,
        )

    return {
        item.participant: NetPosition(participant=item.participant, amount=item.net)
        for item in summary.participants
    }


def aggregate(entries: Iterable[EntryLike]) -> dict[str, NetPosition]:
    """
    Свёртка записей закрытой сессии в net-позиции.

    Args:
        entries: Записи сессии (Entry или сырые mapping из Entry Store)

    Returns:
        {participant: NetPosition}, ключи по возрастанию id

    Raises:
        InvalidEntry: Некорректная запись (до агрегации)
        UnbalancedSession: Σ net != 0
    """
    summary = summarize(entries)
    positions = positions_from_summary(summary)

    logger.debug(
        "Aggregated %d entries into %d positions (turnover=%d)",
        summary.entry_count,
        len(positions),
        summary.total_buy_in,
    )
    return positions


def aggregate_snapshot(snapshot: SessionSnapshot) -> dict[str, NetPosition]:
    """
    Свёртка снапшота сессии. Снапшот должен быть закрыт.

    Raises:
        SessionNotClosed: Если снапшот снят с открытой сессии
    """
    if not snapshot.is_closed():
        raise SessionNotClosed(snapshot.session_id)
    return aggregate(snapshot.entries)
