"""Greedy largest-magnitude matching.

Алгоритм:
1. Нулевые позиции отбрасываются; creditors (amount > 0) и debtors (amount < 0)
   кладутся в MagnitudeQueue
2. Берутся крупнейший creditor и крупнейший debtor,
   t = min(credit, debt), эмитится Transfer(debtor → creditor, t)
3. Сторона, дошедшая до 0, выбывает; другая возвращается в очередь с остатком
4. Стоп, когда обе очереди пусты

Каждый шаг обнуляет хотя бы одного участника, последний — обоих,
поэтому переводов не больше n - 1 для n ненулевых участников.
"""

from typing import Mapping

from src.core.domain.transfer import Transfer
from src.settlement.priority import MagnitudeQueue


def greedy_transfers(amounts: Mapping[str, int]) -> list[Transfer]:
    """
    Greedy план для сбалансированных знаковых сумм.

    Args:
        amounts: {participant: signed amount}, Σ amount == 0 (проверяет вызывающий)

    Returns:
        Переводы в порядке эмиссии

    Raises:
        ValueError: Если одна из сторон исчерпалась раньше другой (Σ != 0)
    """
    creditors = MagnitudeQueue((p, a) for p, a in amounts.items() if a > 0)
    debtors = MagnitudeQueue((p, -a) for p, a in amounts.items() if a < 0)

    transfers: list[Transfer] = []

    while creditors and debtors:
        creditor, credit = creditors.pop()
        debtor, debt = debtors.pop()

        t = min(credit, debt)
        transfers.append(
            Transfer(from_participant=debtor, to_participant=creditor, amount=t)
        )

        if credit > t:
            creditors.push(creditor, credit - t)
        if debt > t:
            debtors.push(debtor, debt - t)

    if creditors or debtors:
        raise ValueError(
            f"Unbalanced amounts: {creditors.total()} left to receive, "
            f"{debtors.total()} left to pay"
        )

    return transfers
