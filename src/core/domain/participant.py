"""
Participant — идентификатор участника сессии

Непрозрачный строковый идентификатор, стабильный между сессиями и
уникальный внутри сессии. Порядок для детерминированного tie-break —
обычное лексикографическое сравнение строк.
"""

from typing import Iterable


ParticipantId = str


def validate_participant_id(value: object, name: str = "participant") -> str:
    """
    Проверка идентификатора участника.

    Raises:
        ValueError: Если значение не строка или пустое/из пробелов
    """
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{name} must be a non-empty identifier")
    return value


def sorted_participants(participants: Iterable[str]) -> list[str]:
    """Участники в порядке tie-break (по возрастанию id), без дубликатов."""
    return sorted(set(participants))
