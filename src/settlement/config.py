"""Конфигурация Settlement Engine.

- exact_mode_participant_limit: exact search запускается только если число
  ненулевых участников в (0, limit]; 0 — exact mode выключен
- exact_mode_search_budget: лимит узлов exact search (не wall-clock,
  чтобы поведение было детерминированным); исчерпан → greedy fallback

Значения по умолчанию выключают exact mode: пороги задаются конфигурацией
продукта, а не константами ядра.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.errors import ConfigError


# Допустимые ключи внешней конфигурации → поля SettlementConfig
_CONFIG_KEYS = {
    "exact_mode_participant_limit": "exact_mode_participant_limit",
    "exactModeParticipantLimit": "exact_mode_participant_limit",
    "exact_mode_search_budget": "exact_mode_search_budget",
    "exactModeSearchBudget": "exact_mode_search_budget",
}


@dataclass(frozen=True)
class SettlementConfig:
    """Конфигурация выбора алгоритма settlement."""

    exact_mode_participant_limit: int = 0
    exact_mode_search_budget: int = 0

    def __post_init__(self) -> None:
        for name in ("exact_mode_participant_limit", "exact_mode_search_budget"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value}")

        if self.exact_mode_participant_limit > 0 and self.exact_mode_search_budget <= 0:
            raise ConfigError(
                "exact_mode_search_budget must be positive when exact mode is enabled "
                f"(exact_mode_participant_limit={self.exact_mode_participant_limit})"
            )

    @property
    def exact_mode_enabled(self) -> bool:
        return self.exact_mode_participant_limit > 0

    def allows_exact(self, nonzero_participants: int) -> bool:
        """Запускать ли exact search для данного числа ненулевых участников."""
        return 0 < nonzero_participants <= self.exact_mode_participant_limit

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SettlementConfig":
        """
        Конфигурация из mapping (snake_case или camelCase ключи).

        Raises:
            ConfigError: Неизвестный ключ или некорректное значение
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            field_name = _CONFIG_KEYS.get(key)
            if field_name is None:
                raise ConfigError(f"Unknown settlement config key: {key!r}")
            if field_name in kwargs:
                raise ConfigError(f"Settlement config key given twice: {field_name}")
            kwargs[field_name] = value
        return cls(**kwargs)


class SettlementSettings(BaseSettings):
    """Конфигурация из окружения (LEDGER_*) и опционального .env файла."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    exact_mode_participant_limit: int = 0
    exact_mode_search_budget: int = 0

    def to_config(self) -> SettlementConfig:
        return SettlementConfig(
            exact_mode_participant_limit=self.exact_mode_participant_limit,
            exact_mode_search_budget=self.exact_mode_search_budget,
        )
