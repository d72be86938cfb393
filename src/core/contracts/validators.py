"""
JSON Schema Contract Validators

Модуль для валидации JSON данных на границе ядра согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- ledger_entry.json (запись Entry Store на входе агрегатора)
- settlement_plan.json (сериализованный план на выходе для presentation/payments)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'settlement_plan')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика (read-mostly кэш, повторная загрузка идемпотентна)
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (ValidationError)."""
        return self.validator.iter_errors(data)


class LedgerEntryContractValidator(ContractValidator):
    """Валидатор для ledger_entry контракта."""

    def __init__(self):
        super().__init__("ledger_entry")


class SettlementPlanContractValidator(ContractValidator):
    """Валидатор для settlement_plan контракта."""

    def __init__(self):
        super().__init__("settlement_plan")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_ledger_entry(data: Dict[str, Any]) -> None:
    """
    Валидация сырой записи Entry Store.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    LedgerEntryContractValidator().validate(data)


def validate_settlement_plan(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного плана (SettlementPlan.to_dict()).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SettlementPlanContractValidator().validate(data)
