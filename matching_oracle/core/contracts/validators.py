"""
JSON Schema Contract Validators

Валидация записей, возвращённых solver, против формальных JSON Schema
контрактов. Использует библиотеку jsonschema (Draft 2020-12).

Схемы (matching_oracle/core/contracts/schema/):
- hire.json: ровно company и candidate, оба integer
- trace_event.json: from, to (integer) и ровно один из fromCompany / fromCo
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'hire')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
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
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class HireValidator(ContractValidator):
    """Валидатор для hire контракта."""

    def __init__(self):
        super().__init__("hire")


class TraceEventValidator(ContractValidator):
    """Валидатор для trace_event контракта."""

    def __init__(self):
        super().__init__("trace_event")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Validators создаются один раз: oracle проверяет тысячи записей за прогон
_HIRE_VALIDATOR: Optional[HireValidator] = None
_TRACE_EVENT_VALIDATOR: Optional[TraceEventValidator] = None


def validate_hire(data: Dict[str, Any]) -> None:
    """
    Валидация hire записи.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    global _HIRE_VALIDATOR
    if _HIRE_VALIDATOR is None:
        _HIRE_VALIDATOR = HireValidator()
    _HIRE_VALIDATOR.validate(data)


def validate_trace_event(data: Dict[str, Any]) -> None:
    """
    Валидация trace_event записи.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    global _TRACE_EVENT_VALIDATOR
    if _TRACE_EVENT_VALIDATOR is None:
        _TRACE_EVENT_VALIDATOR = TraceEventValidator()
    _TRACE_EVENT_VALIDATOR.validate(data)
