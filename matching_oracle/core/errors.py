"""
Violations — таксономия нарушений oracle

Каждое нарушение — отдельный тип исключения, чтобы вызывающий код (и тесты)
могли различать вид нарушения, а не разбирать текст сообщения.

Группы:
- StructuralViolation: форма записей, кардинальность, дубли, покрытие, индексы
- SemanticViolation: нестабильность, неполные списки предпочтений
- ProtocolViolation: порядок событий trace, ссылки, счётчики

Политика: fail-fast. Первое нарушение прерывает весь прогон oracle.
"""

from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class ViolationKind(str, Enum):
    """Вид нарушения."""

    SHAPE = "shape"
    CARDINALITY = "cardinality"
    DOUBLE_BOOKING = "double_booking"
    COVERAGE = "coverage"
    INDEX_RANGE = "index_range"
    INSTABILITY = "instability"
    INCOMPLETE_PREFERENCES = "incomplete_preferences"
    PROTOCOL_ORDER = "protocol_order"
    PROTOCOL_REFERENCE = "protocol_reference"
    PROTOCOL_MISMATCH = "protocol_mismatch"
    PROTOCOL_COUNT = "protocol_count"


class OracleViolation(AssertionError):
    """
    Базовое нарушение, обнаруженное oracle.

    Наследуется от AssertionError: test runner показывает его как
    проваленную проверку.

    Attributes:
        kind: вид нарушения
        details: задействованные индексы (company, candidate, position, ...)
        trial: номер trial, в котором обнаружено нарушение (ставится циклом trial)
    """

    kind: ClassVar[ViolationKind]

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.trial: Optional[int] = None

    def __str__(self) -> str:
        if self.trial is None:
            return f"[{self.kind.value}] {self.message}"
        return f"[{self.kind.value}] trial {self.trial}: {self.message}"


# =============================================================================
# GROUPS
# =============================================================================


class StructuralViolation(OracleViolation):
    """Нарушение структуры matching."""


class SemanticViolation(OracleViolation):
    """Нарушение смысловых свойств (стабильность, полнота предпочтений)."""


class ProtocolViolation(OracleViolation):
    """Нарушение offer/acceptance протокола в trace."""


# =============================================================================
# STRUCTURAL
# =============================================================================


class ShapeViolation(StructuralViolation):
    kind = ViolationKind.SHAPE


class CardinalityViolation(StructuralViolation):
    kind = ViolationKind.CARDINALITY


class DoubleBookingViolation(StructuralViolation):
    kind = ViolationKind.DOUBLE_BOOKING


class CoverageViolation(StructuralViolation):
    kind = ViolationKind.COVERAGE


class IndexRangeViolation(StructuralViolation):
    kind = ViolationKind.INDEX_RANGE


# =============================================================================
# SEMANTIC
# =============================================================================


class InstabilityViolation(SemanticViolation):
    kind = ViolationKind.INSTABILITY


class IncompletePreferencesViolation(SemanticViolation):
    kind = ViolationKind.INCOMPLETE_PREFERENCES


# =============================================================================
# PROTOCOL
# =============================================================================


class ProtocolOrderViolation(ProtocolViolation):
    """Событие для company, отличной от активной (hire_index)."""

    kind = ViolationKind.PROTOCOL_ORDER


class ProtocolReferenceViolation(ProtocolViolation):
    """Индекс отсутствует в соответствующем списке предпочтений."""

    kind = ViolationKind.PROTOCOL_REFERENCE


class ProtocolMismatchViolation(ProtocolViolation):
    """Индексы двух сторон acceptance не согласованы."""

    kind = ViolationKind.PROTOCOL_MISMATCH


class ProtocolCountViolation(ProtocolViolation):
    """Итоговое число offers/hires не совпадает с ожидаемым."""

    kind = ViolationKind.PROTOCOL_COUNT
