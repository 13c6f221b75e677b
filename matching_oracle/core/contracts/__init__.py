"""
Contract Validation Module

Валидация записей solver (hire, trace_event) против JSON Schema контрактов.
"""

from .validators import (
    ContractValidator,
    HireValidator,
    SchemaLoader,
    TraceEventValidator,
    validate_hire,
    validate_trace_event,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "HireValidator",
    "TraceEventValidator",
    # Functions
    "validate_hire",
    "validate_trace_event",
]
