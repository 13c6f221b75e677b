"""
matching_oracle — correctness oracle для stable matching (Gale–Shapley) solvers.

Oracle не решает задачу сам: генерирует случайные профили предпочтений,
вызывает проверяемый solver и проверяет результат.
"""

from matching_oracle.core.domain import Hire, Instance, TracedResult, TraceEvent
from matching_oracle.core.errors import OracleViolation, ViolationKind
from matching_oracle.core.generator import generate_instance, generate_instance_side
from matching_oracle.oracles import (
    OracleConfig,
    OracleReport,
    check_matching,
    check_trace,
    run_matching_oracle,
    run_trace_oracle,
)

__all__ = [
    "Hire",
    "Instance",
    "TraceEvent",
    "TracedResult",
    "OracleViolation",
    "ViolationKind",
    "generate_instance",
    "generate_instance_side",
    "OracleConfig",
    "OracleReport",
    "check_matching",
    "check_trace",
    "run_matching_oracle",
    "run_trace_oracle",
]
