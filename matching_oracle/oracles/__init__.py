"""Oracles — проверка stable matching solvers на случайных instances.

- StableMatchingOracle: структура, полнота и стабильность matching
- TraceRunOracle: стабильность out и соответствие trace протоколу
"""

from .base import OracleConfig, OracleReport, run_trials
from .stable_matching import StableMatchingOracle, check_matching, run_matching_oracle
from .trace_run import TraceRunOracle, check_trace, run_trace_oracle

__all__ = [
    "OracleConfig",
    "OracleReport",
    "run_trials",
    "StableMatchingOracle",
    "check_matching",
    "run_matching_oracle",
    "TraceRunOracle",
    "check_trace",
    "run_trace_oracle",
]
