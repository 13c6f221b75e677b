"""Trace Validator — run oracle для traced stable matching solver

Traced solver: (companies, candidates) -> {trace, out}.

Проверки каждого trial:
1. Стабильность out (scan с допуском повторов): первая пара для каждой
   company / candidate запоминается; при повторе с другим партнёром —
   нестабильность, если запомненный партнёр ранжирован хуже нового.
   Биекция out не проверяется.
2. Соответствие trace протоколу (TraceProtocolMachine):
   companies по порядку, N * N offers, N acceptances.
"""

from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

import jsonschema
import pydantic

from matching_oracle.core.contracts import validate_trace_event
from matching_oracle.core.domain.hire import Hire, record_payload
from matching_oracle.core.domain.instance import Instance, PreferenceList
from matching_oracle.core.domain.trace import TracedResult, TraceEvent
from matching_oracle.core.errors import IndexRangeViolation, InstabilityViolation, ShapeViolation
from matching_oracle.oracles.base import OracleConfig, OracleReport, resolve_config, run_trials
from matching_oracle.oracles.stable_matching import read_hires
from matching_oracle.protocol.state_machine import ProtocolState, TraceProtocolMachine

TracedSolver = Callable[[List[PreferenceList], List[PreferenceList]], Any]

ORACLE_NAME = "stable_matching_run"

# Python-имена полей TraceEvent -> имена контракта trace_event
_EVENT_KEY_ALIASES = {"from_": "from", "from_company": "fromCompany"}


# =============================================================================
# SHAPE
# =============================================================================


def read_trace_event(record: Any, position: int) -> TraceEvent:
    """Разбор одного события trace.

    Raises:
        ShapeViolation: событие не соответствует контракту trace_event
    """
    try:
        payload = record_payload(record)
    except TypeError as e:
        raise ShapeViolation(
            f"Trace event at position {position} is not a record: {e}",
            details={"position": position},
        ) from e
    payload = {_EVENT_KEY_ALIASES.get(key, key): value for key, value in payload.items()}

    try:
        validate_trace_event(payload)
    except jsonschema.ValidationError as e:
        raise ShapeViolation(
            f"Trace event at position {position} has invalid shape: {e.message}",
            details={"position": position, "fields": sorted(map(str, payload))},
        ) from e

    try:
        return TraceEvent.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ShapeViolation(
            f"Trace event at position {position} has invalid field types: {e.errors()[0]['msg']}",
            details={"position": position},
        ) from e


def read_traced_result(result: Any) -> Tuple[List[TraceEvent], List[Hire]]:
    """Разбор результата traced solver.

    Принимает TracedResult, mapping {trace, out}, объект с атрибутами
    trace / out или пару (trace, out).

    Raises:
        ShapeViolation: результат не содержит trace и out
    """
    if isinstance(result, TracedResult):
        trace, out = result.trace, result.out
    elif isinstance(result, Mapping):
        if "trace" not in result or "out" not in result:
            raise ShapeViolation(
                f"Traced result must have 'trace' and 'out', got keys {sorted(map(str, result))}"
            )
        trace, out = result["trace"], result["out"]
    elif isinstance(result, (tuple, list)) and len(result) == 2:
        trace, out = result
    elif hasattr(result, "trace") and hasattr(result, "out"):
        trace, out = result.trace, result.out
    else:
        raise ShapeViolation(f"Unsupported traced result of type {type(result).__name__}")

    if isinstance(trace, (str, bytes, Mapping)):
        raise ShapeViolation(f"Expected a sequence of trace events, got {type(trace).__name__}")
    try:
        events = list(trace)
    except TypeError as e:
        raise ShapeViolation(f"Expected a sequence of trace events, got {type(trace).__name__}") from e

    return (
        [read_trace_event(event, position) for position, event in enumerate(events)],
        read_hires(out),
    )


# =============================================================================
# OUTPUT STABILITY
# =============================================================================


def _preference_list(side: List[PreferenceList], owner: int, label: str) -> PreferenceList:
    if not 0 <= owner < len(side):
        raise IndexRangeViolation(
            f"Invalid {label} index {owner}",
            details={label: owner, "n": len(side)},
        )
    return side[owner]


def _rank(prefs: PreferenceList, item: int) -> int:
    # -1 для отсутствующего элемента
    return prefs.index(item) if item in prefs else -1


def check_output_stability(
    companies: List[PreferenceList],
    candidates: List[PreferenceList],
    out: List[Hire],
) -> None:
    """Попарный scan out с допуском повторов.

    Raises:
        InstabilityViolation: запомненный партнёр ранжирован хуже нового
        IndexRangeViolation: индекс повторной записи вне [0, N)
    """
    company_to_candidate: dict[int, int] = {}
    candidate_to_company: dict[int, int] = {}

    for hire in out:
        if hire.company not in company_to_candidate:
            company_to_candidate[hire.company] = hire.candidate
        else:
            current = company_to_candidate[hire.company]
            prefs = _preference_list(companies, hire.company, "company")
            if _rank(prefs, current) > _rank(prefs, hire.candidate):
                raise InstabilityViolation(
                    f"Matching is not stable: company {hire.company} prefers candidate "
                    f"{hire.candidate} to recorded candidate {current}",
                    details={"company": hire.company, "candidate": hire.candidate, "recorded": current},
                )

        if hire.candidate not in candidate_to_company:
            candidate_to_company[hire.candidate] = hire.company
        else:
            current = candidate_to_company[hire.candidate]
            prefs = _preference_list(candidates, hire.candidate, "candidate")
            if _rank(prefs, current) > _rank(prefs, hire.company):
                raise InstabilityViolation(
                    f"Matching is not stable: candidate {hire.candidate} prefers company "
                    f"{hire.company} to recorded company {current}",
                    details={"candidate": hire.candidate, "company": hire.company, "recorded": current},
                )


# =============================================================================
# ORACLE
# =============================================================================


class TraceRunOracle:
    """Run oracle: стабильность out и соответствие trace протоколу."""

    def __init__(self, config: Optional[OracleConfig] = None):
        self.config = config or OracleConfig()

    def check(
        self,
        companies: List[PreferenceList],
        candidates: List[PreferenceList],
        result: Any,
    ) -> ProtocolState:
        """Все проверки одного trial для заданного instance.

        Returns:
            Итоговое состояние протокола

        Raises:
            OracleViolation: первое найденное нарушение
        """
        trace, out = read_traced_result(result)
        check_output_stability(companies, candidates, out)
        return TraceProtocolMachine(companies, candidates).validate(trace)

    def run(self, traced_solver: TracedSolver, rng=None) -> OracleReport:
        """Прогон config.trials случайных trials против traced solver."""

        def trial(instance: Instance) -> None:
            result = traced_solver(*instance.solver_args())
            self.check(instance.companies, instance.candidates, result)

        return run_trials(ORACLE_NAME, self.config, trial, rng=rng)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def check_trace(
    companies: List[PreferenceList],
    candidates: List[PreferenceList],
    result: Any,
) -> ProtocolState:
    """Проверки одного trial для фиксированного instance."""
    return TraceRunOracle().check(companies, candidates, result)


def run_trace_oracle(
    traced_solver: TracedSolver,
    trials: Optional[int] = None,
    n: Optional[int] = None,
    rng=None,
    config: Optional[OracleConfig] = None,
) -> OracleReport:
    """
    Проверка, что traced solver следует протоколу и его trace согласован с out.

    Args:
        traced_solver: (companies, candidates) -> {trace, out}
        trials: число trials (default 100)
        n: размер instance (default 20)
        rng: источник случайности (random.Random)
        config: готовая конфигурация; trials / n переопределяют её поля

    Raises:
        OracleViolation: первое найденное нарушение
    """
    return TraceRunOracle(resolve_config(config, trials, n)).run(traced_solver, rng=rng)
