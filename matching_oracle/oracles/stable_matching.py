"""Matching Validator — full-property oracle для stable matching solver

Solver: (companies, candidates) -> sequence of hires.

Проверки каждого trial (порядок проверок):
1. Форма записей: ровно company и candidate, оба integer
2. Кардинальность: len(hires) == N
3. Индексы в [0, N)
4. Нет double-booking: ни company, ни candidate не повторяются
5. Полнота предпочтений сгенерированного instance
6. Покрытие: matched companies и candidates == [0, N)
7. Стабильность: для каждой пары (c, k), где c не первый выбор k,
   company c', стоящая у k непосредственно перед c, не должна
   предпочитать k своему текущему candidate
"""

from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence

import jsonschema
import pydantic

from matching_oracle.core.contracts import validate_hire
from matching_oracle.core.domain.hire import Hire, record_payload
from matching_oracle.core.domain.instance import Instance, PreferenceList
from matching_oracle.core.errors import (
    CardinalityViolation,
    CoverageViolation,
    DoubleBookingViolation,
    IncompletePreferencesViolation,
    IndexRangeViolation,
    InstabilityViolation,
    ShapeViolation,
)
from matching_oracle.oracles.base import OracleConfig, OracleReport, resolve_config, run_trials

Solver = Callable[[List[PreferenceList], List[PreferenceList]], Sequence[Any]]

ORACLE_NAME = "stable_matching"


# =============================================================================
# SHAPE
# =============================================================================


def read_hire(record: Any, position: int) -> Hire:
    """Разбор одной записи solver в Hire.

    Raises:
        ShapeViolation: запись не соответствует контракту hire
    """
    try:
        payload = record_payload(record)
    except TypeError as e:
        raise ShapeViolation(
            f"Hire at position {position} is not a record: {e}",
            details={"position": position},
        ) from e

    try:
        validate_hire(payload)
    except jsonschema.ValidationError as e:
        raise ShapeViolation(
            f"Hire at position {position} has invalid shape: {e.message}",
            details={"position": position, "fields": sorted(map(str, payload))},
        ) from e

    try:
        return Hire.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ShapeViolation(
            f"Hire at position {position} has invalid field types: {e.errors()[0]['msg']}",
            details={"position": position},
        ) from e


def read_hires(hires: Any) -> List[Hire]:
    """Разбор всего matching.

    Raises:
        ShapeViolation: результат solver не последовательность или запись некорректна
    """
    if isinstance(hires, (str, bytes, Mapping)):
        raise ShapeViolation(f"Expected a sequence of hires, got {type(hires).__name__}")
    try:
        records = list(hires)
    except TypeError as e:
        raise ShapeViolation(f"Expected a sequence of hires, got {type(hires).__name__}") from e
    return [read_hire(record, position) for position, record in enumerate(records)]


# =============================================================================
# STRUCTURAL CHECKS
# =============================================================================


def check_cardinality(hires: List[Hire], n: int) -> None:
    if len(hires) != n:
        raise CardinalityViolation(
            f"Expected {n} hires, got {len(hires)}",
            details={"expected": n, "actual": len(hires)},
        )


def check_index_range(hires: List[Hire], n: int) -> None:
    for hire in hires:
        if not 0 <= hire.company < n:
            raise IndexRangeViolation(
                f"Invalid company index {hire.company}",
                details={"company": hire.company, "n": n},
            )
        if not 0 <= hire.candidate < n:
            raise IndexRangeViolation(
                f"Invalid candidate index {hire.candidate}",
                details={"candidate": hire.candidate, "n": n},
            )


def check_no_double_booking(hires: List[Hire]) -> None:
    company_matches: dict[int, int] = {}
    candidate_matches: dict[int, int] = {}
    for hire in hires:
        if hire.company in company_matches:
            raise DoubleBookingViolation(
                f"Company {hire.company} is matched to multiple candidates "
                f"({company_matches[hire.company]} and {hire.candidate})",
                details={"company": hire.company},
            )
        if hire.candidate in candidate_matches:
            raise DoubleBookingViolation(
                f"Candidate {hire.candidate} is matched to multiple companies "
                f"({candidate_matches[hire.candidate]} and {hire.company})",
                details={"candidate": hire.candidate},
            )
        company_matches[hire.company] = hire.candidate
        candidate_matches[hire.candidate] = hire.company


def check_coverage(hires: List[Hire], n: int) -> None:
    everyone = set(range(n))

    missing_companies = everyone - {hire.company for hire in hires}
    if missing_companies:
        raise CoverageViolation(
            f"Not all companies are matched: no partner for companies {sorted(missing_companies)}",
            details={"companies": sorted(missing_companies)},
        )

    missing_candidates = everyone - {hire.candidate for hire in hires}
    if missing_candidates:
        raise CoverageViolation(
            f"Not all candidates are matched: no partner for candidates {sorted(missing_candidates)}",
            details={"candidates": sorted(missing_candidates)},
        )


# =============================================================================
# SEMANTIC CHECKS
# =============================================================================


def check_preferences_complete(
    companies: List[PreferenceList],
    candidates: List[PreferenceList],
    n: int,
) -> None:
    """Каждая company ранжирует всех candidates и наоборот."""
    for side, owners, label, other in (
        ("Company", companies, "company", "candidate"),
        ("Candidate", candidates, "candidate", "company"),
    ):
        if len(owners) != n:
            raise IncompletePreferencesViolation(
                f"Expected {n} {label} preference lists, got {len(owners)}",
                details={"side": label, "expected": n, "actual": len(owners)},
            )
        for owner, prefs in enumerate(owners):
            missing = set(range(n)) - set(prefs)
            if missing:
                first = min(missing)
                raise IncompletePreferencesViolation(
                    f"{side} {owner} has no preference for {other} {first}",
                    details={label: owner, other: first},
                )


def check_stability(
    companies: List[PreferenceList],
    candidates: List[PreferenceList],
    hires: List[Hire],
) -> None:
    """Проверка стабильности по непосредственно предпочтённой company.

    Для hire (c, k): если c не первый выбор k, c' = company перед c в
    списке k, k' = текущий candidate c'. Нестабильно, если c' ставит k
    выше k'.
    """
    partner_of_company = {hire.company: hire.candidate for hire in hires}

    for hire in hires:
        prefs = candidates[hire.candidate]
        rank = prefs.index(hire.company)
        if rank == 0:
            continue

        rival = prefs[rank - 1]
        rival_partner = partner_of_company[rival]
        rival_prefs = companies[rival]
        if rival_prefs.index(hire.candidate) < rival_prefs.index(rival_partner):
            raise InstabilityViolation(
                f"Matching is not stable: company {rival} and candidate {hire.candidate} "
                f"prefer each other over their partners "
                f"(candidate {rival_partner}, company {hire.company})",
                details={
                    "company": rival,
                    "candidate": hire.candidate,
                    "company_partner": rival_partner,
                    "candidate_partner": hire.company,
                },
            )


# =============================================================================
# ORACLE
# =============================================================================


class StableMatchingOracle:
    """Full-property oracle: структура, полнота и стабильность matching."""

    def __init__(self, config: Optional[OracleConfig] = None):
        self.config = config or OracleConfig()

    def check(
        self,
        companies: List[PreferenceList],
        candidates: List[PreferenceList],
        hires: Any,
    ) -> List[Hire]:
        """Все проверки одного trial для заданного instance.

        Returns:
            Разобранный matching

        Raises:
            StructuralViolation / SemanticViolation: первое найденное нарушение
        """
        n = len(companies)
        parsed = read_hires(hires)

        check_cardinality(parsed, n)
        check_index_range(parsed, n)
        check_no_double_booking(parsed)
        check_preferences_complete(companies, candidates, n)
        check_coverage(parsed, n)
        check_stability(companies, candidates, parsed)
        return parsed

    def run(self, solver: Solver, rng=None) -> OracleReport:
        """Прогон config.trials случайных trials против solver."""

        def trial(instance: Instance) -> None:
            hires = solver(*instance.solver_args())
            self.check(instance.companies, instance.candidates, hires)

        return run_trials(ORACLE_NAME, self.config, trial, rng=rng)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def check_matching(
    companies: List[PreferenceList],
    candidates: List[PreferenceList],
    hires: Any,
) -> List[Hire]:
    """Проверки одного trial для фиксированного instance."""
    return StableMatchingOracle().check(companies, candidates, hires)


def run_matching_oracle(
    solver: Solver,
    trials: Optional[int] = None,
    n: Optional[int] = None,
    rng=None,
    config: Optional[OracleConfig] = None,
) -> OracleReport:
    """
    Проверка, что solver решает задачу stable matching.

    Args:
        solver: (companies, candidates) -> hires
        trials: число trials (default 100)
        n: размер instance (default 20)
        rng: источник случайности (random.Random)
        config: готовая конфигурация; trials / n переопределяют её поля

    Raises:
        OracleViolation: первое найденное нарушение
    """
    return StableMatchingOracle(resolve_config(config, trials, n)).run(solver, rng=rng)
