"""Тесты для Matching Validator (full-property oracle)

Покрытие:
- Эталонный solver проходит на разных seeds
- Каждый сломанный solver даёт свой вид нарушения
- Литеральный сценарий N=2
- Форма записей solver
- Конфигурация и отчёт
"""

import random

import pytest

from matching_oracle import (
    Hire,
    OracleConfig,
    OracleReport,
    OracleViolation,
    ViolationKind,
    check_matching,
    run_matching_oracle,
)
from matching_oracle.core.errors import (
    CardinalityViolation,
    CoverageViolation,
    DoubleBookingViolation,
    IncompletePreferencesViolation,
    IndexRangeViolation,
    InstabilityViolation,
    ShapeViolation,
    StructuralViolation,
)
from matching_oracle.oracles import StableMatchingOracle
from matching_oracle.oracles.stable_matching import check_coverage


# =============================================================================
# ACCEPTANCE
# =============================================================================


class TestReferenceSolverAccepted:
    """Корректный solver проходит все trials."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_many_seeds(self, reference_solver, seed):
        report = run_matching_oracle(reference_solver, trials=25, n=20, rng=random.Random(seed))

        assert report == OracleReport(oracle="stable_matching", trials=25, n=20)

    def test_default_configuration(self, reference_solver):
        report = run_matching_oracle(reference_solver)

        assert report.trials == 100
        assert report.n == 20

    def test_models_as_output(self, reference_solver, seeded_rng):
        def solver(companies, candidates):
            return [Hire(**hire) for hire in reference_solver(companies, candidates)]

        run_matching_oracle(solver, trials=10, n=8, rng=seeded_rng)

    def test_solver_mutation_does_not_leak(self, reference_solver, seeded_rng):
        def solver(companies, candidates):
            hires = reference_solver(companies, candidates)
            for prefs in companies + candidates:
                prefs.clear()
            return hires

        run_matching_oracle(solver, trials=10, n=6, rng=seeded_rng)

    def test_zero_trials_never_calls_solver(self):
        def solver(companies, candidates):
            raise AssertionError("solver must not be called")

        assert run_matching_oracle(solver, trials=0).trials == 0

    def test_empty_instances(self):
        assert run_matching_oracle(lambda companies, candidates: [], trials=3, n=0).n == 0


# =============================================================================
# REJECTION
# =============================================================================


class TestBrokenSolversRejected:
    """Каждый сломанный solver даёт свой вид нарушения."""

    def test_fewer_hires(self, reference_solver, seeded_rng):
        def solver(companies, candidates):
            return reference_solver(companies, candidates)[:-1]

        with pytest.raises(CardinalityViolation, match="Expected 20 hires, got 19") as exc:
            run_matching_oracle(solver, trials=5, rng=seeded_rng)

        assert exc.value.kind == ViolationKind.CARDINALITY
        assert exc.value.trial == 0

    def test_repeated_company(self, reference_solver, seeded_rng):
        def solver(companies, candidates):
            hires = reference_solver(companies, candidates)
            hires[1] = {"company": hires[0]["company"], "candidate": hires[1]["candidate"]}
            return hires

        with pytest.raises(DoubleBookingViolation, match="matched to multiple candidates"):
            run_matching_oracle(solver, trials=5, rng=seeded_rng)

    def test_repeated_candidate(self, reference_solver, seeded_rng):
        def solver(companies, candidates):
            hires = reference_solver(companies, candidates)
            hires[1] = {"company": hires[1]["company"], "candidate": hires[0]["candidate"]}
            return hires

        with pytest.raises(DoubleBookingViolation, match="matched to multiple companies"):
            run_matching_oracle(solver, trials=5, rng=seeded_rng)

    @pytest.mark.parametrize("field, value", [("company", 20), ("candidate", 25), ("company", -1)])
    def test_out_of_range_index(self, reference_solver, seeded_rng, field, value):
        def solver(companies, candidates):
            hires = reference_solver(companies, candidates)
            hires[-1] = dict(hires[-1], **{field: value})
            return hires

        with pytest.raises(IndexRangeViolation, match=f"Invalid {field} index {value}"):
            run_matching_oracle(solver, trials=5, rng=seeded_rng)

    def test_unstable_matching(self, reference_solver):
        # Сдвиг candidates относительно эталона: биекция, но не stable
        def solver(companies, candidates):
            hires = reference_solver(companies, candidates)
            n = len(hires)
            return [
                {"company": hires[i]["company"], "candidate": hires[(i + 1) % n]["candidate"]}
                for i in range(n)
            ]

        with pytest.raises(InstabilityViolation, match="not stable"):
            run_matching_oracle(solver, trials=20, n=20, rng=random.Random(1))

    def test_solver_exception_propagates(self, seeded_rng):
        def solver(companies, candidates):
            raise RuntimeError("solver crashed")

        with pytest.raises(RuntimeError, match="solver crashed"):
            run_matching_oracle(solver, trials=1, rng=seeded_rng)

    def test_first_violation_stops_run(self, reference_solver, seeded_rng):
        calls = []

        def solver(companies, candidates):
            calls.append(1)
            hires = reference_solver(companies, candidates)
            return hires if len(calls) < 3 else hires[:1]

        with pytest.raises(CardinalityViolation) as exc:
            run_matching_oracle(solver, trials=10, n=5, rng=seeded_rng)

        assert len(calls) == 3
        assert exc.value.trial == 2
        assert "trial 2" in str(exc.value)


# =============================================================================
# FIXED INSTANCES
# =============================================================================


class TestFixedInstances:
    """Проверки одного trial на заданных instances."""

    def test_literal_scenario_accepts_identity(self, identity_instance, reference_solver):
        companies, candidates = identity_instance

        hires = reference_solver(companies, candidates)

        assert {(h["company"], h["candidate"]) for h in hires} == {(0, 0), (1, 1)}
        assert check_matching(companies, candidates, hires) == [
            Hire(company=0, candidate=0),
            Hire(company=1, candidate=1),
        ]

    def test_literal_scenario_rejects_swap(self, identity_instance):
        companies, candidates = identity_instance

        with pytest.raises(InstabilityViolation) as exc:
            check_matching(
                companies,
                candidates,
                [{"company": 0, "candidate": 1}, {"company": 1, "candidate": 0}],
            )

        assert exc.value.details == {
            "company": 1,
            "candidate": 1,
            "company_partner": 0,
            "candidate_partner": 0,
        }

    def test_known_blocking_pair(self):
        # company 0 ставит candidate 1 выше своего 0; candidate 1 ставит company 0 выше своей 1
        companies = [[1, 0], [0, 1]]
        candidates = [[0, 1], [0, 1]]
        hires = [{"company": 0, "candidate": 0}, {"company": 1, "candidate": 1}]

        with pytest.raises(InstabilityViolation, match="company 0 and candidate 1"):
            check_matching(companies, candidates, hires)

    def test_incomplete_company_preferences(self):
        companies = [[0, 0], [1, 0]]
        candidates = [[0, 1], [1, 0]]

        with pytest.raises(IncompletePreferencesViolation, match="Company 0 has no preference for candidate 1"):
            check_matching(companies, candidates, [{"company": 0, "candidate": 0}, {"company": 1, "candidate": 1}])

    def test_incomplete_candidate_preferences(self):
        companies = [[0, 1], [1, 0]]
        candidates = [[0, 1], [1]]

        with pytest.raises(IncompletePreferencesViolation, match="Candidate 1 has no preference for company 0"):
            check_matching(companies, candidates, [{"company": 0, "candidate": 0}, {"company": 1, "candidate": 1}])

    def test_coverage_helper(self):
        with pytest.raises(CoverageViolation, match=r"no partner for companies \[2\]"):
            check_coverage([Hire(company=0, candidate=0), Hire(company=1, candidate=1)], 3)


# =============================================================================
# SHAPE
# =============================================================================


class TestShape:
    """Форма записей solver."""

    @pytest.mark.parametrize(
        "record",
        [
            {"company": 0},
            {"company": 0, "candidate": 0, "rank": 1},
            {"company": "0", "candidate": 0},
            {"company": 0.0, "candidate": 0},
            {"company": False, "candidate": 0},
            (0, 0),
        ],
        ids=["missing-field", "extra-field", "string", "float", "bool", "bare-tuple"],
    )
    def test_malformed_hire(self, record):
        with pytest.raises(ShapeViolation):
            check_matching([[0]], [[0]], [record])

    @pytest.mark.parametrize("hires", [None, 5, "00", {"company": 0, "candidate": 0}])
    def test_not_a_sequence(self, hires):
        with pytest.raises(ShapeViolation, match="Expected a sequence of hires"):
            check_matching([[0]], [[0]], hires)

    def test_shape_is_structural(self):
        with pytest.raises(StructuralViolation):
            check_matching([[0]], [[0]], [{"company": 0}])

    def test_generator_output_accepted(self):
        hires = (hire for hire in [{"company": 0, "candidate": 0}])

        check_matching([[0]], [[0]], hires)


# =============================================================================
# CONFIG
# =============================================================================


class TestConfig:
    """OracleConfig."""

    def test_defaults(self):
        assert OracleConfig() == OracleConfig(trials=100, n=20)

    @pytest.mark.parametrize("kwargs", [{"trials": -1}, {"n": -5}])
    def test_negative_rejected(self, kwargs):
        with pytest.raises(ValueError, match="must be non-negative"):
            OracleConfig(**kwargs)

    def test_explicit_args_override_config(self, reference_solver, seeded_rng):
        report = run_matching_oracle(
            reference_solver, n=4, rng=seeded_rng, config=OracleConfig(trials=3, n=50)
        )

        assert report == OracleReport(oracle="stable_matching", trials=3, n=4)

    def test_oracle_class(self, reference_solver, seeded_rng):
        oracle = StableMatchingOracle(OracleConfig(trials=2, n=3))

        assert oracle.run(reference_solver, rng=seeded_rng).trials == 2

    def test_violation_is_assertion_error(self):
        assert issubclass(OracleViolation, AssertionError)
