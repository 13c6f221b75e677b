"""
Общие fixtures: эталонные solvers и детерминированные источники случайности.
"""

import random

import pytest


class IdentityRandom(random.Random):
    """randint(a, b) всегда возвращает b: Fisher–Yates оставляет identity."""

    def randint(self, a, b):
        return b


def gale_shapley(companies, candidates):
    """Company-proposing deferred acceptance."""
    n = len(companies)
    rank = [{company: r for r, company in enumerate(prefs)} for prefs in candidates]
    next_choice = [0] * n
    holder = [None] * n  # candidate -> company
    free = list(range(n))

    while free:
        company = free.pop()
        candidate = companies[company][next_choice[company]]
        next_choice[company] += 1
        current = holder[candidate]
        if current is None:
            holder[candidate] = company
        elif rank[candidate][company] < rank[candidate][current]:
            holder[candidate] = company
            free.append(current)
        else:
            free.append(company)

    return [{"company": holder[candidate], "candidate": candidate} for candidate in range(n)]


def traced_gale_shapley(companies, candidates):
    """Trace последовательного протокола: N offers на company, затем acceptance."""
    n = len(companies)
    trace = []
    for company in range(n):
        for candidate in companies[company]:
            trace.append({"from": company, "to": candidate, "fromCompany": True})
        acceptor = next(
            (f for f in range(n) if candidates[company][companies[f].index(company)] == f),
            company,
        )
        trace.append({"from": acceptor, "to": company, "fromCompany": False})
    return {"trace": trace, "out": gale_shapley(companies, candidates)}


@pytest.fixture
def reference_solver():
    """Корректный stable matching solver."""
    return gale_shapley


@pytest.fixture
def traced_reference_solver():
    """Корректный traced solver."""
    return traced_gale_shapley


@pytest.fixture
def identity_rng():
    """Все списки предпочтений — identity."""
    return IdentityRandom()


@pytest.fixture
def seeded_rng():
    return random.Random(20240611)


@pytest.fixture
def identity_instance():
    """N=2, каждая сторона предпочитает identity пары."""
    return [[0, 1], [1, 0]], [[0, 1], [1, 0]]
