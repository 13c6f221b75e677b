"""
Instance Generator — случайные профили предпочтений

Каждый список предпочтений — равновероятная перестановка [0, n),
полученная in-place тасовкой Fisher–Yates за линейное время.
Списки разных участников — независимые выборки.
"""

import random
from typing import List, Optional

from matching_oracle.core.domain.instance import Instance, PreferenceList


def shuffle_in_place(values: List[int], rng: random.Random) -> None:
    """
    Fisher–Yates: j от len-1 до 1, k ~ U[0, j], swap(j, k).

    Args:
        values: список для перестановки (мутируется)
        rng: источник случайности (random.Random-совместимый, нужен randint)
    """
    for j in range(len(values) - 1, 0, -1):
        k = rng.randint(0, j)
        values[j], values[k] = values[k], values[j]


def generate_instance_side(n: int, rng: Optional[random.Random] = None) -> List[PreferenceList]:
    """
    Предпочтения одной стороны рынка.

    Args:
        n: число участников каждой стороны (>= 0)
        rng: источник случайности (default: новый random.Random())

    Returns:
        n списков, каждый — случайная перестановка [0, n)

    Raises:
        ValueError: если n < 0
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    rng = rng or random.Random()
    side: List[PreferenceList] = []
    for _ in range(n):
        prefs = list(range(n))
        shuffle_in_place(prefs, rng)
        side.append(prefs)
    return side


def generate_instance(n: int, rng: Optional[random.Random] = None) -> Instance:
    """Полный instance: companies, затем candidates."""
    rng = rng or random.Random()
    companies = generate_instance_side(n, rng)
    candidates = generate_instance_side(n, rng)
    return Instance(companies=companies, candidates=candidates)
