"""Общий цикл trial для oracles.

Каждый trial: новый instance → вызов solver → проверки. Trials не
разделяют состояние. Первое нарушение прерывает весь прогон; номер trial
добавляется к нарушению перед повторным raise.
"""

import random
from dataclasses import dataclass
from typing import Callable, Optional

from matching_oracle.core.domain.instance import Instance
from matching_oracle.core.errors import OracleViolation
from matching_oracle.core.generator import generate_instance
from matching_oracle.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OracleConfig:
    """Конфигурация прогона oracle.

    Единственные настраиваемые параметры: число trials и размер instance.
    """

    trials: int = 100
    n: int = 20

    def __post_init__(self):
        if self.trials < 0:
            raise ValueError(f"trials must be non-negative, got {self.trials}")
        if self.n < 0:
            raise ValueError(f"n must be non-negative, got {self.n}")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OracleReport:
    """Итог успешного прогона oracle."""

    oracle: str
    trials: int
    n: int


# =============================================================================
# TRIAL LOOP
# =============================================================================


def resolve_config(
    config: Optional[OracleConfig],
    trials: Optional[int],
    n: Optional[int],
) -> OracleConfig:
    """Явные trials / n переопределяют поля config."""
    base = config or OracleConfig()
    return OracleConfig(
        trials=base.trials if trials is None else trials,
        n=base.n if n is None else n,
    )


def run_trials(
    oracle_name: str,
    config: OracleConfig,
    trial: Callable[[Instance], None],
    rng: Optional[random.Random] = None,
) -> OracleReport:
    """Прогон config.trials независимых trials.

    Args:
        oracle_name: имя oracle для логов и отчёта
        config: число trials и размер instance
        trial: проверка одного instance; сообщает нарушения через OracleViolation
        rng: источник случайности для генератора instance

    Returns:
        OracleReport, если ни один trial не нашёл нарушений

    Raises:
        OracleViolation: первое найденное нарушение (с номером trial)
    """
    rng = rng or random.Random()

    for index in range(config.trials):
        instance = generate_instance(config.n, rng)
        logger.debug(f"{oracle_name}: trial {index + 1}/{config.trials} (n={config.n})")
        try:
            trial(instance)
        except OracleViolation as violation:
            violation.trial = index
            logger.debug(f"{oracle_name}: violation in trial {index}: {violation}")
            raise

    logger.info(f"{oracle_name}: {config.trials} trials passed (n={config.n})")
    return OracleReport(oracle=oracle_name, trials=config.trials, n=config.n)
