"""Trace Protocol State Machine — проверка trace последовательного deferred acceptance.

Протокол:
- Companies обрабатываются строго по порядку индексов: активна company hire_index
- Активная company делает offers (fromCompany = True) всем N candidates
- Acceptance (fromCompany = False) финализирует активную company: hire_index += 1
- Итог: ровно N * N offers и N acceptances

Состояние — неизменяемый ProtocolState(hire_index, num_offers), который
сворачивается по trace слева направо. Любое событие не для активной company —
нарушение протокола.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List

from matching_oracle.core.domain.instance import PreferenceList
from matching_oracle.core.domain.trace import TraceEvent
from matching_oracle.core.errors import (
    ProtocolCountViolation,
    ProtocolMismatchViolation,
    ProtocolOrderViolation,
    ProtocolReferenceViolation,
)


class ProtocolPhase(str, Enum):
    """Фаза протокола.

    - OFFERING: company hire_index ещё ожидает финализации
    - FINISHED: все N companies финализированы
    """
    OFFERING = "OFFERING"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class ProtocolState:
    """Аккумулятор свёртки trace."""

    hire_index: int = 0
    num_offers: int = 0

    def phase(self, n: int) -> ProtocolPhase:
        return ProtocolPhase.FINISHED if self.hire_index >= n else ProtocolPhase.OFFERING


@dataclass(frozen=True)
class ProtocolTransition:
    """Результат применения одного события trace."""

    new_state: ProtocolState
    previous_state: ProtocolState
    position: int
    transition_reason: str

    # Для отладки
    details: str


class TraceProtocolMachine:
    """State machine протокола offer/acceptance для одного instance.

    Проверки offer (from, to):
    1. from == hire_index
    2. from присутствует в candidates[to]

    Проверки acceptance (from, to):
    1. to == hire_index
    2. to присутствует в companies[from]
    3. candidates[to][позиция to в companies[from]] == from
    """

    def __init__(self, companies: List[PreferenceList], candidates: List[PreferenceList]):
        """
        Args:
            companies: предпочтения companies по candidates
            candidates: предпочтения candidates по companies
        """
        self.companies = companies
        self.candidates = candidates
        self.n = len(companies)

    def step(self, state: ProtocolState, event: TraceEvent, position: int = 0) -> ProtocolTransition:
        """Применение одного события.

        Args:
            state: текущее состояние
            event: событие trace
            position: позиция события в trace (для сообщений)

        Returns:
            ProtocolTransition с новым состоянием

        Raises:
            ProtocolOrderViolation: событие не для активной company
            ProtocolReferenceViolation: индекс отсутствует в списке предпочтений
            ProtocolMismatchViolation: индексы acceptance не согласованы
        """
        if event.is_offer:
            return self._apply_offer(state, event, position)
        return self._apply_acceptance(state, event, position)

    def run(self, trace: Iterable[TraceEvent]) -> ProtocolState:
        """Свёртка всего trace; возвращает итоговое состояние без проверки счётчиков."""
        state = ProtocolState()
        for position, event in enumerate(trace):
            state = self.step(state, event, position).new_state
        return state

    def finish(self, state: ProtocolState) -> None:
        """Проверка итоговых счётчиков.

        Raises:
            ProtocolCountViolation: num_offers != N * N или hire_index != N
        """
        expected_offers = self.n * self.n
        if state.num_offers != expected_offers:
            raise ProtocolCountViolation(
                f"Incorrect number of offers made: expected {expected_offers}, got {state.num_offers}",
                details={"expected": expected_offers, "actual": state.num_offers},
            )
        if state.hire_index != self.n:
            raise ProtocolCountViolation(
                f"Incorrect number of hires made: expected {self.n}, got {state.hire_index}",
                details={"expected": self.n, "actual": state.hire_index},
            )

    def validate(self, trace: Iterable[TraceEvent]) -> ProtocolState:
        """run() + finish()."""
        state = self.run(trace)
        self.finish(state)
        return state

    def _apply_offer(self, state: ProtocolState, event: TraceEvent, position: int) -> ProtocolTransition:
        company, candidate = event.from_, event.to

        if company != state.hire_index:
            raise ProtocolOrderViolation(
                f"Unexpected offer from company {company} at trace position {position}: "
                f"active company is {state.hire_index}",
                details={"position": position, "company": company, "active": state.hire_index},
            )

        if not self._has_preference(self.candidates, candidate, company):
            raise ProtocolReferenceViolation(
                f"Invalid offer to candidate {candidate} at trace position {position}: "
                f"company {company} is not on its preference list",
                details={"position": position, "company": company, "candidate": candidate},
            )

        new_state = replace(state, num_offers=state.num_offers + 1)
        return ProtocolTransition(
            new_state=new_state,
            previous_state=state,
            position=position,
            transition_reason="offer",
            details=f"company {company} -> candidate {candidate}, offers={new_state.num_offers}",
        )

    def _apply_acceptance(self, state: ProtocolState, event: TraceEvent, position: int) -> ProtocolTransition:
        # companies[from] ищется по to, candidates[to] по найденной позиции
        acceptor, target = event.from_, event.to

        if target != state.hire_index:
            raise ProtocolOrderViolation(
                f"Unexpected acceptance for company {target} at trace position {position}: "
                f"active company is {state.hire_index}",
                details={"position": position, "to": target, "active": state.hire_index},
            )

        if not self._has_preference(self.companies, acceptor, target):
            raise ProtocolReferenceViolation(
                f"Invalid acceptance at trace position {position}: "
                f"{target} is not on preference list of {acceptor}",
                details={"position": position, "from": acceptor, "to": target},
            )

        rank = self.companies[acceptor].index(target)
        if not 0 <= target < len(self.candidates) or rank >= len(self.candidates[target]):
            raise ProtocolReferenceViolation(
                f"Invalid acceptance at trace position {position}: "
                f"no preference entry {rank} for {target}",
                details={"position": position, "from": acceptor, "to": target, "rank": rank},
            )

        if self.candidates[target][rank] != acceptor:
            raise ProtocolMismatchViolation(
                f"Invalid match at trace position {position}: entry {rank} of preference "
                f"list {target} is {self.candidates[target][rank]}, expected {acceptor}",
                details={"position": position, "from": acceptor, "to": target, "rank": rank},
            )

        new_state = replace(state, hire_index=state.hire_index + 1)
        return ProtocolTransition(
            new_state=new_state,
            previous_state=state,
            position=position,
            transition_reason="acceptance",
            details=f"company {target} finalized, hire_index={new_state.hire_index}",
        )

    @staticmethod
    def _has_preference(side: List[PreferenceList], owner: int, item: int) -> bool:
        return 0 <= owner < len(side) and item in side[owner]
