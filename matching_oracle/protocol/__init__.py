"""Протокол offer/acceptance — state machine проверки trace."""

from .state_machine import (
    ProtocolPhase,
    ProtocolState,
    ProtocolTransition,
    TraceProtocolMachine,
)

__all__ = [
    "ProtocolPhase",
    "ProtocolState",
    "ProtocolTransition",
    "TraceProtocolMachine",
]
