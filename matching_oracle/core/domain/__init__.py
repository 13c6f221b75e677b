"""
Domain models: профиль предпочтений, matching, trace протокола.
"""

from matching_oracle.core.domain.hire import Hire, Matching, record_payload
from matching_oracle.core.domain.instance import Instance, PreferenceList
from matching_oracle.core.domain.trace import Trace, TracedResult, TraceEvent

__all__ = [
    # Instance
    "Instance",
    "PreferenceList",
    # Matching
    "Hire",
    "Matching",
    "record_payload",
    # Trace
    "TraceEvent",
    "Trace",
    "TracedResult",
]
