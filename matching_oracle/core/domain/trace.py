"""
Trace — События offer/acceptance протокола deferred acceptance

TraceEvent(from, to, fromCompany):
- fromCompany = True: company `from` делает offer candidate `to`
- fromCompany = False: acceptance, связанный с company `to` и
  инициатором `from`

Порядок событий в trace значим.
"""

from typing import List

from pydantic import AliasChoices, BaseModel, Field, StrictBool, StrictInt

from matching_oracle.core.domain.hire import Hire


class TraceEvent(BaseModel):
    """Один шаг протокола."""

    from_: StrictInt = Field(
        ...,
        validation_alias=AliasChoices("from", "from_"),
        serialization_alias="from",
        description="Инициатор события",
    )
    to: StrictInt = Field(..., description="Адресат события")
    from_company: StrictBool = Field(
        ...,
        validation_alias=AliasChoices("fromCompany", "fromCo", "from_company"),
        serialization_alias="fromCompany",
        description="True для offer от company, False для acceptance",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_offer(self) -> bool:
        return self.from_company


Trace = List[TraceEvent]


class TracedResult(BaseModel):
    """Результат traced solver: trace протокола и итоговый matching."""

    trace: List[TraceEvent] = Field(default_factory=list)
    out: List[Hire] = Field(default_factory=list)

    model_config = {"frozen": True}
