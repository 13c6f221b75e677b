"""
Hire — Пара (company, candidate) в matching

Matching — последовательность Hire. Валидный matching является биекцией
между [0, N) companies и [0, N) candidates.
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Dict, List

from pydantic import BaseModel, Field, StrictInt


class Hire(BaseModel):
    """
    Одна пара matching.

    Strict модель: ровно два целочисленных поля, bool и float не принимаются.
    """

    company: StrictInt = Field(..., description="Индекс company")
    candidate: StrictInt = Field(..., description="Индекс candidate")

    model_config = {"frozen": True, "extra": "forbid"}


Matching = List[Hire]


def record_payload(record: Any) -> Dict[str, Any]:
    """
    Приведение записи, возвращённой solver, к dict.

    Поддерживаются: pydantic модели, mappings, dataclasses, named tuples
    и объекты с атрибутами (__dict__).

    Raises:
        TypeError: если запись не приводится к dict
    """
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True)
    if isinstance(record, Mapping):
        return dict(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    if isinstance(record, tuple) and hasattr(record, "_asdict"):
        return dict(record._asdict())
    if hasattr(record, "__dict__"):
        return dict(vars(record))
    raise TypeError(f"Cannot read fields of {type(record).__name__} record")
