"""
Instance — Профиль предпочтений обеих сторон рынка

Immutable Pydantic модель: companies[i] — список предпочтений company i
по candidates, candidates[j] — список предпочтений candidate j по companies.
Позиция в списке = ранг (0 — самый предпочтительный).

Модель проверяет только форму данных. Полнота списков (перестановка
всех индексов другой стороны) проверяется oracle и сообщается как нарушение.
"""

from typing import List

from pydantic import BaseModel, Field, model_validator

# Перестановка индексов другой стороны
PreferenceList = List[int]


class Instance(BaseModel):
    """Профиль предпочтений размера N для companies и candidates."""

    companies: List[PreferenceList] = Field(..., description="Предпочтения companies по candidates")
    candidates: List[PreferenceList] = Field(..., description="Предпочтения candidates по companies")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_sides_same_size(self) -> "Instance":
        if len(self.companies) != len(self.candidates):
            raise ValueError(
                f"companies ({len(self.companies)}) and candidates "
                f"({len(self.candidates)}) must have the same size"
            )
        return self

    @property
    def size(self) -> int:
        return len(self.companies)

    def solver_args(self) -> tuple[List[PreferenceList], List[PreferenceList]]:
        """
        Копии списков предпочтений для передачи solver.

        Solver может мутировать свои аргументы; проверки работают
        с исходным instance.
        """
        return (
            [list(prefs) for prefs in self.companies],
            [list(prefs) for prefs in self.candidates],
        )
