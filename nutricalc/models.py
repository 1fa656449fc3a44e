from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from nutricalc.tables import ActivityLevel, Condition, Gender, MacroDistribution, WeightLossGoal


@dataclass(frozen=True)
class InputRecord:
    age: int
    weight_lbs: float
    height_feet: int
    height_inches: float
    gender: Gender
    activity_level: ActivityLevel
    weight_loss_goal: WeightLossGoal
    conditions: frozenset[Condition] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ConditionAdjustment:
    condition: Condition
    protein: str
    calories: str
    notes: str
    macros: MacroDistribution


@dataclass(frozen=True)
class ResultRecord:
    bmi: float
    weight_kg: float
    height_cm: float
    ibw_lbs: int
    ibw_kg: float
    abw_lbs: int
    abw_kg: float
    adjustment_factor: float
    bmr: int
    tdee: int
    target_calories: int
    protein_low: int
    protein_high: int
    macro_distribution: MacroDistribution
    condition_adjustments: tuple[ConditionAdjustment, ...] = ()

    @property
    def protein_range(self) -> str:
        return f"{self.protein_low}-{self.protein_high}"

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["protein_range"] = self.protein_range
        for adj in d["condition_adjustments"]:
            adj["condition"] = adj["condition"].value
        d["condition_adjustments"] = list(d["condition_adjustments"])
        return d
