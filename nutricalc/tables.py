from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypeVar

from nutricalc.errors import InvalidInput


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"


class WeightLossGoal(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class Condition(str, Enum):
    # declaration order is the order adjustments are reported in
    DIABETES = "diabetes"
    KIDNEY = "kidney"
    HYPERTENSION = "hypertension"
    LIVER = "liver"


@dataclass(frozen=True)
class MacroDistribution:
    protein: str
    carbs: str
    fat: str


@dataclass(frozen=True)
class ConditionRule:
    protein: str
    calories: str
    notes: str
    macros: MacroDistribution


ACTIVITY_FACTORS: Mapping[ActivityLevel, float] = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.VERY: 1.725,
    }
)

# kcal/day subtracted from TDEE
CALORIE_DEFICITS: Mapping[WeightLossGoal, int] = MappingProxyType(
    {
        WeightLossGoal.CONSERVATIVE: 250,
        WeightLossGoal.MODERATE: 500,
        WeightLossGoal.AGGRESSIVE: 750,
    }
)

# (BMI strictly above, factor), checked top-down
ADJUSTMENT_FACTOR_TIERS: tuple[tuple[float, float], ...] = (
    (40.0, 0.25),
    (35.0, 0.30),
    (30.0, 0.35),
)
DEFAULT_ADJUSTMENT_FACTOR = 0.40

DEFAULT_MACROS = MacroDistribution(protein="25-30%", carbs="45-50%", fat="25-30%")

CONDITION_RULES: Mapping[Condition, ConditionRule] = MappingProxyType(
    {
        Condition.DIABETES: ConditionRule(
            protein="1.2-1.5g/kg ABW",
            calories="-500 kcal from TDEE",
            notes="Monitor carbohydrate distribution; consider 45-50% complex carbs",
            macros=MacroDistribution(protein="20-25%", carbs="45-50%", fat="25-30%"),
        ),
        Condition.KIDNEY: ConditionRule(
            protein="0.6-0.8g/kg ABW (non-dialysis)",
            calories="30-35 kcal/kg IBW",
            notes="Monitor electrolytes; consider renal dietitian referral",
            macros=MacroDistribution(protein="15-20%", carbs="50-60%", fat="25-30%"),
        ),
        Condition.HYPERTENSION: ConditionRule(
            protein="1.2-1.4g/kg ABW",
            calories="-500 to -750 kcal from TDEE",
            notes="Follow DASH diet principles; sodium <2300mg",
            macros=MacroDistribution(protein="18-22%", carbs="50-55%", fat="25-30%"),
        ),
        Condition.LIVER: ConditionRule(
            protein="1.2-1.5g/kg ABW",
            calories="30-35 kcal/kg ABW",
            notes="Monitor ammonia levels; consider BCAA supplementation",
            macros=MacroDistribution(protein="20-25%", carbs="45-50%", fat="25-30%"),
        ),
    }
)


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value: object, *, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and not isinstance(value, Enum):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidInput(f"{field}: unknown value {value!r} (expected one of: {allowed})")


def activity_factor(level: ActivityLevel | str) -> float:
    return ACTIVITY_FACTORS[coerce_enum(ActivityLevel, level, field="activity_level")]


def calorie_deficit(goal: WeightLossGoal | str) -> int:
    return CALORIE_DEFICITS[coerce_enum(WeightLossGoal, goal, field="weight_loss_goal")]


def condition_rule(condition: Condition | str) -> ConditionRule:
    return CONDITION_RULES[coerce_enum(Condition, condition, field="conditions")]
