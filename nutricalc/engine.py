from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from nutricalc.errors import DegenerateHeight, InvalidInput
from nutricalc.models import ConditionAdjustment, InputRecord, ResultRecord
from nutricalc.tables import (
    ADJUSTMENT_FACTOR_TIERS,
    DEFAULT_ADJUSTMENT_FACTOR,
    DEFAULT_MACROS,
    ActivityLevel,
    Condition,
    Gender,
    MacroDistribution,
    WeightLossGoal,
    activity_factor,
    calorie_deficit,
    coerce_enum,
    condition_rule,
)


logger = logging.getLogger(__name__)

LB_TO_KG = 0.45359237
KG_TO_LB = 2.20462
CM_PER_INCH = 2.54
HAMWI_BASE_INCHES = 60

# g protein per kg ABW
PROTEIN_LOW_G_PER_KG = 1.2
PROTEIN_HIGH_G_PER_KG = 1.6


@dataclass(frozen=True)
class MetricUnits:
    total_inches: float
    height_cm: float
    height_m: float
    weight_kg: float


def total_height_inches(feet: int, inches: float) -> float:
    return feet * 12 + inches


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def lbs_to_kg(lbs: float) -> float:
    return lbs * LB_TO_KG


def kg_to_lbs(kg: float) -> float:
    # display conversion; the exact inverse of lbs_to_kg is kg / LB_TO_KG
    return kg * KG_TO_LB


def convert_units(weight_lbs: float, height_feet: int, height_inches: float) -> MetricUnits:
    total_in = total_height_inches(height_feet, height_inches)
    cm = inches_to_cm(total_in)
    return MetricUnits(
        total_inches=total_in,
        height_cm=cm,
        height_m=cm / 100,
        weight_kg=lbs_to_kg(weight_lbs),
    )


def bmi(weight_kg: float, height_m: float) -> float:
    if not height_m > 0:
        raise DegenerateHeight(f"height must be > 0 m, got {height_m!r}")
    return weight_kg / height_m**2


def ideal_body_weight_lbs(gender: Gender | str, total_inches: float) -> float:
    """
    Hamwi: 100 lb (female) / 106 lb (male) at 5 ft, plus 5 / 6 lb per inch over.
    Below 5 ft the same slope applies downwards (not clamped).
    """
    g = coerce_enum(Gender, gender, field="gender")
    over = total_inches - HAMWI_BASE_INCHES
    if g is Gender.MALE:
        return 106 + 6 * over
    return 100 + 5 * over


def adjustment_factor(bmi_value: float) -> float:
    for threshold, factor in ADJUSTMENT_FACTOR_TIERS:
        if bmi_value > threshold:
            return factor
    return DEFAULT_ADJUSTMENT_FACTOR


def adjusted_body_weight_kg(weight_kg: float, ibw_kg: float, factor: float) -> float:
    # excess may be negative (actual below ideal); applied as-is
    return ibw_kg + factor * (weight_kg - ibw_kg)


def bmr_mifflin_st_jeor(gender: Gender | str, age: int, height_cm: float, weight_kg: float) -> float:
    # BMR = 10W + 6.25H - 5A + s
    g = coerce_enum(Gender, gender, field="gender")
    s = 5 if g is Gender.MALE else -161
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + s


def tdee(bmr_kcal: float, activity: ActivityLevel | str) -> float:
    return bmr_kcal * activity_factor(activity)


def target_calories(tdee_kcal: float, goal: WeightLossGoal | str) -> float:
    return tdee_kcal - calorie_deficit(goal)


def protein_range(abw_kg: float) -> tuple[int, int]:
    return int(round(abw_kg * PROTEIN_LOW_G_PER_KG)), int(round(abw_kg * PROTEIN_HIGH_G_PER_KG))


def condition_adjustments(conditions: Iterable[Condition | str]) -> tuple[ConditionAdjustment, ...]:
    selected = {coerce_enum(Condition, c, field="conditions") for c in conditions}
    out: list[ConditionAdjustment] = []
    for cond in Condition:
        if cond not in selected:
            continue
        rule = condition_rule(cond)
        out.append(
            ConditionAdjustment(
                condition=cond,
                protein=rule.protein,
                calories=rule.calories,
                notes=rule.notes,
                macros=rule.macros,
            )
        )
    return tuple(out)


def macro_distribution() -> MacroDistribution:
    # condition macros are reported per adjustment and never replace the default split
    return DEFAULT_MACROS


def _validate(record: InputRecord) -> InputRecord:
    def _num(name: str, v: object) -> float:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidInput(f"{name}: expected a finite number, got {v!r}")
        try:
            f = float(v)
        except OverflowError as e:
            raise InvalidInput(f"{name}: number too large, got {v!r}") from e
        if not math.isfinite(f):
            raise InvalidInput(f"{name}: expected a finite number, got {v!r}")
        return f

    age = _num("age", record.age)
    weight = _num("weight_lbs", record.weight_lbs)
    feet = _num("height_feet", record.height_feet)
    inches = _num("height_inches", record.height_inches)

    if age <= 0 or age != int(age):
        raise InvalidInput(f"age: expected a positive whole number, got {record.age!r}")
    if weight <= 0:
        raise InvalidInput(f"weight_lbs: must be > 0, got {record.weight_lbs!r}")
    if feet < 0 or feet != int(feet):
        raise InvalidInput(f"height_feet: expected a non-negative whole number, got {record.height_feet!r}")
    if not 0 <= inches < 12:
        raise InvalidInput(f"height_inches: must be in [0, 12), got {record.height_inches!r}")
    if isinstance(record.conditions, (str, bytes)) or not isinstance(record.conditions, Iterable):
        raise InvalidInput(f"conditions: expected a collection of condition tags, got {record.conditions!r}")

    return InputRecord(
        age=int(age),
        weight_lbs=weight,
        height_feet=int(feet),
        height_inches=inches,
        gender=coerce_enum(Gender, record.gender, field="gender"),
        activity_level=coerce_enum(ActivityLevel, record.activity_level, field="activity_level"),
        weight_loss_goal=coerce_enum(WeightLossGoal, record.weight_loss_goal, field="weight_loss_goal"),
        conditions=frozenset(coerce_enum(Condition, c, field="conditions") for c in record.conditions),
    )


def calculate(record: InputRecord) -> ResultRecord:
    try:
        rec = _validate(record)
    except InvalidInput as e:
        logger.warning("rejected input: %s", e)
        raise

    units = convert_units(rec.weight_lbs, rec.height_feet, rec.height_inches)
    bmi_value = bmi(units.weight_kg, units.height_m)

    ibw_lbs = ideal_body_weight_lbs(rec.gender, units.total_inches)
    ibw_kg = lbs_to_kg(ibw_lbs)
    factor = adjustment_factor(bmi_value)
    abw_kg = adjusted_body_weight_kg(units.weight_kg, ibw_kg, factor)

    b = bmr_mifflin_st_jeor(rec.gender, rec.age, units.height_cm, units.weight_kg)
    td = tdee(b, rec.activity_level)
    target = target_calories(td, rec.weight_loss_goal)
    p_low, p_high = protein_range(abw_kg)

    result = ResultRecord(
        bmi=round(bmi_value, 1),
        weight_kg=round(units.weight_kg, 2),
        height_cm=round(units.height_cm, 2),
        ibw_lbs=int(round(ibw_lbs)),
        ibw_kg=round(ibw_kg, 1),
        abw_lbs=int(round(kg_to_lbs(abw_kg))),
        abw_kg=round(abw_kg, 1),
        adjustment_factor=factor,
        bmr=int(round(b)),
        tdee=int(round(td)),
        target_calories=int(round(target)),
        protein_low=p_low,
        protein_high=p_high,
        macro_distribution=macro_distribution(),
        condition_adjustments=condition_adjustments(rec.conditions),
    )
    logger.debug(
        "calculated bmi=%s factor=%s bmr=%s tdee=%s target=%s conditions=%s",
        result.bmi,
        factor,
        result.bmr,
        result.tdee,
        result.target_calories,
        [c.condition.value for c in result.condition_adjustments],
    )
    return result
