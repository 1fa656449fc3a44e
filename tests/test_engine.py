from __future__ import annotations

import dataclasses
import logging
import math

import pytest

from nutricalc.engine import (
    LB_TO_KG,
    adjusted_body_weight_kg,
    adjustment_factor,
    bmi,
    bmr_mifflin_st_jeor,
    calculate,
    condition_adjustments,
    convert_units,
    ideal_body_weight_lbs,
    lbs_to_kg,
    protein_range,
    target_calories,
    tdee,
)
from nutricalc.errors import DegenerateHeight, InvalidInput
from nutricalc.models import InputRecord
from nutricalc.tables import ActivityLevel, Condition, Gender, WeightLossGoal


def _record(**overrides) -> InputRecord:
    base = dict(
        age=35,
        weight_lbs=180,
        height_feet=5,
        height_inches=4,
        gender=Gender.FEMALE,
        activity_level=ActivityLevel.LIGHT,
        weight_loss_goal=WeightLossGoal.MODERATE,
        conditions=frozenset(),
    )
    base.update(overrides)
    return InputRecord(**base)


def test_reference_female_scenario() -> None:
    r = calculate(_record())
    assert r.weight_kg == 81.65
    assert r.height_cm == 162.56
    assert r.bmi == 30.9
    assert r.adjustment_factor == 0.35
    assert r.ibw_lbs == 120
    assert r.abw_lbs == 141
    # 1496.47 unrounded
    assert r.bmr == 1496
    assert r.tdee == 2058
    assert r.target_calories == 1558
    assert r.protein_range == "77-102"
    assert r.condition_adjustments == ()


def test_target_is_tdee_minus_deficit() -> None:
    for goal, deficit in (("conservative", 250), ("moderate", 500), ("aggressive", 750)):
        assert target_calories(2000.0, goal) == 2000.0 - deficit


def test_diabetes_adds_one_adjustment() -> None:
    r = calculate(_record(conditions=frozenset({Condition.DIABETES})))
    assert len(r.condition_adjustments) == 1
    adj = r.condition_adjustments[0]
    assert adj.condition is Condition.DIABETES
    assert adj.protein == "1.2-1.5g/kg ABW"
    assert adj.calories == "-500 kcal from TDEE"
    # formula results are untouched by conditions
    assert r.target_calories == 1558


def test_conditions_reported_in_canonical_order() -> None:
    adjs = condition_adjustments(["liver", Condition.DIABETES, "hypertension"])
    assert [a.condition for a in adjs] == [Condition.DIABETES, Condition.HYPERTENSION, Condition.LIVER]


def test_condition_macros_do_not_override_default() -> None:
    r = calculate(_record(conditions=frozenset({Condition.KIDNEY})))
    assert (r.macro_distribution.protein, r.macro_distribution.carbs, r.macro_distribution.fat) == (
        "25-30%",
        "45-50%",
        "25-30%",
    )
    assert r.condition_adjustments[0].macros.protein == "15-20%"


def test_male_ibw_six_feet() -> None:
    assert ideal_body_weight_lbs(Gender.MALE, 72) == 178


def test_ibw_below_five_feet_is_not_clamped() -> None:
    assert ideal_body_weight_lbs("female", 58) == 90
    assert ideal_body_weight_lbs("male", 58) == 94


def test_lbs_kg_round_trip() -> None:
    for lbs in (1.0, 99.5, 180.0, 412.3):
        assert math.isclose(lbs_to_kg(lbs) / LB_TO_KG, lbs, rel_tol=1e-12)


def test_bmi_same_for_metric_and_imperial() -> None:
    units = convert_units(180, 5, 4)
    assert math.isclose(bmi(units.weight_kg, units.height_m), bmi(81.6466266, 1.6256), rel_tol=1e-9)


@pytest.mark.parametrize(
    "value,expected",
    [
        (18.0, 0.40),
        (30.0, 0.40),
        (30.01, 0.35),
        (35.0, 0.35),
        (35.5, 0.30),
        (40.0, 0.30),
        (40.01, 0.25),
        (62.0, 0.25),
    ],
)
def test_adjustment_factor_tiers(value: float, expected: float) -> None:
    assert adjustment_factor(value) == expected


def test_adjustment_factor_non_increasing() -> None:
    values = [x / 10 for x in range(100, 700)]
    factors = [adjustment_factor(v) for v in values]
    assert all(a >= b for a, b in zip(factors, factors[1:]))


def test_abw_applies_tiered_factor_without_excess_gate() -> None:
    # 130 lb is below 1.2 x IBW (144 lb); ABW is still blended with factor 0.40
    r = calculate(_record(weight_lbs=130))
    assert r.adjustment_factor == 0.40
    assert r.abw_lbs == 124


def test_abw_below_ideal_weight_is_not_clamped() -> None:
    ibw_kg = lbs_to_kg(120)
    abw = adjusted_body_weight_kg(lbs_to_kg(100), ibw_kg, 0.40)
    assert lbs_to_kg(100) < abw < ibw_kg


@pytest.mark.parametrize("abw_kg", [10.0, 45.5, 63.9, 140.0])
def test_protein_low_below_high(abw_kg: float) -> None:
    low, high = protein_range(abw_kg)
    assert low < high


def test_bmr_gender_offset() -> None:
    female = bmr_mifflin_st_jeor("female", 40, 170, 70)
    male = bmr_mifflin_st_jeor("male", 40, 170, 70)
    assert male - female == 166


def test_unknown_activity_level_fails() -> None:
    with pytest.raises(InvalidInput):
        tdee(1500.0, "extreme")
    with pytest.raises(InvalidInput):
        calculate(_record(activity_level="extreme"))


def test_unknown_condition_fails() -> None:
    with pytest.raises(InvalidInput):
        calculate(_record(conditions=frozenset({"gout"})))


@pytest.mark.parametrize(
    "overrides",
    [
        {"age": 0},
        {"age": -3},
        {"weight_lbs": 0},
        {"height_feet": -1},
        {"height_inches": 12},
        {"weight_lbs": float("nan")},
        {"gender": "other"},
        {"weight_loss_goal": "extreme"},
        {"age": 10**400},
        {"weight_lbs": 10**400},
        {"conditions": None},
        {"conditions": "diabetes"},
        {"weight_loss_goal": ActivityLevel.MODERATE},
        {"gender": Condition.DIABETES},
    ],
)
def test_invalid_records_rejected(overrides: dict) -> None:
    with pytest.raises(InvalidInput):
        calculate(_record(**overrides))


def test_zero_height_fails_fast() -> None:
    with pytest.raises(DegenerateHeight):
        calculate(_record(height_feet=0, height_inches=0))
    with pytest.raises(ZeroDivisionError):
        bmi(70.0, 0.0)


def test_string_enum_values_accepted() -> None:
    r = calculate(
        _record(gender="Male", activity_level="very", weight_loss_goal="aggressive", conditions=frozenset({"liver"}))
    )
    assert r.condition_adjustments[0].condition is Condition.LIVER


def test_calculation_is_deterministic() -> None:
    rec = _record(conditions=frozenset({Condition.KIDNEY, Condition.DIABETES}))
    assert calculate(rec) == calculate(rec)


def test_result_is_immutable() -> None:
    r = calculate(_record())
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.bmr = 0  # type: ignore[misc]


def test_rejected_input_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="nutricalc.engine"):
        with pytest.raises(InvalidInput):
            calculate(_record(age=0))
    assert "rejected input" in caplog.text


def test_protein_range_collapses_below_one_kg() -> None:
    # 1.2 and 1.6 g/kg round to the same whole gram for tiny ABW
    assert protein_range(0.5) == (1, 1)
    low, high = protein_range(1.0)
    assert low < high
