"""Explanatory notes for each reported metric and the guidelines they cite."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from nutricalc.tables import coerce_enum


class Metric(str, Enum):
    BMI = "bmi"
    IBW = "ibw"
    ABW = "abw"
    PROTEIN = "protein"
    ENERGY = "energy"
    CONDITIONS = "conditions"


FORMULA_NOTES: Mapping[Metric, str] = MappingProxyType(
    {
        Metric.BMI: "Body Mass Index calculation based on WHO standards. BMI = weight(kg)/height(m)²",
        Metric.IBW: (
            "Ideal Body Weight calculated using Hamwi equation: "
            "Female: 100lb + 5lb/inch >5ft; Male: 106lb + 6lb/inch >5ft"
        ),
        Metric.ABW: (
            "Adjusted Body Weight uses sliding scale based on BMI ranges "
            "to account for metabolically active tissue"
        ),
        Metric.PROTEIN: (
            "Based on Leidy et al. (2015) systematic review showing improved outcomes "
            "with 1.2-1.6g/kg protein during weight loss"
        ),
        Metric.ENERGY: (
            "Mifflin-St. Jeor equation validated for individuals with obesity. "
            "Includes activity and thermogenic adjustments"
        ),
        Metric.CONDITIONS: "Medical condition adjustments based on AND/ASPEN guidelines and clinical evidence",
    }
)

# section title -> citations, in display order
CLINICAL_REFERENCES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Protein Recommendations": (
            "Leidy et al. (2015) - Systematic review supporting 1.2-1.6g/kg for weight loss",
            "AND/AACE/TOS Guidelines - Minimum 60g/day protein",
            "ASPEN Guidelines for Obesity (2016)",
        ),
        "Energy Calculations": (
            "Mifflin-St. Jeor equation - Most accurate for obesity (Frankenfield et al., 2005)",
            "Activity factors validated in systematic review (McMurray et al., 2014)",
        ),
        "Clinical Guidelines": (
            "Academy of Nutrition and Dietetics Evidence Analysis Library",
            "AACE/ACE Guidelines for Obesity Management (2016)",
            "KDIGO Guidelines for CKD (2020)",
            "ADA Standards of Care (2023)",
        ),
    }
)


def formula_note(metric: Metric | str) -> str:
    return FORMULA_NOTES[coerce_enum(Metric, metric, field="metric")]
