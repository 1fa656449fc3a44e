from __future__ import annotations


class NutritionCalcError(Exception):
    pass


class InvalidInput(NutritionCalcError, ValueError):
    """Bad number, out-of-range value or unknown enum key."""


class DegenerateHeight(NutritionCalcError, ZeroDivisionError):
    """Height converts to zero (or less) metres, so BMI is undefined."""
