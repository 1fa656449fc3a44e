from __future__ import annotations

from tabulate import tabulate

from nutricalc.config import settings
from nutricalc.models import ResultRecord
from nutricalc.references import CLINICAL_REFERENCES


def macros_line(result: ResultRecord) -> str:
    m = result.macro_distribution
    return f"Macros: protein {m.protein} | carbs {m.carbs} | fat {m.fat}"


def results_table(result: ResultRecord, *, tablefmt: str | None = None) -> str:
    rows = [
        ["BMI", result.bmi, "kg/m²"],
        ["Ideal body weight", result.ibw_lbs, "lb"],
        ["Adjusted body weight", result.abw_lbs, "lb"],
        ["Adjustment factor", result.adjustment_factor, ""],
        ["BMR", result.bmr, "kcal/day"],
        ["TDEE", result.tdee, "kcal/day"],
        ["Target calories", result.target_calories, "kcal/day"],
        ["Protein", result.protein_range, "g/day"],
    ]
    return tabulate(
        rows,
        headers=["Metric", "Value", "Unit"],
        tablefmt=tablefmt or settings.table_format,
    )


def conditions_table(result: ResultRecord, *, tablefmt: str | None = None) -> str:
    if not result.condition_adjustments:
        return ""
    rows = []
    for adj in result.condition_adjustments:
        m = adj.macros
        rows.append(
            [
                adj.condition.value.capitalize(),
                adj.protein,
                adj.calories,
                f"P {m.protein} / C {m.carbs} / F {m.fat}",
                adj.notes,
            ]
        )
    return tabulate(
        rows,
        headers=["Condition", "Protein", "Calories", "Macros", "Note"],
        tablefmt=tablefmt or settings.table_format,
    )


def references_text() -> str:
    lines: list[str] = []
    for section, items in CLINICAL_REFERENCES.items():
        lines.append(f"{section}:")
        lines.extend(f"- {it}" for it in items)
    return "\n".join(lines)


def summary(result: ResultRecord, *, tablefmt: str | None = None) -> str:
    parts = [results_table(result, tablefmt=tablefmt), macros_line(result)]
    cond = conditions_table(result, tablefmt=tablefmt)
    if cond:
        parts.append(cond)
    return "\n\n".join(parts)
