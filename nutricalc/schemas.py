from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from nutricalc.errors import InvalidInput
from nutricalc.models import InputRecord
from nutricalc.tables import ActivityLevel, Condition, Gender, WeightLossGoal


logger = logging.getLogger(__name__)


class FormInput(BaseModel):
    """
    Raw calculator form payload. Every field may arrive as a string;
    keys are accepted in camelCase (as posted by the form) or snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, frozen=True)

    age: int = Field(..., gt=0, le=120, description="Age in years")
    weight_lbs: float = Field(..., gt=0, le=1500, alias="weightLbs", description="Weight in pounds")
    height_feet: int = Field(..., ge=0, le=9, alias="heightFeet")
    height_inches: float = Field(default=0.0, ge=0, lt=12, alias="heightInches")
    gender: Gender = Gender.FEMALE
    activity_level: ActivityLevel = Field(default=ActivityLevel.LIGHT, alias="activityLevel")
    weight_loss_goal: WeightLossGoal = Field(default=WeightLossGoal.MODERATE, alias="weightLossGoal")
    conditions: list[Condition] = Field(default_factory=list)

    @field_validator("height_inches", mode="before")
    @classmethod
    def _blank_inches(cls, v: Any) -> Any:
        # "5 ft" with the inches box left empty
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        return v

    @field_validator("gender", "activity_level", "weight_loss_goal", mode="before")
    @classmethod
    def _lower_enum(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("conditions", mode="before")
    @classmethod
    def _split_conditions(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [c.strip().lower() if isinstance(c, str) else c for c in v if not (isinstance(c, str) and not c.strip())]

    @model_validator(mode="after")
    def _positive_height(self) -> FormInput:
        if self.height_feet * 12 + self.height_inches <= 0:
            raise ValueError("height must be greater than 0 ft 0 in")
        return self

    def to_record(self) -> InputRecord:
        return InputRecord(
            age=self.age,
            weight_lbs=self.weight_lbs,
            height_feet=self.height_feet,
            height_inches=self.height_inches,
            gender=self.gender,
            activity_level=self.activity_level,
            weight_loss_goal=self.weight_loss_goal,
            conditions=frozenset(self.conditions),
        )


def _format_errors(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_form(data: Mapping[str, Any]) -> InputRecord:
    try:
        form = FormInput.model_validate(dict(data))
    except ValidationError as e:
        msg = _format_errors(e)
        logger.warning("invalid form input: %s", msg)
        raise InvalidInput(msg) from e
    return form.to_record()
