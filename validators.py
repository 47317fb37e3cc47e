"""
Form-boundary validation. The calculator itself accepts any number; bad
input is stopped here before it reaches the page state.
"""
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from calculator import ACTIVITY_MAP, CARBS_RANGE, FAT_RANGE, PROTEIN_RANGE, MetabolicCalculator
from models import ProfileInput
from weekly_planner.config import (
    DEFAULT_CARBS_PER_KG,
    DEFAULT_FAT_PER_KG,
    DEFAULT_PROTEIN_PER_KG,
)

WEIGHT_RANGE_KG = (30, 350)

calculator = MetabolicCalculator()


class CalculatorForm(BaseModel):
    """Schema for the calculator form. Numbers must be finite."""
    height: float = Field(..., gt=0, allow_inf_nan=False)
    height_unit: Literal["cm", "in"] = "cm"
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    weight_unit: Literal["kg", "lb"] = "kg"
    age: float = Field(..., gt=0, allow_inf_nan=False)
    sex: Literal["male", "female"]
    activity_level: str

    protein_per_kg: float = Field(
        DEFAULT_PROTEIN_PER_KG, ge=PROTEIN_RANGE[0], le=PROTEIN_RANGE[1], allow_inf_nan=False
    )
    fat_per_kg: float = Field(
        DEFAULT_FAT_PER_KG, ge=FAT_RANGE[0], le=FAT_RANGE[1], allow_inf_nan=False
    )
    # in carb-cycling mode this is further clamped into the tier range
    carbs_per_kg: float = Field(
        DEFAULT_CARBS_PER_KG, ge=CARBS_RANGE[0], le=CARBS_RANGE[1], allow_inf_nan=False
    )
    carb_cycling: bool = False
    cycling_tier: Literal["rest", "light", "moderate", "hard"] = "moderate"

    @field_validator("activity_level")
    @classmethod
    def known_activity_level(cls, v):
        """Activity level must be a key of the multiplier table."""
        if v not in ACTIVITY_MAP:
            raise ValueError(f"Unknown activity level: {v}")
        return v

    @model_validator(mode="after")
    def weight_in_range(self):
        low, high = WEIGHT_RANGE_KG
        weight_kg = calculator.weight_kg(self.weight, self.weight_unit)
        if not low <= weight_kg <= high:
            raise ValueError(
                f"Weight (kg) must be between {low} and {high} (got {weight_kg:.1f})"
            )
        return self

    def to_profile(self) -> ProfileInput:
        return ProfileInput(
            height_cm=calculator.height_cm(self.height, self.height_unit),
            weight_kg=calculator.weight_kg(self.weight, self.weight_unit),
            age_years=self.age,
            sex=self.sex,
        )


def describe_errors(exc: ValidationError) -> str:
    """One readable line per failed field, for showing above the form."""
    lines = []
    for error in exc.errors():
        field = " ".join(str(part) for part in error["loc"]).replace("_", " ")
        message = error["msg"].removeprefix("Value error, ")
        lines.append(f"{field.capitalize()}: {message}" if field else message)
    return "; ".join(lines)
