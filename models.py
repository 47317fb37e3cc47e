from dataclasses import dataclass, field
from typing import Dict, List, Optional


DAY_ACTIVITY_TYPES = ("rest", "light", "moderate", "hard")

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass
class ProfileInput:
    height_cm: float
    weight_kg: float
    age_years: float
    sex: str                   # male, female


@dataclass
class RmrResult:
    mifflin: int
    harris_benedict: int
    average: int


@dataclass
class MacroAmount:
    grams: int
    calories: int
    percentage: int


@dataclass
class MacroTargets:
    protein_per_kg: float
    fat_per_kg: float
    carbs_per_kg: float

    protein: MacroAmount
    fat: MacroAmount
    carbs: MacroAmount
    total_calories: int


@dataclass
class CarbRange:
    min: float
    max: float
    optimal: float


@dataclass
class DayPlanEntry:
    day: str
    activity_type: str         # rest, light, moderate, hard


@dataclass
class DayMacros:
    protein: int
    carbs: int
    fat: int
    calories: int


@dataclass
class WeightChange:
    pounds: float
    direction: str             # loss, gain


@dataclass
class PlannedDay:
    entry: DayPlanEntry
    macros: DayMacros
    is_today: bool = False


@dataclass
class CalculationResult:
    rmr: RmrResult
    activity_factor: float
    tdee: int
    body_composition: Dict[str, int]
    macros: MacroTargets
    carb_range: Optional[CarbRange]

    days: List[PlannedDay] = field(default_factory=list)
    weekly_calories: int = 0
    weekly_deficit: int = 0
    weight_change: Optional[WeightChange] = None
