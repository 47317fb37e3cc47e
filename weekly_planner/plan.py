"""Weekly carb-cycling plan: per-day macros and the weekly energy balance."""
from datetime import date
from typing import List, Optional

from calculator import KCAL_PER_GRAM, MetabolicCalculator
from models import WEEKDAYS, DayMacros, DayPlanEntry, WeightChange

KCAL_PER_POUND = 3500

DEFAULT_SCHEDULE = ("moderate", "hard", "light", "moderate", "hard", "light", "rest")

calculator = MetabolicCalculator()


def default_weekly_plan() -> List[DayPlanEntry]:
    return [
        DayPlanEntry(day=day, activity_type=activity)
        for day, activity in zip(WEEKDAYS, DEFAULT_SCHEDULE)
    ]


def get_day_macros(
    activity_type: str, weight: float, protein_per_kg: float, fat_per_kg: float
) -> DayMacros:
    """
    Protein and fat stay the same every day; carbs follow the optimum of the
    day's activity tier.
    """
    carbs_per_kg = calculator.carb_range(activity_type).optimal

    protein = int(round(weight * protein_per_kg))
    fat = int(round(weight * fat_per_kg))
    carbs = int(round(weight * carbs_per_kg))
    calories = (
        protein * KCAL_PER_GRAM["protein"]
        + fat * KCAL_PER_GRAM["fat"]
        + carbs * KCAL_PER_GRAM["carbs"]
    )
    return DayMacros(protein=protein, carbs=carbs, fat=fat, calories=calories)


def weekly_deficit(
    tdee: int,
    plan: List[DayPlanEntry],
    weight: float,
    protein_per_kg: float,
    fat_per_kg: float,
) -> int:
    """Positive: eating below expenditure over the week. Negative: surplus."""
    eaten = sum(
        get_day_macros(entry.activity_type, weight, protein_per_kg, fat_per_kg).calories
        for entry in plan
    )
    return int(round(tdee * 7 - eaten))


def estimate_weight_change(deficit: int) -> WeightChange:
    pounds = round(abs(deficit / KCAL_PER_POUND), 1)
    direction = "loss" if deficit > 0 else "gain"
    return WeightChange(pounds=pounds, direction=direction)


def copy_day_settings(plan: List[DayPlanEntry], source_index: int) -> None:
    """Give every day the activity type of ``plan[source_index]``, in place."""
    if not 0 <= source_index < len(plan):
        raise IndexError(f"No day at index {source_index}")

    activity_type = plan[source_index].activity_type
    for entry in plan:
        entry.activity_type = activity_type


def is_current_day(day_name: str, today: Optional[date] = None) -> bool:
    # Without an explicit date this is the server's local weekday, which can
    # differ from the visitor's near midnight.
    today = today or date.today()
    return WEEKDAYS[today.weekday()] == day_name
