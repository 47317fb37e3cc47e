"""Page state for one visitor.

Everything the page shows is derived from a ``CalculatorState`` by
``recompute()``. Mutating methods recompute and hand the fresh
``CalculationResult`` to every subscriber, which is how the web layer keeps
the session cookie and the log in step with the form.

Subscribers are plain callables taking ``(state, result)``.
"""
import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from calculator import MetabolicCalculator
from models import (
    CalculationResult,
    DayPlanEntry,
    PlannedDay,
    ProfileInput,
)
from weekly_planner.config import (
    DEFAULT_CARBS_PER_KG,
    DEFAULT_FAT_PER_KG,
    DEFAULT_PROTEIN_PER_KG,
)
from weekly_planner.plan import (
    copy_day_settings,
    default_weekly_plan,
    estimate_weight_change,
    get_day_macros,
    is_current_day,
    weekly_deficit,
)

logger = logging.getLogger(__name__)

Subscriber = Callable[["CalculatorState", CalculationResult], None]

calculator = MetabolicCalculator()

EDITABLE_FIELDS = (
    "profile",
    "activity_level",
    "protein_per_kg",
    "fat_per_kg",
    "carbs_per_kg",
    "carb_cycling",
    "cycling_tier",
)


def default_profile() -> ProfileInput:
    return ProfileInput(height_cm=182, weight_kg=85.3, age_years=39, sex="female")


@dataclass
class CalculatorState:
    profile: ProfileInput = field(default_factory=default_profile)
    activity_level: str = "sedentary"
    protein_per_kg: float = DEFAULT_PROTEIN_PER_KG
    fat_per_kg: float = DEFAULT_FAT_PER_KG
    carbs_per_kg: float = DEFAULT_CARBS_PER_KG
    carb_cycling: bool = False
    cycling_tier: str = "moderate"
    weekly_plan: List[DayPlanEntry] = field(default_factory=default_weekly_plan)

    _subscribers: List[Subscriber] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    # --- subscriptions ---

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _changed(self) -> CalculationResult:
        result = self.recompute()
        for callback in list(self._subscribers):
            callback(self, result)
        return result

    # --- mutations ---

    def update(self, **changes: Any) -> CalculationResult:
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise AttributeError(f"CalculatorState has no editable field {name!r}")
            setattr(self, name, value)
        return self._changed()

    def set_day_activity(self, index: int, activity_type: str) -> CalculationResult:
        calculator.carb_range(activity_type)  # ValueError on unknown types
        if not 0 <= index < len(self.weekly_plan):
            raise IndexError(f"No day at index {index}")
        self.weekly_plan[index].activity_type = activity_type
        return self._changed()

    def copy_day(self, source_index: int) -> CalculationResult:
        copy_day_settings(self.weekly_plan, source_index)
        return self._changed()

    # --- derived values ---

    def effective_carbs_per_kg(self) -> float:
        if self.carb_cycling:
            return calculator.carbs_per_kg_for(self.cycling_tier, self.carbs_per_kg)
        return self.carbs_per_kg

    def recompute(self, today: Optional[date] = None) -> CalculationResult:
        profile = self.profile
        rmr = calculator.compute_rmr(profile)
        factor = calculator.activity_factor(self.activity_level, profile.sex)
        tdee = calculator.compute_tdee(rmr.average, self.activity_level, profile.sex)

        macros = calculator.compute_macros(
            profile.weight_kg,
            self.protein_per_kg,
            self.fat_per_kg,
            self.effective_carbs_per_kg(),
        )

        days = [
            PlannedDay(
                entry=entry,
                macros=get_day_macros(
                    entry.activity_type,
                    profile.weight_kg,
                    self.protein_per_kg,
                    self.fat_per_kg,
                ),
                is_today=is_current_day(entry.day, today),
            )
            for entry in self.weekly_plan
        ]
        deficit = weekly_deficit(
            tdee,
            self.weekly_plan,
            profile.weight_kg,
            self.protein_per_kg,
            self.fat_per_kg,
        )

        logger.debug(
            "Recomputed: rmr=%s tdee=%s macros=%s kcal weekly_deficit=%s",
            rmr.average,
            tdee,
            macros.total_calories,
            deficit,
        )

        return CalculationResult(
            rmr=rmr,
            activity_factor=factor,
            tdee=tdee,
            body_composition=calculator.compute_body_composition_targets(tdee),
            macros=macros,
            carb_range=(
                calculator.carb_range(self.cycling_tier) if self.carb_cycling else None
            ),
            days=days,
            weekly_calories=sum(day.macros.calories for day in days),
            weekly_deficit=deficit,
            weight_change=estimate_weight_change(deficit),
        )

    # --- session round trip ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": asdict(self.profile),
            "activity_level": self.activity_level,
            "protein_per_kg": self.protein_per_kg,
            "fat_per_kg": self.fat_per_kg,
            "carbs_per_kg": self.carbs_per_kg,
            "carb_cycling": self.carb_cycling,
            "cycling_tier": self.cycling_tier,
            "weekly_plan": [asdict(entry) for entry in self.weekly_plan],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CalculatorState":
        if not data:
            return cls()
        try:
            return cls(
                profile=ProfileInput(**data["profile"]),
                activity_level=data["activity_level"],
                protein_per_kg=float(data["protein_per_kg"]),
                fat_per_kg=float(data["fat_per_kg"]),
                carbs_per_kg=float(data["carbs_per_kg"]),
                carb_cycling=bool(data["carb_cycling"]),
                cycling_tier=data["cycling_tier"],
                weekly_plan=[DayPlanEntry(**entry) for entry in data["weekly_plan"]],
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable calculator session state: %s", e)
            return cls()


SESSION_KEY = "calculator"


def load_state(session: Dict[str, Any]) -> CalculatorState:
    """
    Rebuild the visitor's state from their session and keep the session
    updated whenever the state changes.
    """
    state = CalculatorState.from_dict(session.get(SESSION_KEY))

    def write_back(changed: CalculatorState, result: CalculationResult) -> None:
        session[SESSION_KEY] = changed.to_dict()

    state.subscribe(write_back)
    return state
