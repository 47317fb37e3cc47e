from typing import Dict, Optional

from models import (
    DAY_ACTIVITY_TYPES,
    CarbRange,
    MacroAmount,
    MacroTargets,
    ProfileInput,
    RmrResult,
)


# (male, female)
ACTIVITY_MAP = {
    "bed-rest": (1.2, 1.2),
    "very-sedentary": (1.3, 1.3),
    "sedentary": (1.4, 1.4),
    "light": (1.5, 1.5),
    "light-moderate": (1.7, 1.6),
    "moderate": (1.8, 1.7),
    "heavy": (2.1, 1.8),
    "very-heavy": (2.3, 2.0),
}

# g/kg of body weight
CARB_CYCLING = {
    "rest": CarbRange(min=0.0, max=2.2, optimal=1.1),
    "light": CarbRange(min=1.1, max=3.3, optimal=2.2),
    "moderate": CarbRange(min=2.2, max=4.4, optimal=3.3),
    "hard": CarbRange(min=3.3, max=5.5, optimal=4.4),
}

KCAL_PER_GRAM = {"protein": 4, "fat": 9, "carbs": 4}

BODY_COMPOSITION_OFFSET = 500

PROTEIN_RANGE = (1.3, 3.3)
FAT_RANGE = (0.8, 1.2)
CARBS_RANGE = (0.0, 5.5)


class MetabolicCalculator:
    """
    Core logic:
    - Convert units
    - Compute RMR (Mifflin-St Jeor, Harris-Benedict, and their average)
    - Apply activity factor -> TDEE
    - Offset TDEE for loss / maintain / gain
    - Allocate macros from g/kg settings
    """

    def weight_kg(self, weight: float, unit: str) -> float:
        if unit == "kg":
            return weight
        return weight * 0.45359237  # lb -> kg

    def height_cm(self, height: float, unit: str) -> float:
        if unit == "cm":
            return height
        return height * 2.54  # in -> cm

    def _mifflin(self, profile: ProfileInput) -> int:
        val = (
            10 * profile.weight_kg
            + 6.25 * profile.height_cm
            - 5 * profile.age_years
        )
        if profile.sex == "male":
            val += 5
        else:
            val -= 161
        return int(round(val))

    def _harris_benedict(self, profile: ProfileInput) -> int:
        if profile.sex == "male":
            val = (
                88.362
                + 13.397 * profile.weight_kg
                + 4.799 * profile.height_cm
                - 5.677 * profile.age_years
            )
        else:
            val = (
                447.593
                + 9.247 * profile.weight_kg
                + 3.098 * profile.height_cm
                - 4.330 * profile.age_years
            )
        return int(round(val))

    def compute_rmr(self, profile: ProfileInput) -> RmrResult:
        mifflin = self._mifflin(profile)
        harris = self._harris_benedict(profile)
        # average of the already rounded values
        average = int(round((mifflin + harris) / 2))
        return RmrResult(mifflin=mifflin, harris_benedict=harris, average=average)

    def activity_factor(self, activity_level: str, sex: str) -> float:
        try:
            male, female = ACTIVITY_MAP[activity_level]
        except KeyError:
            raise ValueError(f"Unknown activity level: {activity_level!r}")
        return male if sex == "male" else female

    def compute_tdee(self, rmr_average: int, activity_level: str, sex: str) -> int:
        factor = self.activity_factor(activity_level, sex)
        return int(round(rmr_average * factor))

    def compute_body_composition_targets(self, tdee: int) -> Dict[str, int]:
        return {
            "loss": tdee - BODY_COMPOSITION_OFFSET,
            "maintain": tdee,
            "gain": tdee + BODY_COMPOSITION_OFFSET,
        }

    def carb_range(self, activity_type: str) -> CarbRange:
        try:
            return CARB_CYCLING[activity_type]
        except KeyError:
            raise ValueError(
                f"Unknown day activity type: {activity_type!r} "
                f"(expected one of {', '.join(DAY_ACTIVITY_TYPES)})"
            )

    def carbs_per_kg_for(
        self, activity_type: str, requested: Optional[float] = None
    ) -> float:
        """
        Carb setting for a carb-cycling day. Missing values fall back to the
        tier optimum; anything outside the tier range is clamped into it.
        """
        tier = self.carb_range(activity_type)
        if requested is None:
            return tier.optimal
        return min(max(requested, tier.min), tier.max)

    def compute_macros(
        self,
        weight: float,
        protein_per_kg: float,
        fat_per_kg: float,
        carbs_per_kg: float,
    ) -> MacroTargets:
        protein_g = int(round(weight * protein_per_kg))
        fat_g = int(round(weight * fat_per_kg))
        carb_g = int(round(weight * carbs_per_kg))

        protein_kcal = protein_g * KCAL_PER_GRAM["protein"]
        fat_kcal = fat_g * KCAL_PER_GRAM["fat"]
        carb_kcal = carb_g * KCAL_PER_GRAM["carbs"]
        total = protein_kcal + fat_kcal + carb_kcal

        # Each share is rounded on its own, so the three need not add up to 100.
        def share(kcal: int) -> int:
            if total == 0:
                return 0
            return int(round(kcal / total * 100))

        return MacroTargets(
            protein_per_kg=protein_per_kg,
            fat_per_kg=fat_per_kg,
            carbs_per_kg=carbs_per_kg,
            protein=MacroAmount(protein_g, protein_kcal, share(protein_kcal)),
            fat=MacroAmount(fat_g, fat_kcal, share(fat_kcal)),
            carbs=MacroAmount(carb_g, carb_kcal, share(carb_kcal)),
            total_calories=total,
        )
