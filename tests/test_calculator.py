import unittest

from calculator import CARB_CYCLING, MetabolicCalculator
from models import ProfileInput


class TestRmr(unittest.TestCase):
    def setUp(self):
        self.calc = MetabolicCalculator()

    def test_female_reference_profile(self):
        profile = ProfileInput(height_cm=182, weight_kg=85.3, age_years=39, sex="female")
        rmr = self.calc.compute_rmr(profile)

        self.assertEqual(rmr.mifflin, 1634)
        self.assertEqual(rmr.harris_benedict, 1631)
        self.assertEqual(rmr.average, int(round((1634 + 1631) / 2)))

    def test_male_profile(self):
        profile = ProfileInput(height_cm=180, weight_kg=80, age_years=30, sex="male")
        rmr = self.calc.compute_rmr(profile)

        self.assertEqual(rmr.mifflin, 1780)
        self.assertEqual(rmr.harris_benedict, 1854)
        self.assertEqual(rmr.average, 1817)

    def test_average_uses_rounded_values(self):
        profile = ProfileInput(height_cm=165, weight_kg=61.7, age_years=44, sex="female")
        rmr = self.calc.compute_rmr(profile)
        self.assertEqual(rmr.average, int(round((rmr.mifflin + rmr.harris_benedict) / 2)))
        self.assertIsInstance(rmr.average, int)


class TestTdee(unittest.TestCase):
    def setUp(self):
        self.calc = MetabolicCalculator()

    def test_sedentary_multiplier_ignores_sex(self):
        self.assertEqual(self.calc.activity_factor("sedentary", "male"), 1.4)
        self.assertEqual(self.calc.activity_factor("sedentary", "female"), 1.4)
        self.assertEqual(self.calc.compute_tdee(1632, "sedentary", "female"), 2285)

    def test_top_tiers_depend_on_sex(self):
        for level in ("light-moderate", "moderate", "heavy", "very-heavy"):
            self.assertGreater(
                self.calc.activity_factor(level, "male"),
                self.calc.activity_factor(level, "female"),
            )

    def test_tdee_is_rounded_product(self):
        self.assertEqual(self.calc.compute_tdee(1817, "heavy", "male"), int(round(1817 * 2.1)))

    def test_unknown_activity_level(self):
        with self.assertRaises(ValueError):
            self.calc.compute_tdee(1600, "couch", "male")

    def test_body_composition_offsets(self):
        for tdee in (1200, 2285, 3999):
            targets = self.calc.compute_body_composition_targets(tdee)
            self.assertEqual(targets["maintain"], tdee)
            self.assertEqual(targets["loss"] + 1000, targets["gain"])


class TestMacros(unittest.TestCase):
    def setUp(self):
        self.calc = MetabolicCalculator()

    def test_grams_calories_and_percentages(self):
        macros = self.calc.compute_macros(85.3, 2.0, 1.0, 3.3)

        self.assertEqual(macros.protein.grams, 171)
        self.assertEqual(macros.fat.grams, 85)
        self.assertEqual(macros.carbs.grams, 281)
        self.assertEqual(macros.total_calories, 171 * 4 + 85 * 9 + 281 * 4)
        self.assertEqual(macros.protein.percentage, 27)
        self.assertEqual(macros.fat.percentage, 30)
        self.assertEqual(macros.carbs.percentage, 44)

    def test_percentages_stay_near_100(self):
        for weight in (30, 55.5, 85.3, 120, 350):
            for protein in (1.3, 2.2, 3.3):
                for fat in (0.8, 1.0, 1.2):
                    for carbs in (0.5, 2.2, 5.5):
                        macros = self.calc.compute_macros(weight, protein, fat, carbs)
                        total = (
                            macros.protein.percentage
                            + macros.fat.percentage
                            + macros.carbs.percentage
                        )
                        self.assertTrue(97 <= total <= 103, (weight, protein, fat, carbs, total))

    def test_zero_calories_gives_zero_percentages(self):
        macros = self.calc.compute_macros(80, 0, 0, 0)
        self.assertEqual(macros.total_calories, 0)
        self.assertEqual(
            (macros.protein.percentage, macros.fat.percentage, macros.carbs.percentage),
            (0, 0, 0),
        )


class TestCarbCycling(unittest.TestCase):
    def setUp(self):
        self.calc = MetabolicCalculator()

    def test_lookup_table(self):
        self.assertEqual(CARB_CYCLING["rest"].optimal, 1.1)
        self.assertEqual(CARB_CYCLING["hard"].max, 5.5)
        for tier in CARB_CYCLING.values():
            self.assertTrue(tier.min <= tier.optimal <= tier.max)

    def test_default_is_tier_optimum(self):
        self.assertEqual(self.calc.carbs_per_kg_for("moderate"), 3.3)

    def test_values_are_clamped_into_tier(self):
        self.assertEqual(self.calc.carbs_per_kg_for("light", 5.0), 3.3)
        self.assertEqual(self.calc.carbs_per_kg_for("hard", 1.0), 3.3)
        self.assertEqual(self.calc.carbs_per_kg_for("rest", 1.5), 1.5)

    def test_unknown_tier(self):
        with self.assertRaises(ValueError):
            self.calc.carb_range("extreme")


class TestUnits(unittest.TestCase):
    def test_conversions(self):
        calc = MetabolicCalculator()
        self.assertAlmostEqual(calc.weight_kg(100, "lb"), 45.359237)
        self.assertEqual(calc.weight_kg(70, "kg"), 70)
        self.assertAlmostEqual(calc.height_cm(70, "in"), 177.8)
        self.assertEqual(calc.height_cm(182, "cm"), 182)


if __name__ == "__main__":
    unittest.main()
