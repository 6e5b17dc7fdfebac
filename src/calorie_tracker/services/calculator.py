"""Calorie calculations: BMI, BMR (Mifflin-St Jeor), TDEE and daily allowance."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.models import ActivityLevel, GoalType, Sex
from calorie_tracker.domain.nutrition import NutritionProfile, ProfileInputs

# 1 kg of fat is roughly 7700 kcal, spread over 7 days.
CALORIES_PER_WEEKLY_KG = Decimal(1100)

_CENTS = Decimal("0.01")
_HEIGHT_M_PLACES = Decimal("0.0001")
_WHOLE = Decimal(1)


def bmi(weight_kg: Decimal, height_cm: Decimal) -> Decimal:
    """Return weight / height(m)^2 rounded half-up to 2 places."""
    if height_cm <= 0:
        raise InvalidInputError("Height must be greater than zero")
    height_m = (Decimal(height_cm) / 100).quantize(_HEIGHT_M_PLACES, ROUND_HALF_UP)
    return (Decimal(weight_kg) / (height_m * height_m)).quantize(
        _CENTS, ROUND_HALF_UP
    )


def bmr(weight_kg: Decimal, height_cm: Decimal, age_years: int, sex: Sex) -> Decimal:
    """Return the unrounded basal metabolic rate."""
    base = (
        10 * Decimal(weight_kg)
        + Decimal("6.25") * Decimal(height_cm)
        - 5 * Decimal(age_years)
    )
    if sex == Sex.MALE:
        return base + 5
    return base - 161


def tdee(bmr_value: Decimal, activity_level: ActivityLevel) -> int:
    """Scale BMR by the activity multiplier, rounded to a whole calorie."""
    return _round_half_up(Decimal(bmr_value) * activity_level.multiplier)


def daily_allowance(tdee_value: int, weekly_goal_kg: Decimal, goal_type: GoalType) -> int:
    """Adjust TDEE for the weekly weight goal.

    No minimum is enforced, so aggressive goals can yield a very low or
    negative allowance.
    """
    adjustment = _round_half_up(Decimal(weekly_goal_kg) * CALORIES_PER_WEEKLY_KG)
    if goal_type == GoalType.LOSE:
        return tdee_value - adjustment
    if goal_type == GoalType.GAIN:
        return tdee_value + adjustment
    return tdee_value


def compute_all(inputs: ProfileInputs) -> NutritionProfile:
    """Run the full pipeline for a profile."""
    bmi_value = bmi(inputs.weight, inputs.height)
    bmr_value = bmr(inputs.weight, inputs.height, inputs.age, inputs.sex)
    tdee_value = tdee(bmr_value, inputs.activity_level)
    allowance = daily_allowance(tdee_value, inputs.weekly_goal, inputs.goal_type)
    return NutritionProfile(
        bmi=bmi_value, bmr=bmr_value, tdee=tdee_value, allowance=allowance
    )


def age_on(dob: date, today: date) -> int:
    """Return the calendar-year difference between today and the birth date."""
    return today.year - dob.year


def derive_goal_type(current_weight: Decimal, goal_weight: Decimal | None) -> GoalType:
    """Infer the goal direction from the current and target weight."""
    if goal_weight is None or goal_weight == current_weight:
        return GoalType.MAINTAIN
    if goal_weight < current_weight:
        return GoalType.LOSE
    return GoalType.GAIN


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(_WHOLE, ROUND_HALF_UP))
