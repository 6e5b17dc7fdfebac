"""Tests for the calorie calculator."""

from datetime import date
from decimal import Decimal

import pytest

from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.models import ActivityLevel, GoalType, Sex
from calorie_tracker.domain.nutrition import ProfileInputs
from calorie_tracker.services import calculator


def _inputs(**overrides: object) -> ProfileInputs:
    values: dict[str, object] = {
        "weight": Decimal("75.5"),
        "height": Decimal("175"),
        "age": 34,
        "sex": Sex.MALE,
        "activity_level": ActivityLevel.MODERATELY_ACTIVE,
        "weekly_goal": Decimal("0.5"),
        "goal_type": GoalType.LOSE,
    }
    values.update(overrides)
    return ProfileInputs(**values)  # type: ignore[arg-type]


def test_bmi_for_reference_profile() -> None:
    assert calculator.bmi(Decimal("75.5"), Decimal("175")) == Decimal("24.65")


def test_bmi_rounds_half_up() -> None:
    assert calculator.bmi(Decimal("20.125"), Decimal("100")) == Decimal("20.13")


def test_bmi_increases_with_weight_and_decreases_with_height() -> None:
    base = calculator.bmi(Decimal("70"), Decimal("175"))

    assert calculator.bmi(Decimal("80"), Decimal("175")) > base
    assert calculator.bmi(Decimal("70"), Decimal("185")) < base


@pytest.mark.parametrize("height", [Decimal("0"), Decimal("-10")])
def test_bmi_rejects_non_positive_height(height: Decimal) -> None:
    with pytest.raises(InvalidInputError):
        calculator.bmi(Decimal("70"), height)


def test_bmr_male_formula() -> None:
    value = calculator.bmr(Decimal("75.5"), Decimal("175"), 34, Sex.MALE)

    assert value == Decimal("1683.75")


def test_bmr_sex_offset_is_166() -> None:
    male = calculator.bmr(Decimal("62"), Decimal("165"), 28, Sex.MALE)
    female = calculator.bmr(Decimal("62"), Decimal("165"), 28, Sex.FEMALE)

    assert male - female == 166


def test_tdee_for_reference_bmr_values() -> None:
    assert calculator.tdee(Decimal("1742.75"), ActivityLevel.MODERATELY_ACTIVE) == 2701
    assert calculator.tdee(Decimal("1576.75"), ActivityLevel.MODERATELY_ACTIVE) == 2444


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (ActivityLevel.SEDENTARY, 2400),
        (ActivityLevel.LIGHTLY_ACTIVE, 2750),
        (ActivityLevel.MODERATELY_ACTIVE, 3100),
        (ActivityLevel.VERY_ACTIVE, 3450),
    ],
)
def test_tdee_scales_by_activity_multiplier(
    level: ActivityLevel, expected: int
) -> None:
    assert calculator.tdee(Decimal("2000"), level) == expected


def test_tdee_rounds_half_up() -> None:
    # 12 * 1.375 = 16.5
    assert calculator.tdee(Decimal("12"), ActivityLevel.LIGHTLY_ACTIVE) == 17


def test_daily_allowance_for_reference_profiles() -> None:
    assert calculator.daily_allowance(2701, Decimal("0.5"), GoalType.LOSE) == 2151
    assert calculator.daily_allowance(2444, Decimal("0.5"), GoalType.LOSE) == 1894


@pytest.mark.parametrize("weekly", [Decimal("0.1"), Decimal("0.25"), Decimal("1.0")])
def test_daily_allowance_is_symmetric(weekly: Decimal) -> None:
    tdee = 2500
    lose = calculator.daily_allowance(tdee, weekly, GoalType.LOSE)
    gain = calculator.daily_allowance(tdee, weekly, GoalType.GAIN)
    maintain = calculator.daily_allowance(tdee, weekly, GoalType.MAINTAIN)

    assert maintain == tdee
    assert tdee - lose == gain - tdee


def test_daily_allowance_is_not_clamped() -> None:
    assert calculator.daily_allowance(1000, Decimal("1.0"), GoalType.LOSE) == -100


def test_compute_all_male_profile() -> None:
    profile = calculator.compute_all(_inputs())

    assert profile.bmi == Decimal("24.65")
    assert profile.bmr == Decimal("1683.75")
    assert profile.tdee == 2610
    assert profile.allowance == 2060


def test_compute_all_female_profile() -> None:
    profile = calculator.compute_all(_inputs(sex=Sex.FEMALE))

    assert profile.bmr == Decimal("1517.75")
    assert profile.tdee == 2353
    assert profile.allowance == 1803


def test_compute_all_maintain_returns_tdee() -> None:
    profile = calculator.compute_all(_inputs(goal_type=GoalType.MAINTAIN))

    assert profile.allowance == profile.tdee


def test_age_on_uses_calendar_years() -> None:
    assert calculator.age_on(date(1992, 12, 31), date(2026, 1, 1)) == 34
    assert calculator.age_on(date(1992, 1, 1), date(2026, 12, 31)) == 34


@pytest.mark.parametrize(
    ("goal", "expected"),
    [
        (Decimal("70"), GoalType.LOSE),
        (Decimal("80"), GoalType.GAIN),
        (Decimal("75.5"), GoalType.MAINTAIN),
        (None, GoalType.MAINTAIN),
    ],
)
def test_derive_goal_type(goal: Decimal | None, expected: GoalType) -> None:
    assert calculator.derive_goal_type(Decimal("75.5"), goal) == expected
