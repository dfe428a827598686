from dataclasses import dataclass
from enum import Enum
from typing import List


class ContributionBracket(str, Enum):
    AGE_55_AND_BELOW = "55_and_below"
    AGE_55_TO_60 = "55_to_60"
    AGE_60_TO_65 = "60_to_65"
    AGE_65_TO_70 = "65_to_70"
    ABOVE_70 = "above_70"


class AllocationBracket(str, Enum):
    AGE_35_AND_BELOW = "35_and_below"
    AGE_35_TO_45 = "35_to_45"
    AGE_45_TO_50 = "45_to_50"
    AGE_50_TO_55 = "50_to_55"
    AGE_55_TO_60 = "55_to_60"
    AGE_60_TO_65 = "60_to_65"
    AGE_65_TO_70 = "65_to_70"
    ABOVE_70 = "above_70"


# Upper bounds of the contribution brackets; an age equal to a bound stays in the lower bracket
CONTRIBUTION_BOUNDARIES = (55, 60, 65, 70)


def age_bracket_for_contribution(age) -> ContributionBracket:
    if age <= 55:
        return ContributionBracket.AGE_55_AND_BELOW
    if age <= 60:
        return ContributionBracket.AGE_55_TO_60
    if age <= 65:
        return ContributionBracket.AGE_60_TO_65
    if age <= 70:
        return ContributionBracket.AGE_65_TO_70
    return ContributionBracket.ABOVE_70


def age_bracket_for_allocation(age) -> AllocationBracket:
    if age <= 35:
        return AllocationBracket.AGE_35_AND_BELOW
    if age <= 45:
        return AllocationBracket.AGE_35_TO_45
    if age <= 50:
        return AllocationBracket.AGE_45_TO_50
    if age <= 55:
        return AllocationBracket.AGE_50_TO_55
    if age <= 60:
        return AllocationBracket.AGE_55_TO_60
    if age <= 65:
        return AllocationBracket.AGE_60_TO_65
    if age <= 70:
        return AllocationBracket.AGE_65_TO_70
    return AllocationBracket.ABOVE_70


@dataclass(frozen=True)
class BracketCrossing:
    crosses: bool
    crossed_boundaries: List[int]
    from_bracket: ContributionBracket
    to_bracket: ContributionBracket


def bracket_crossing(current_age, years_ahead) -> BracketCrossing:
    """Flag contribution-rate boundaries passed between now and ``years_ahead`` years out.

    A boundary is crossed once the age moves past it, so going from 50 to 55
    crosses nothing while going from 55 to 56 crosses 55.
    """
    future_age = current_age + years_ahead
    crossed = [b for b in CONTRIBUTION_BOUNDARIES if current_age <= b < future_age]
    return BracketCrossing(
        crosses=bool(crossed),
        crossed_boundaries=crossed,
        from_bracket=age_bracket_for_contribution(current_age),
        to_bracket=age_bracket_for_contribution(future_age),
    )


# ==============================
# Age helpers
# ==============================
def age_at(birthday, year: int, month: int) -> int:
    """Whole years of age in (year, month); the birthday counts from the birth month."""
    age = year - birthday.year
    if month < birthday.month:
        age -= 1
    return age


def age_label(birthday, year: int, month: int) -> str:
    years = year - birthday.year
    months = month - birthday.month
    if months < 0:
        years -= 1
        months += 12
    return f"{years}y {months}m"


def calendar_month(start_month: int, start_year: int, offset: int):
    """(month, year) reached ``offset`` months after the start month."""
    total = start_month - 1 + offset
    return total % 12 + 1, start_year + total // 12


def age_progression(birthday, start_month: int, start_year: int, total_months: int):
    rows = []
    for offset in range(total_months):
        month, year = calendar_month(start_month, start_year, offset)
        rows.append({
            "offset": offset,
            "year": year,
            "month": month,
            "age": age_at(birthday, year, month),
        })
    return rows
