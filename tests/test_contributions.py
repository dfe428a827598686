import pytest

from cpf_planner.contributions import (
    EmployeeCategory,
    calculate_cpf_contributions,
    estimate_yearly_cpf_contributions,
    get_cpf_rates,
)
from cpf_planner.errors import InvalidCategoryError, PlannerError


@pytest.mark.parametrize("age,rates", [
    (54, (0.20, 0.17)),
    (56, (0.15, 0.15)),
    (61, (0.105, 0.095)),
    (71, (0.05, 0.05)),
])
def test_citizen_rates_by_age(age, rates):
    assert get_cpf_rates(EmployeeCategory.CITIZEN, age) == rates


def test_category_strings_are_accepted():
    assert get_cpf_rates("pr_first_year", 30) == (0.05, 0.15)
    assert get_cpf_rates("singaporean", 30) == (0.20, 0.17)


def test_unknown_category_raises():
    with pytest.raises(InvalidCategoryError) as exc:
        get_cpf_rates("foreigner", 30)
    assert exc.value.category == "foreigner"
    assert isinstance(exc.value, PlannerError)
    assert isinstance(exc.value, ValueError)


def test_ordinary_wage_is_capped():
    cpf = calculate_cpf_contributions(8000, EmployeeCategory.CITIZEN, 30)
    assert cpf["ow_subject"] == 6000
    assert cpf["employee_contribution"] == 1200.0
    assert cpf["employer_contribution"] == 1020.0
    assert cpf["total_contribution"] == 2220.0
    assert cpf["take_home_pay"] == 6800.0
    assert cpf["rates"] == {"employee_rate": 0.20, "employer_rate": 0.17}


def test_below_ceiling_uses_full_salary():
    cpf = calculate_cpf_contributions(4321.55, "singaporean", 30)
    assert cpf["employee_contribution"] == round(4321.55 * 0.20, 2)
    assert cpf["employer_contribution"] == round(4321.55 * 0.17, 2)


def test_additional_wage_ceiling():
    # 6000 x 12 = 72000 of OW leaves 30000 of AW room
    small = calculate_cpf_contributions(6000, "singaporean", 30, additional_wage=20000)
    assert small["aw_subject"] == 20000
    assert small["employee_contribution"] == 1200 + 4000

    big = calculate_cpf_contributions(6000, "singaporean", 30, additional_wage=50000)
    assert big["aw_subject"] == 30000
    assert big["take_home_pay"] == 6000 + 50000 - big["employee_contribution"]


def test_no_aw_room_once_ow_fills_ceiling():
    cpf = calculate_cpf_contributions(6000, "singaporean", 30, additional_wage=10000, ytd_ordinary_wage=102000)
    assert cpf["aw_subject"] == 0


def test_zero_salary():
    cpf = calculate_cpf_contributions(0, "singaporean", 30)
    assert cpf["total_contribution"] == 0


def test_yearly_estimate_includes_bonus():
    est = estimate_yearly_cpf_contributions(5000, "singaporean", 30, bonus_months=2)
    assert est["yearly_employee_contribution"] == pytest.approx(1000 * 12 + 2000)
    assert est["yearly_total_contribution"] == pytest.approx((1000 + 850) * 12 + 10000 * 0.37)
