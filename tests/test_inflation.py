import pytest

from cpf_planner.inflation import (
    adjust_milestones_for_inflation,
    compound_growth,
    goal_savings,
    inflation_impact_by_asset,
    inflation_adjusted_retirement,
    inflation_adjusted_value,
    present_value,
    project_cost_of_living,
    project_purchasing_power,
    real_return,
    real_vs_nominal_growth,
    salary_for_purchasing_power,
)


def test_inflation_adjusted_value():
    res = inflation_adjusted_value(100, 5, 2)
    assert res["future_nominal_value"] == 110.25
    assert res["total_inflation"] == 10.25


def test_present_value():
    assert present_value(110.25, 5, 2) == 100


def test_real_return_fisher():
    res = real_return(5, 2)
    assert res["real_return"] == pytest.approx(2.94)
    assert res["approximate_real_return"] == 3


def test_purchasing_power_frame():
    df = project_purchasing_power(1000, 2, 10)
    assert len(df) == 11
    assert df["Real_Value"].iloc[0] == 1000
    assert df["Real_Value"].is_monotonic_decreasing
    assert df["Nominal_Value"].iloc[-1] == pytest.approx(1000 * 1.02 ** 10, abs=0.01)


def test_retirement_need_grows_with_inflation():
    res = inflation_adjusted_retirement(3000, 20, 25, 2.0)
    assert res["future_monthly_expenses"] == pytest.approx(3000 * 1.02 ** 20, abs=0.01)
    assert res["present_value_retirement_need"] < res["total_retirement_need"]


def test_milestones():
    out = adjust_milestones_for_inflation([{"name": "Car", "target_amount": 100000, "years_from_now": 5}], 3)
    assert out[0]["inflation_adjusted_target"] == pytest.approx(100000 * 1.03 ** 5, abs=0.01)
    assert out[0]["additional_needed"] > 0


def test_cost_of_living_uses_category_rates():
    df = project_cost_of_living({"food": 1000, "misc": 500}, 1)
    assert df["food"].iloc[1] == pytest.approx(1030)
    assert df["misc"].iloc[1] == pytest.approx(500 * 1.023)
    assert df["Total"].iloc[0] == 1500


def test_salary_for_purchasing_power():
    assert salary_for_purchasing_power(5000, 10, 2)["required_salary"] == pytest.approx(5000 * 1.02 ** 10, abs=0.01)


def test_compound_growth():
    assert compound_growth(1000, 0, 0, 5)["final_value"] == 1000
    res = compound_growth(1000, 100, 6, 10)
    assert res["total_contributions"] == 1000 + 100 * 120
    assert res["total_returns"] > 0
    assert compound_growth(-1, 100, 6, 10)["final_value"] == 0


def test_goal_savings():
    done = goal_savings(10000, 20000, 5, 4)
    assert done["required_monthly"] == 0
    assert done["is_achievable"]

    need = goal_savings(100000, 10000, 5, 4)
    assert need["required_monthly"] > 0
    assert need["required_monthly"] * 60 < 100000 - 10000


def test_real_vs_nominal_without_inflation():
    res = real_vs_nominal_growth(10000, 0, 5, 0, 10)
    assert res["real"]["final_value"] == pytest.approx(res["nominal"]["final_value"])
    assert res["comparison"]["inflation_impact"] == 0


def test_real_vs_nominal_with_inflation():
    res = real_vs_nominal_growth(10000, 500, 6, 3, 20)
    assert res["total_contributions"] == 130000
    assert res["real"]["final_value"] < res["nominal"]["final_value"]
    assert 0 < res["comparison"]["purchasing_power_loss"] < 100
    assert res["real"]["return_rate"] == pytest.approx(2.91, abs=0.01)


def test_real_vs_nominal_at_zero_rates():
    res = real_vs_nominal_growth(1000, 100, 0, 0, 1)
    assert res["nominal"]["final_value"] == 2200
    assert res["nominal"]["returns"] == 0


def test_inflation_impact_by_asset():
    df = inflation_impact_by_asset(10000, 10, 3)
    by_asset = df.set_index("Asset")
    assert list(df["Asset"]) == ["Cash", "CPF OA", "CPF SA", "Equities"]
    assert list(df["Return_Rate"]) == [0, 2.5, 4, 7]
    assert by_asset.loc["Cash", "Real_Value"] == pytest.approx(10000 / 1.03 ** 10, abs=0.01)
    assert list(df["Beats_Inflation"]) == [False, False, True, True]
    assert by_asset.loc["Cash", "Nominal_Gain"] == 0
