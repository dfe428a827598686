import pytest

from cpf_planner.tax import (
    bonus_tax_impact,
    compare_tax_scenarios,
    cpf_relief,
    monthly_tax,
    non_resident_tax,
    personal_income_tax,
    progressive_tax,
    total_reliefs,
)


@pytest.mark.parametrize("income,tax", [
    (0, 0),
    (20000, 0),
    (30000, 200),
    (40000, 550),
    (80000, 3350),
    (120000, 7950),
])
def test_progressive_brackets(income, tax):
    assert progressive_tax(income)["total_tax"] == pytest.approx(tax)


def test_marginal_rate():
    assert progressive_tax(50000)["marginal_rate"] == 7
    assert progressive_tax(2_000_000)["marginal_rate"] == 24


def test_reliefs_are_capped():
    res = total_reliefs({"cpf_contributions": 50000, "parent": 20000, "spouse": 1000, "unknown": 5})
    assert res["breakdown"]["earned_income"] == 1000
    assert res["breakdown"]["cpf"] == 37740
    assert res["breakdown"]["parent"] == 9000
    assert res["breakdown"]["spouse"] == 1000
    assert "unknown" not in res["breakdown"]
    assert cpf_relief(1000) == 1000


def test_personal_income_tax():
    res = personal_income_tax(80000)
    assert res["chargeable_income"] == 79000
    assert res["final_tax"] == pytest.approx(550 + 39000 * 0.07)

    with_donation = personal_income_tax(80000, donations=1000)
    assert with_donation["donations_deduction"] == 2500
    assert with_donation["final_tax"] < res["final_tax"]

    with_rebate = personal_income_tax(80000, rebate_pct=50)
    assert with_rebate["final_tax"] == pytest.approx(res["final_tax"] / 2, abs=0.01)


def test_monthly_tax_leaves_inputs_untouched():
    reliefs = {"cpf_contributions": 1000}
    res = monthly_tax(6000, reliefs)
    assert reliefs == {"cpf_contributions": 1000}
    assert res["annual"]["relief_breakdown"]["cpf"] == 12000
    assert res["estimated_monthly_tax"] == pytest.approx(res["annual"]["final_tax"] / 12, abs=0.01)


def test_bonus_tax_impact():
    res = bonus_tax_impact(60000, 10000)
    assert res["additional_tax"] == pytest.approx(700)
    assert res["net_bonus"] == pytest.approx(9300)
    assert res["effective_tax_on_bonus"] == pytest.approx(7)


def test_non_resident_pays_higher_of_two_methods():
    low = non_resident_tax(50000)
    assert low["final_tax"] == 7500
    assert low["tax_method"] == "15% Flat Rate"

    high = non_resident_tax(2_000_000)
    assert high["tax_method"] == "Progressive Rates"
    assert high["final_tax"] > 2_000_000 * 0.15


def test_compare_tax_scenarios_against_first():
    res = compare_tax_scenarios(100000, [
        {"name": "Base"},
        {"name": "Donate", "donations": 1000},
        {"rebate_pct": 50},
    ])
    assert [r["scenario_name"] for r in res] == ["Base", "Donate", "Scenario 3"]
    assert res[0]["final_tax"] == pytest.approx(5535)
    assert res[0]["tax_savings"] == 0
    assert res[1]["tax_savings"] == pytest.approx(2500 * 0.115)
    assert res[2]["tax_savings"] == pytest.approx(5535 / 2, abs=0.01)
    assert compare_tax_scenarios(100000, []) == []
