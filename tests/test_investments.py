import logging
import math

import pytest

from cpf_planner.investments import (
    compare_cpf_vs_investment,
    dollar_cost_averaging,
    portfolio_metrics,
    rebalancing,
    retirement_corpus,
    risk_level,
    withdrawal_sustainability,
)


def test_all_cash_portfolio():
    res = portfolio_metrics([{"asset_class": "CASH", "percentage": 100}])
    assert res["expected_return"] == 1.5
    assert res["volatility"] == 0
    assert res["sharpe_ratio"] == 0
    assert res["risk_level"] == "Very Low"


def test_balanced_portfolio():
    res = portfolio_metrics([
        {"asset_class": "GLOBAL_EQUITIES", "percentage": 50},
        {"asset_class": "SINGAPORE_BONDS", "percentage": 50},
    ])
    assert res["expected_return"] == pytest.approx(5.5)
    assert res["volatility"] == pytest.approx(math.sqrt(0.1 ** 2 + 0.015 ** 2) * 100, abs=0.01)
    assert res["sharpe_ratio"] == pytest.approx(0.3, abs=0.01)
    assert res["risk_level"] == "Medium"


def test_empty_and_unknown_portfolios(caplog):
    assert portfolio_metrics([])["risk_level"] == "N/A"
    with caplog.at_level(logging.WARNING, logger="cpf_planner.investments"):
        res = portfolio_metrics([{"asset_class": "CRYPTO", "percentage": 100}])
    assert res["expected_return"] == 0
    assert "CRYPTO" in caplog.text


@pytest.mark.parametrize("vol,level", [(0.0, "Very Low"), (0.05, "Low"), (0.12, "Medium"), (0.19, "High"), (0.2, "Very High")])
def test_risk_levels(vol, level):
    assert risk_level(vol) == level


def test_dollar_cost_averaging_scenarios():
    res = dollar_cost_averaging(500, 6, 10, volatility=0.15)
    assert res["total_contributed"] == 60000
    # 6% - 15% floors at no growth
    assert res["conservative_scenario"]["final_value"] == 60000
    assert res["conservative_scenario"]["total_returns"] == 0
    assert res["conservative_scenario"]["return_rate"] == -9
    assert res["base_scenario"]["final_value"] > 60000
    assert res["optimistic_scenario"]["final_value"] > res["base_scenario"]["final_value"]
    assert res["optimistic_scenario"]["return_rate"] == 21


def test_rebalancing_recommends_buys_and_sells():
    res = rebalancing({"SINGAPORE_EQUITIES": 7000, "SINGAPORE_BONDS": 3000}, {"SINGAPORE_EQUITIES": 60, "SINGAPORE_BONDS": 40})
    assert res["needs_rebalancing"]
    assert res["total_portfolio_value"] == 10000
    assert res["total_rebalance_amount"] == 2000
    by_asset = {r["asset_class"]: r for r in res["recommendations"]}
    assert by_asset["SINGAPORE_EQUITIES"]["action"] == "Sell"
    assert by_asset["SINGAPORE_EQUITIES"]["amount"] == 1000
    assert by_asset["SINGAPORE_EQUITIES"]["percentage_diff"] == 10
    assert by_asset["SINGAPORE_BONDS"]["action"] == "Buy"
    assert by_asset["SINGAPORE_BONDS"]["target_value"] == 4000


def test_rebalancing_ignores_small_drift_and_buys_missing_assets():
    assert not rebalancing({"A": 6050, "B": 3950}, {"A": 60, "B": 40})["needs_rebalancing"]

    res = rebalancing({"A": 10000}, {"A": 80, "B": 20})
    assert [r["asset_class"] for r in res["recommendations"]] == ["A", "B"]
    assert res["recommendations"][1]["current_value"] == 0
    assert res["recommendations"][1]["action"] == "Buy"

    assert rebalancing({}, {"A": 100})["recommendations"] == []


def test_retirement_corpus():
    res = retirement_corpus(4000)
    assert res["corpus_using_withdrawal_rate"] == 1200000
    assert res["recommended_corpus"] == max(res["corpus_using_withdrawal_rate"], res["corpus_using_pv"])

    # Withdrawal rate equal to inflation: no real growth, so 30 years of income
    flat = retirement_corpus(4000, 30, 4, 4)
    assert flat["corpus_using_pv"] == 48000 * 30
    assert flat["recommended_corpus"] == 48000 * 30


def test_withdrawal_runs_dry():
    res = withdrawal_sustainability(100000, 1000, 0, 10)
    assert res["months_until_depletion"] == 100
    assert res["years_until_depletion"] == 8.3
    assert not res["is_sustainable"]
    assert res["final_balance"] == 0
    assert res["total_withdrawn"] == 100000
    assert len(res["projections"]) == 100
    assert res["projections"]["Balance"].iloc[-1] == 0


def test_withdrawal_sustainable():
    res = withdrawal_sustainability(1000000, 1000, 4, 30)
    assert res["is_sustainable"]
    assert res["months_until_depletion"] is None
    assert res["final_balance"] > 1000000
    assert len(res["projections"]) == 120


def test_cpf_top_up_vs_equities():
    res = compare_cpf_vs_investment(10000, 10, 7)
    assert res["cpf_sa"]["return_rate"] == 4
    assert res["cpf_sa"]["tax_savings"] == 0
    assert res["comparison"]["cpf_advantage"] < 0
    assert res["comparison"]["recommendation"] == "Alternative investment is better"


def test_cpf_top_up_with_tax_relief():
    res = compare_cpf_vs_investment(10000, 10, 2, tax_rate_pct=10)
    assert res["cpf_sa"]["tax_savings"] == 1000
    assert res["alternative"]["after_tax_returns"] == pytest.approx(res["alternative"]["returns"] * 0.9, abs=0.01)
    assert res["comparison"]["recommendation"] == "CPF SA Top-up is better"
    assert res["comparison"]["break_even_return"] == 5
