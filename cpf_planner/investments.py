"""Portfolio, dollar-cost averaging, rebalancing and drawdown helpers.

Rates passed in are annual percentages; the asset-class table in ``rates`` keeps
annual fractions.
"""
import logging

import numpy as np
import pandas as pd

from .inflation import compound_growth
from .rates import ASSET_CLASSES, BASE_INT, RISK_FREE_RATE, RISK_LEVELS

logger = logging.getLogger(__name__)

# Positions off target by no more than this share of the portfolio are left alone
REBALANCE_THRESHOLD = 0.01
# Months of the drawdown path returned with the summary
WITHDRAWAL_ROWS_KEPT = 120


def risk_level(volatility: float) -> str:
    for bound, label in RISK_LEVELS:
        if volatility < bound:
            return label
    return "Very High"


# ==============================
# Portfolio
# ==============================
def portfolio_metrics(allocations) -> dict:
    """Weighted expected return, volatility and Sharpe ratio of a portfolio.

    ``allocations`` is a list of dicts with an ``asset_class`` key from
    ``ASSET_CLASSES`` and a ``percentage``. Assets are treated as uncorrelated.
    Returned return and volatility are in %.
    """
    if not allocations:
        return {"expected_return": 0.0, "volatility": 0.0, "sharpe_ratio": 0.0, "risk_level": "N/A"}

    known = []
    for a in allocations:
        if a.get("asset_class") in ASSET_CLASSES:
            known.append(a)
        else:
            logger.warning("Unknown asset class %r ignored", a.get("asset_class"))

    weights = np.array([a["percentage"] / 100 for a in known], dtype=float)
    returns = np.array([ASSET_CLASSES[a["asset_class"]]["expected_return"] for a in known], dtype=float)
    vols = np.array([ASSET_CLASSES[a["asset_class"]]["volatility"] for a in known], dtype=float)

    expected = float(np.sum(weights * returns))
    volatility = float(np.sqrt(np.sum((weights * vols) ** 2)))
    sharpe = (expected - RISK_FREE_RATE) / volatility if volatility > 0 else 0.0
    return {
        "expected_return": round(expected * 100, 2),
        "volatility": round(volatility * 100, 2),
        "sharpe_ratio": round(sharpe, 2),
        "risk_level": risk_level(volatility),
    }


def dollar_cost_averaging(monthly_investment: float, expected_return_pct: float, years: float,
                          volatility: float = 0.15) -> dict:
    """Outcome of a fixed monthly investment at the expected return and one volatility either side."""
    spread = volatility * 100
    conservative_pct = expected_return_pct - spread
    optimistic_pct = expected_return_pct + spread

    base = compound_growth(0.0, monthly_investment, expected_return_pct, years)
    # A negative rate is floored at zero growth
    conservative = compound_growth(0.0, monthly_investment, max(0.0, conservative_pct), years)
    optimistic = compound_growth(0.0, monthly_investment, optimistic_pct, years)

    return {
        "monthly_investment": monthly_investment,
        "expected_annual_return": expected_return_pct,
        "years": years,
        "base_scenario": {
            "final_value": base["final_value"],
            "total_returns": base["total_returns"],
            "return_rate": round(expected_return_pct, 2),
        },
        "conservative_scenario": {
            "final_value": conservative["final_value"],
            "total_returns": conservative["total_returns"],
            "return_rate": round(conservative_pct, 2),
        },
        "optimistic_scenario": {
            "final_value": optimistic["final_value"],
            "total_returns": optimistic["total_returns"],
            "return_rate": round(optimistic_pct, 2),
        },
        "total_contributed": round(monthly_investment * years * 12, 2),
    }


def rebalancing(current_portfolio: dict, target_allocations: dict) -> dict:
    """Buy/sell amounts that bring ``current_portfolio`` (values) to ``target_allocations`` (%)."""
    total = float(sum(current_portfolio.values()))
    if total <= 0:
        return {"needs_rebalancing": False, "total_portfolio_value": 0.0,
                "total_rebalance_amount": 0.0, "recommendations": []}

    df = pd.DataFrame({"target_percentage": pd.Series(target_allocations, dtype=float)})
    df["current_value"] = pd.Series(current_portfolio, dtype=float).reindex(df.index).fillna(0.0)
    df["current_percentage"] = df["current_value"] / total * 100
    df["target_value"] = df["target_percentage"] / 100 * total
    diff = df["target_value"] - df["current_value"]
    df["action"] = np.where(diff > 0, "Buy", "Sell")
    df["amount"] = diff.abs()
    df["percentage_diff"] = df["current_percentage"] - df["target_percentage"]

    df = df[df["amount"] > total * REBALANCE_THRESHOLD].sort_values("amount", ascending=False, kind="stable")
    recs = df.round(2).rename_axis("asset_class").reset_index()
    return {
        "needs_rebalancing": not recs.empty,
        "total_portfolio_value": round(total, 2),
        "total_rebalance_amount": round(float(df["amount"].sum()), 2),
        "recommendations": recs.to_dict("records"),
    }


# ==============================
# Retirement drawdown
# ==============================
def retirement_corpus(desired_monthly_income: float, years_in_retirement: int = 30,
                      inflation_pct: float = 2.0, withdrawal_pct: float = 4.0) -> dict:
    """Corpus needed for an income, the higher of the withdrawal-rate rule and an
    inflation-adjusted annuity over ``years_in_retirement``."""
    annual = desired_monthly_income * 12
    real = (1 + withdrawal_pct / 100) / (1 + inflation_pct / 100) - 1
    if real == 0:
        by_pv = annual * years_in_retirement
    else:
        by_pv = annual * (1 - (1 + real) ** -years_in_retirement) / real
    by_withdrawal = annual / (withdrawal_pct / 100) if withdrawal_pct > 0 else by_pv

    return {
        "desired_monthly_income": round(desired_monthly_income, 2),
        "desired_annual_income": round(annual, 2),
        "recommended_corpus": round(max(by_withdrawal, by_pv), 2),
        "corpus_using_withdrawal_rate": round(by_withdrawal, 2),
        "corpus_using_pv": round(by_pv, 2),
        "withdrawal_rate": withdrawal_pct,
        "inflation_rate": inflation_pct,
        "years_in_retirement": years_in_retirement,
    }


def withdrawal_sustainability(principal: float, monthly_withdrawal: float,
                              annual_return_pct: float, years: float) -> dict:
    """Draw ``monthly_withdrawal`` from a growing pot until ``years`` pass or it runs dry."""
    r = (1 + annual_return_pct / 100) ** (1 / 12) - 1
    horizon = int(years * 12)
    balance = principal
    withdrawn = returns_total = 0.0
    depleted_at = None
    rows = []
    for month in range(1, horizon + 1):
        ret = balance * r
        balance = balance + ret - monthly_withdrawal
        withdrawn += monthly_withdrawal
        returns_total += ret
        if balance <= 0:
            depleted_at = month
            balance = 0.0
        rows.append({"Month": month, "Balance": balance, "Returns": ret, "Withdrawal": monthly_withdrawal})
        if depleted_at is not None:
            break

    projections = pd.DataFrame(rows[:WITHDRAWAL_ROWS_KEPT], columns=["Month", "Balance", "Returns", "Withdrawal"])
    return {
        "principal": round(principal, 2),
        "monthly_withdrawal": monthly_withdrawal,
        "annual_return": annual_return_pct,
        "years": years,
        "final_balance": round(balance, 2),
        "total_withdrawn": round(withdrawn, 2),
        "total_returns": round(returns_total, 2),
        "months_until_depletion": depleted_at,
        "years_until_depletion": round(depleted_at / 12, 1) if depleted_at else None,
        "is_sustainable": depleted_at is None,
        "projections": projections.round(2),
    }


def compare_cpf_vs_investment(investment_amount: float, years: float, alternative_return_pct: float,
                              tax_rate_pct: float = 0.0) -> dict:
    """SA top-up (base SA rate plus tax relief on the top-up) against a taxed alternative."""
    cpf_pct = BASE_INT["SA"] * 100
    cpf = compound_growth(investment_amount, 0.0, cpf_pct, years)
    tax_savings = investment_amount * tax_rate_pct / 100

    alt = compound_growth(investment_amount, 0.0, alternative_return_pct, years)
    alt_after_tax_returns = alt["total_returns"] * (1 - tax_rate_pct / 100)
    alt_after_tax_value = investment_amount + alt_after_tax_returns

    cpf_total = cpf["final_value"] + tax_savings
    advantage = cpf_total - alt_after_tax_value
    break_even = BASE_INT["SA"]
    if investment_amount > 0 and years > 0:
        break_even += tax_savings / investment_amount / years

    return {
        "cpf_sa": {
            "final_value": cpf["final_value"],
            "returns": cpf["total_returns"],
            "tax_savings": round(tax_savings, 2),
            "total_benefit": round(cpf_total, 2),
            "return_rate": cpf_pct,
        },
        "alternative": {
            "final_value": alt["final_value"],
            "returns": alt["total_returns"],
            "after_tax_returns": round(alt_after_tax_returns, 2),
            "after_tax_final_value": round(alt_after_tax_value, 2),
            "return_rate": alternative_return_pct,
        },
        "comparison": {
            "cpf_advantage": round(advantage, 2),
            "recommendation": "CPF SA Top-up is better" if advantage > 0 else "Alternative investment is better",
            "break_even_return": round(break_even * 100, 2),
        },
    }
