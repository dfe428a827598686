import numpy as np
import pandas as pd

from .rates import ASSET_CLASSES, BASE_INT, SINGAPORE_INFLATION_RATES

# Real return assumed while drawing down in retirement
RETIREMENT_REAL_DISCOUNT = 0.04

# Holdings compared in inflation_impact_by_asset, annual fractions
ASSET_RETURNS = (
    ("Cash", 0.0),
    ("CPF OA", BASE_INT["OA"]),
    ("CPF SA", BASE_INT["SA"]),
    ("Equities", ASSET_CLASSES["SINGAPORE_EQUITIES"]["expected_return"]),
)


def _growth(rate_pct, years):
    return (1 + rate_pct / 100) ** years


def inflation_adjusted_value(current_value: float, inflation_pct: float, years: float) -> dict:
    mult = _growth(inflation_pct, years)
    return {
        "current_value": round(current_value, 2),
        "future_nominal_value": round(current_value * mult, 2),
        "inflation_rate": inflation_pct,
        "years": years,
        "total_inflation": round((mult - 1) * 100, 2),
        "purchasing_power_loss": round((1 - 1 / mult) * 100, 2),
    }


def present_value(future_value: float, inflation_pct: float, years: float) -> float:
    return round(future_value / _growth(inflation_pct, years), 2)


def real_return(nominal_pct: float, inflation_pct: float) -> dict:
    """Fisher real return alongside the nominal-minus-inflation shortcut, all in %."""
    real = ((1 + nominal_pct / 100) / (1 + inflation_pct / 100) - 1) * 100
    approx = nominal_pct - inflation_pct
    return {
        "nominal_return": round(nominal_pct, 2),
        "inflation_rate": round(inflation_pct, 2),
        "real_return": round(real, 2),
        "approximate_real_return": round(approx, 2),
        "difference": round(real - approx, 2),
    }


def project_purchasing_power(initial_amount: float, inflation_pct: float, years: int) -> pd.DataFrame:
    yrs = np.arange(0, years + 1)
    mult = (1 + inflation_pct / 100) ** yrs
    real = initial_amount / mult
    loss = (initial_amount - real) / initial_amount * 100 if initial_amount else np.zeros_like(real)
    return pd.DataFrame({
        "Year": yrs,
        "Nominal_Value": np.round(initial_amount * mult, 2),
        "Real_Value": np.round(real, 2),
        "Purchasing_Power_Loss": np.round(loss, 2),
    })


def _future_value(principal, monthly, monthly_rate, periods):
    growth = (1 + monthly_rate) ** periods
    contrib = monthly * (growth - 1) / monthly_rate if monthly_rate != 0 else monthly * periods
    return principal * growth + contrib


def real_vs_nominal_growth(principal: float, monthly_contribution: float, nominal_pct: float,
                           inflation_pct: float, years: float) -> dict:
    """Grow the same savings plan at the nominal and at the Fisher real rate.

    The real final value is the nominal outcome in today's dollars.
    """
    real_pct = ((1 + nominal_pct / 100) / (1 + inflation_pct / 100) - 1) * 100
    periods = years * 12
    nominal_total = _future_value(principal, monthly_contribution, (1 + nominal_pct / 100) ** (1 / 12) - 1, periods)
    real_total = _future_value(principal, monthly_contribution, (1 + real_pct / 100) ** (1 / 12) - 1, periods)
    contributed = principal + monthly_contribution * periods
    impact = nominal_total - real_total

    return {
        "nominal": {
            "final_value": round(nominal_total, 2),
            "returns": round(nominal_total - contributed, 2),
            "return_rate": nominal_pct,
        },
        "real": {
            "final_value": round(real_total, 2),
            "returns": round(real_total - contributed, 2),
            "return_rate": round(real_pct, 2),
        },
        "comparison": {
            "inflation_impact": round(impact, 2),
            "purchasing_power_loss": round(impact / nominal_total * 100, 2) if nominal_total else 0.0,
        },
        "total_contributions": round(contributed, 2),
        "years": years,
    }


def inflation_impact_by_asset(amount: float, years: float, inflation_pct: float) -> pd.DataFrame:
    """Nominal and real value of ``amount`` held in cash, CPF OA, CPF SA and equities."""
    names = [name for name, _ in ASSET_RETURNS]
    rates = np.array([rate for _, rate in ASSET_RETURNS])
    nominal = amount * (1 + rates) ** years
    real = nominal / _growth(inflation_pct, years)
    multiple = real / amount if amount else np.zeros_like(real)
    return pd.DataFrame({
        "Asset": names,
        "Return_Rate": np.round(rates * 100, 2),
        "Nominal_Value": np.round(nominal, 2),
        "Real_Value": np.round(real, 2),
        "Nominal_Gain": np.round(nominal - amount, 2),
        "Real_Gain": np.round(real - amount, 2),
        "Purchasing_Power_Multiple": np.round(multiple, 2),
        "Beats_Inflation": real > amount,
    })


def inflation_adjusted_retirement(monthly_expenses: float, years_until_retirement: float,
                                  years_in_retirement: int = 30, inflation_pct: float = 2.3) -> dict:
    future_monthly = monthly_expenses * _growth(inflation_pct, years_until_retirement)
    annual = future_monthly * 12
    pv = annual * (1 - (1 + RETIREMENT_REAL_DISCOUNT) ** -years_in_retirement) / RETIREMENT_REAL_DISCOUNT
    return {
        "current_monthly_expenses": round(monthly_expenses, 2),
        "future_monthly_expenses": round(future_monthly, 2),
        "future_annual_expenses": round(annual, 2),
        "years_until_retirement": years_until_retirement,
        "years_in_retirement": years_in_retirement,
        "total_retirement_need": round(annual * years_in_retirement, 2),
        "present_value_retirement_need": round(pv, 2),
        "inflation_impact": round(future_monthly - monthly_expenses, 2),
    }


def adjust_milestones_for_inflation(milestones, inflation_pct: float) -> list:
    """``milestones`` is a list of dicts with name, target_amount and years_from_now."""
    out = []
    for m in milestones:
        mult = _growth(inflation_pct, m["years_from_now"])
        target = m["target_amount"] * mult
        out.append({
            "name": m["name"],
            "original_target": round(m["target_amount"], 2),
            "years_from_now": m["years_from_now"],
            "inflation_adjusted_target": round(target, 2),
            "additional_needed": round(target - m["target_amount"], 2),
            "inflation_impact_pct": round((mult - 1) * 100, 2),
        })
    return out


def project_cost_of_living(expenses: dict, years: int, inflation_rates=None) -> pd.DataFrame:
    """Yearly cost per category; categories without a rate use the overall CPI rate (fractions)."""
    inflation_rates = inflation_rates or {}
    yrs = np.arange(0, years + 1)
    data = {"Year": yrs}
    total = np.zeros(len(yrs))
    for cat, amount in expenses.items():
        rate = inflation_rates.get(cat, SINGAPORE_INFLATION_RATES.get(cat, SINGAPORE_INFLATION_RATES["overall"]))
        col = amount * (1 + rate) ** yrs
        data[cat] = np.round(col, 2)
        total += col
    data["Total"] = np.round(total, 2)
    return pd.DataFrame(data)


def salary_for_purchasing_power(current_salary: float, years: float, inflation_pct: float) -> dict:
    required = current_salary * _growth(inflation_pct, years)
    return {
        "current_salary": round(current_salary, 2),
        "required_salary": round(required, 2),
        "total_increase": round(required - current_salary, 2),
        "annual_raise_needed": round(inflation_pct, 2),
        "years": years,
    }


def compound_growth(principal: float, monthly_contribution: float, annual_return_pct: float,
                    years: float, periods_per_year: int = 12) -> dict:
    if principal < 0 or monthly_contribution < 0 or years <= 0:
        return {"final_value": 0.0, "total_contributions": 0.0, "total_returns": 0.0,
                "principal_growth": 0.0, "contributions_growth": 0.0}

    periods = years * periods_per_year
    r = annual_return_pct / 100 / periods_per_year
    if r == 0:
        principal_fv = principal
        contrib_fv = monthly_contribution * periods
    else:
        principal_fv = principal * (1 + r) ** periods
        contrib_fv = monthly_contribution * ((1 + r) ** periods - 1) / r

    final = principal_fv + contrib_fv
    contributed = principal + monthly_contribution * periods
    return {
        "final_value": round(final, 2),
        "total_contributions": round(contributed, 2),
        "total_returns": round(final - contributed, 2),
        "principal_growth": round(principal_fv, 2),
        "contributions_growth": round(contrib_fv, 2),
    }


def goal_savings(target: float, current: float, years: float, expected_return_pct: float) -> dict:
    """Monthly saving needed to grow ``current`` into ``target`` within ``years``."""
    periods = years * 12
    r = (1 + expected_return_pct / 100) ** (1 / 12) - 1
    current_fv = current * (1 + r) ** periods
    remaining = target - current_fv

    required = 0.0
    if remaining > 0 and periods > 0:
        required = remaining * r / ((1 + r) ** periods - 1) if r != 0 else remaining / periods

    contributions = required * periods
    return {
        "target_amount": round(target, 2),
        "current_amount": round(current, 2),
        "years_to_goal": years,
        "required_monthly": round(required, 2),
        "total_contributions": round(contributions, 2),
        "expected_growth": round(max(0.0, target - current - contributions), 2),
        "current_amount_future_value": round(current_fv, 2),
        "is_achievable": remaining <= 0 or periods > 0,
    }
