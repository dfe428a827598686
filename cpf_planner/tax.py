"""Singapore resident and non-resident personal income tax (YA 2025)."""
import math

import numpy as np

from .rates import (
    DONATION_DEDUCTION_MULTIPLIER,
    NON_RESIDENT_FLAT_RATE,
    TAX_BRACKETS,
    TAX_RELIEF_CAPS,
)


def earned_income_relief() -> float:
    return TAX_RELIEF_CAPS["earned_income"]


def cpf_relief(employee_contribution: float) -> float:
    """Only the employee's own mandatory contributions count towards relief."""
    return min(employee_contribution, TAX_RELIEF_CAPS["cpf"])


def total_reliefs(reliefs=None) -> dict:
    reliefs = reliefs or {}
    breakdown = {"earned_income": earned_income_relief()}

    cpf = reliefs.get("cpf_contributions", 0.0)
    if cpf:
        breakdown["cpf"] = cpf_relief(cpf)

    for kind, cap in TAX_RELIEF_CAPS.items():
        if kind in ("earned_income", "cpf"):
            continue
        claimed = reliefs.get(kind, 0.0)
        if claimed and claimed > 0:
            breakdown[kind] = min(claimed, cap)

    return {"total_relief": round(sum(breakdown.values()), 2), "breakdown": breakdown}


def progressive_tax(chargeable_income: float) -> dict:
    if chargeable_income <= 0:
        return {"total_tax": 0.0, "effective_rate": 0.0, "marginal_rate": 0.0, "breakdown": []}

    tax = 0.0
    remaining = chargeable_income
    breakdown = []
    for b in TAX_BRACKETS:
        if remaining <= 0:
            break
        width = b["max"] - b["min"]
        portion = min(remaining, width) if np.isfinite(width) else remaining
        tax_in = portion * b["rate"]
        tax += tax_in
        breakdown.append({
            "min": b["min"],
            "max": b["max"],
            "rate": b["rate"] * 100,
            "taxable_amount": portion,
            "tax_amount": round(tax_in, 2),
        })
        remaining -= portion

    marginal = TAX_BRACKETS[-1]["rate"]
    for b in TAX_BRACKETS:
        if b["min"] < chargeable_income <= b["max"]:
            marginal = b["rate"]
            break

    return {
        "total_tax": round(tax, 2),
        "effective_rate": round(tax / chargeable_income * 100, 2),
        "marginal_rate": round(marginal * 100, 2),
        "breakdown": breakdown,
    }


def personal_income_tax(gross_income: float, reliefs=None, donations: float = 0.0, rebate_pct: float = 0.0) -> dict:
    """Annual resident tax after reliefs, 250% donation deductions and a % rebate."""
    relief = total_reliefs(reliefs)
    donation_deduction = donations * DONATION_DEDUCTION_MULTIPLIER
    chargeable = max(0.0, gross_income - relief["total_relief"] - donation_deduction)

    calc = progressive_tax(chargeable)
    rebate = min(calc["total_tax"] * rebate_pct / 100, calc["total_tax"]) if rebate_pct > 0 else 0.0
    final_tax = max(0.0, calc["total_tax"] - rebate)

    return {
        "gross_income": round(gross_income, 2),
        "total_reliefs": relief["total_relief"],
        "relief_breakdown": relief["breakdown"],
        "donations_deduction": round(donation_deduction, 2),
        "chargeable_income": round(chargeable, 2),
        "tax_before_rebate": calc["total_tax"],
        "rebate_amount": round(rebate, 2),
        "final_tax": round(final_tax, 2),
        "effective_rate": round(final_tax / gross_income * 100, 2) if gross_income > 0 else 0.0,
        "marginal_rate": calc["marginal_rate"],
        "take_home_income": round(gross_income - final_tax, 2),
        "bracket_breakdown": calc["breakdown"],
    }


def monthly_tax(monthly_gross: float, reliefs=None, donations: float = 0.0, rebate_pct: float = 0.0) -> dict:
    """Annualise a monthly income (and monthly CPF relief) and spread the tax back over 12 months."""
    annual_reliefs = dict(reliefs or {})
    if annual_reliefs.get("cpf_contributions"):
        annual_reliefs["cpf_contributions"] = annual_reliefs["cpf_contributions"] * 12

    annual = personal_income_tax(monthly_gross * 12, annual_reliefs, donations, rebate_pct)
    per_month = annual["final_tax"] / 12
    return {
        "monthly_gross_income": round(monthly_gross, 2),
        "estimated_monthly_tax": round(per_month, 2),
        "monthly_take_home": round(monthly_gross - per_month, 2),
        "annual": annual,
    }


def bonus_tax_impact(annual_income: float, bonus: float, reliefs=None) -> dict:
    without = personal_income_tax(annual_income, reliefs)
    with_bonus = personal_income_tax(annual_income + bonus, reliefs)
    extra = with_bonus["final_tax"] - without["final_tax"]
    return {
        "additional_income": round(bonus, 2),
        "additional_tax": round(extra, 2),
        "effective_tax_on_bonus": round(extra / bonus * 100, 2) if bonus > 0 else 0.0,
        "net_bonus": round(bonus - extra, 2),
        "tax_without_bonus": without["final_tax"],
        "tax_with_bonus": with_bonus["final_tax"],
    }


def compare_tax_scenarios(gross_income: float, scenarios) -> list:
    """Tax under each scenario, with the saving against the first one.

    A scenario is a dict with optional ``name``, ``reliefs``, ``donations`` and ``rebate_pct``.
    """
    results = []
    baseline = None
    for i, sc in enumerate(scenarios):
        res = personal_income_tax(gross_income, sc.get("reliefs"), sc.get("donations", 0.0), sc.get("rebate_pct", 0.0))
        if baseline is None:
            baseline = res["final_tax"]
        res["scenario_name"] = sc.get("name") or f"Scenario {i + 1}"
        res["tax_savings"] = round(baseline - res["final_tax"], 2)
        results.append(res)
    return results


def non_resident_tax(gross_income: float, employment_days: int = 365) -> dict:
    """Higher of the flat non-resident rate and resident rates after earned-income relief."""
    flat = gross_income * NON_RESIDENT_FLAT_RATE
    progressive = progressive_tax(gross_income - earned_income_relief())["total_tax"]
    final_tax = max(flat, progressive)
    return {
        "gross_income": round(gross_income, 2),
        "flat_rate_tax": round(flat, 2),
        "progressive_tax": progressive,
        "final_tax": round(final_tax, 2),
        "effective_rate": round(final_tax / gross_income * 100, 2) if gross_income > 0 else 0.0,
        "tax_method": "15% Flat Rate" if math.isclose(final_tax, flat) else "Progressive Rates",
        "employment_days": employment_days,
    }
