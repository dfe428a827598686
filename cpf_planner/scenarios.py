"""What-if analyses built on the loan, CPF and growth helpers.

Every function is pure and returns a plain dict with boolean verdicts the
caller can branch on.
"""
import math

from .brackets import ContributionBracket, bracket_crossing
from .loans import monthly_payment
from .rates import CITIZEN_RATES, CPF_OA_SHARE_ESTIMATE, MSR_LIMIT_PCT, TDSR_LIMIT_PCT

ASSUMED_RETURN = 0.04          # annual, for closed-form savings growth
SAFE_WITHDRAWAL_RATE = 0.04
LIFE_EXPECTANCY = 85
# employee + employer, age 55 and below
TOTAL_CPF_RATE = sum(CITIZEN_RATES[ContributionBracket.AGE_55_AND_BELOW.value])
BUYER_STAMP_DUTY_RATE = 0.03
OTHER_PURCHASE_COSTS_RATE = 0.05


def _monthly_return(annual=ASSUMED_RETURN):
    return (1 + annual) ** (1 / 12) - 1


def _fv_of_monthly(amount, periods, r):
    """Future value of ``amount`` saved at the end of each of ``periods`` months."""
    if periods <= 0:
        return 0.0
    if r == 0:
        return amount * periods
    return amount * ((1 + r) ** periods - 1) / r


def analyze_emergency_fund(liquid_cash, monthly_expenses, monthly_income=0.0, target_months=6):
    target = monthly_expenses * target_months
    covered = liquid_cash / monthly_expenses if monthly_expenses > 0 else 0.0
    shortfall = max(0.0, target - liquid_cash)
    surplus = monthly_income - monthly_expenses
    months_to_target = shortfall / surplus if surplus > 0 else math.inf

    if covered >= 12:
        level = "Excellent"
    elif covered >= 6:
        level = "Adequate"
    elif covered >= 3:
        level = "Fair"
    else:
        level = "Insufficient"

    return {
        "current_emergency_fund": round(liquid_cash, 2),
        "target_emergency_fund": round(target, 2),
        "months_covered": round(covered, 1),
        "target_months": target_months,
        "shortfall": round(shortfall, 2),
        "months_to_reach_target": round(months_to_target, 1) if months_to_target != math.inf else math.inf,
        "adequacy_level": level,
        "is_adequate": covered >= target_months,
    }


def simulate_job_loss(liquid_cash, monthly_expenses, unemployment_months, severance=0.0, cpf_balance=0.0):
    funds = liquid_cash + severance
    needed = monthly_expenses * unemployment_months
    runway = funds / monthly_expenses if monthly_expenses > 0 else math.inf
    needs_action = runway < unemployment_months

    if needs_action:
        recommendations = [
            "Reduce non-essential expenses immediately",
            "Consider part-time or freelance work",
            "Review insurance and unemployment support",
        ]
    else:
        recommendations = ["Current emergency fund is adequate", "Review insurance coverage"]

    return {
        "unemployment_months": unemployment_months,
        "severance": round(severance, 2),
        "monthly_burn_rate": round(monthly_expenses, 2),
        "total_funds_available": round(funds, 2),
        "total_expected_expenses": round(needed, 2),
        "cash_after_unemployment": round(funds - needed, 2),
        "months_until_broke": round(runway, 1) if runway != math.inf else math.inf,
        "needs_emergency_action": needs_action,
        "cpf_fallback": round(cpf_balance * CPF_OA_SHARE_ESTIMATE, 2),
        "recommendations": recommendations,
    }


def analyze_housing_affordability(property_price, monthly_income, monthly_expenses, liquid_cash,
                                  cpf_balance=0.0, down_payment_pct=25.0, years=25,
                                  interest_rate=2.6, other_debt_payments=0.0):
    """TDSR/MSR checks and upfront cash needs for a property purchase."""
    down_payment = property_price * down_payment_pct / 100
    loan_amount = property_price - down_payment
    instalment = monthly_payment(loan_amount, interest_rate, years)

    if monthly_income > 0:
        tdsr = (instalment + other_debt_payments) / monthly_income * 100
        msr = instalment / monthly_income * 100
    else:
        tdsr = msr = math.inf
    passes_tdsr = tdsr <= TDSR_LIMIT_PCT
    passes_msr = msr <= MSR_LIMIT_PCT

    funds = liquid_cash + cpf_balance * CPF_OA_SHARE_ESTIMATE
    can_afford_dp = funds >= down_payment
    net_cash_flow = monthly_income - monthly_expenses - instalment - other_debt_payments

    stamp_duty = property_price * BUYER_STAMP_DUTY_RATE
    other_costs = property_price * OTHER_PURCHASE_COSTS_RATE
    upfront = down_payment + stamp_duty + other_costs

    problems = []
    if not passes_tdsr:
        problems.append(f"TDSR is {tdsr:.0f}%, exceeds {TDSR_LIMIT_PCT:.0f}% limit")
    if not passes_msr:
        problems.append(f"MSR is {msr:.0f}%, exceeds {MSR_LIMIT_PCT:.0f}% limit")
    if not can_afford_dp:
        problems.append("Insufficient funds for down payment")
    if net_cash_flow < 0:
        problems.append("Negative monthly cash flow after purchase")

    return {
        "price": round(property_price, 2),
        "down_payment": round(down_payment, 2),
        "loan_amount": round(loan_amount, 2),
        "monthly_payment": instalment,
        "tdsr": round(tdsr, 2) if tdsr != math.inf else math.inf,
        "msr": round(msr, 2) if msr != math.inf else math.inf,
        "passes_tdsr": passes_tdsr,
        "passes_msr": passes_msr,
        "can_afford_down_payment": can_afford_dp,
        "monthly_net_cash_flow": round(net_cash_flow, 2),
        "upfront_costs": {
            "down_payment": round(down_payment, 2),
            "stamp_duty": round(stamp_duty, 2),
            "additional_costs": round(other_costs, 2),
            "total": round(upfront, 2),
            "available_funds": round(funds, 2),
            "shortfall": round(max(0.0, upfront - funds), 2),
        },
        "is_affordable": passes_tdsr and passes_msr and can_afford_dp and net_cash_flow > 0,
        "issues": problems,
    }


def analyze_retirement_readiness(current_age, retirement_age, desired_monthly_income,
                                 liquid_cash=0.0, cpf_balance=0.0, monthly_savings=0.0):
    """Project today's corpus plus monthly savings to retirement at 4% and compare with a 4% draw-down need."""
    years_left = max(0, retirement_age - current_age)
    r = _monthly_return()
    periods = years_left * 12

    corpus = liquid_cash + cpf_balance
    projected = corpus * (1 + ASSUMED_RETURN) ** years_left + _fv_of_monthly(monthly_savings, periods, r)
    required = desired_monthly_income * 12 / SAFE_WITHDRAWAL_RATE
    shortfall = max(0.0, required - projected)

    extra_needed = 0.0
    if shortfall > 0 and periods > 0:
        extra_needed = shortfall * r / ((1 + r) ** periods - 1)

    ratio = projected / required * 100 if required > 0 else math.inf
    if ratio >= 100:
        level = "On Track"
    elif ratio >= 75:
        level = "Needs Improvement"
    else:
        level = "Significant Gap"

    return {
        "current_age": current_age,
        "retirement_age": retirement_age,
        "years_to_retirement": years_left,
        "years_in_retirement": max(0, LIFE_EXPECTANCY - retirement_age),
        "current_corpus": round(corpus, 2),
        "projected_corpus": round(projected, 2),
        "required_corpus": round(required, 2),
        "shortfall": round(shortfall, 2),
        "surplus_deficit": round(projected - required, 2),
        "adequacy_ratio": round(ratio, 2) if ratio != math.inf else math.inf,
        "readiness_level": level,
        "is_on_track": ratio >= 100,
        "additional_monthly_savings": round(extra_needed, 2),
        "cpf_rate_change": bracket_crossing(current_age, years_left),
    }


def simulate_salary_increase(current_salary, monthly_expenses, increase_pct,
                             monthly_savings=0.0, years=10, savings_share=0.5):
    """Split a raise between savings and lifestyle and compare wealth after ``years``."""
    new_salary = current_salary * (1 + increase_pct / 100)
    raise_amount = new_salary - current_salary
    new_savings = monthly_savings + raise_amount * savings_share
    new_expenses = monthly_expenses + raise_amount * (1 - savings_share)

    r = _monthly_return()
    periods = years * 12
    old_fv = _fv_of_monthly(monthly_savings, periods, r)
    new_fv = _fv_of_monthly(new_savings, periods, r)

    return {
        "current_salary": round(current_salary, 2),
        "new_salary": round(new_salary, 2),
        "additional_income": round(raise_amount, 2),
        "current_savings_rate": round(monthly_savings / current_salary * 100, 2) if current_salary > 0 else 0.0,
        "new_savings_rate": round(new_savings / new_salary * 100, 2) if new_salary > 0 else 0.0,
        "new_monthly_expenses": round(new_expenses, 2),
        "new_monthly_savings": round(new_savings, 2),
        "years": years,
        "old_scenario_wealth": round(old_fv, 2),
        "new_scenario_wealth": round(new_fv, 2),
        "additional_wealth": round(new_fv - old_fv, 2),
        "wealth_multiplier": round(new_fv / old_fv, 2) if old_fv > 0 else 0.0,
    }


def simulate_career_break(liquid_cash, break_months, monthly_expenses_during_break, current_salary=0.0):
    total_expenses = monthly_expenses_during_break * break_months
    lost_income = current_salary * break_months
    lost_cpf = current_salary * TOTAL_CPF_RATE * break_months
    cash_after = liquid_cash - total_expenses
    can_afford = cash_after >= 0

    r = _monthly_return()
    # Growth forgone had the lost salary been invested
    opportunity_cost = _fv_of_monthly(current_salary, break_months, r)

    buffer_months = 0.0
    if can_afford and monthly_expenses_during_break > 0:
        buffer_months = round(cash_after / monthly_expenses_during_break, 1)

    return {
        "break_months": break_months,
        "total_expenses": round(total_expenses, 2),
        "cash_after_break": round(cash_after, 2),
        "lost_income": round(lost_income, 2),
        "lost_cpf_contributions": round(lost_cpf, 2),
        "opportunity_cost": round(opportunity_cost, 2),
        "total_impact": round(total_expenses + lost_income + lost_cpf, 2),
        "can_afford_break": can_afford,
        "cash_buffer": round(cash_after, 2) if can_afford else 0.0,
        "months_of_buffer_remaining": buffer_months,
    }


def compare_scenarios(scenarios):
    """Rank scenario dicts (name, monthly_income, monthly_expenses, monthly_savings, years) by savings rate."""
    if not scenarios:
        return {"scenarios": [], "best_scenario": None, "wealth_gap": 0.0}

    r = _monthly_return()
    rows = []
    for i, s in enumerate(scenarios):
        income = s.get("monthly_income", 0.0)
        savings = s.get("monthly_savings", 0.0)
        rows.append({
            "name": s.get("name") or f"Scenario {i + 1}",
            "monthly_income": round(income, 2),
            "monthly_expenses": round(s.get("monthly_expenses", 0.0), 2),
            "monthly_savings": round(savings, 2),
            "savings_rate": round(savings / income * 100, 2) if income > 0 else 0.0,
            "annual_savings": round(savings * 12, 2),
            "projected_wealth": round(_fv_of_monthly(savings, s.get("years", 10) * 12, r), 2),
        })

    ranked = sorted(rows, key=lambda x: x["savings_rate"], reverse=True)
    return {
        "scenarios": rows,
        "best_scenario": ranked[0],
        "highest_savings_rate": ranked[0]["savings_rate"],
        "lowest_savings_rate": ranked[-1]["savings_rate"],
        "wealth_gap": round(ranked[0]["projected_wealth"] - ranked[-1]["projected_wealth"], 2),
    }
