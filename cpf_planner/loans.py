import logging
import math

from .rates import MONTH_NAMES

logger = logging.getLogger(__name__)


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def monthly_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """Level monthly instalment; 0 for a non-positive principal or term or a negative rate."""
    if principal <= 0 or annual_rate_pct < 0 or years <= 0:
        return 0.0
    r = _monthly_rate(annual_rate_pct)
    n = years * 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return round(principal * r * growth / (growth - 1), 2)


def payment_breakdown(balance: float, payment: float, annual_rate_pct: float) -> dict:
    if balance <= 0:
        return {"interest_payment": 0.0, "principal_payment": 0.0, "new_balance": 0.0}
    interest = balance * _monthly_rate(annual_rate_pct)
    principal_paid = min(max(0.0, payment - interest), balance)
    new_balance = max(0.0, balance - principal_paid)
    return {
        "interest_payment": round(interest, 2),
        "principal_payment": round(principal_paid, 2),
        "new_balance": round(new_balance, 2),
    }


def format_months(months) -> str:
    if months == math.inf:
        return "Never (payment insufficient)"
    months = int(months)
    if months <= 0:
        return "0 months"
    years, rem = divmod(months, 12)
    if years == 0:
        return f"{months} month{'s' if months > 1 else ''}"
    out = f"{years} year{'s' if years > 1 else ''}"
    if rem:
        out += f" {rem} month{'s' if rem > 1 else ''}"
    return out


def amortization_schedule(principal: float, annual_rate_pct: float, years: float,
                          start=None, payment=None) -> list:
    """Month-by-month rows until the balance is exactly zero.

    ``payment`` defaults to the level instalment for the term, in which case the
    row at the end of the term settles whatever rounding has left. With an
    explicit payment the schedule runs until that payment clears the loan.
    A payment that cannot reduce the principal yields an empty schedule.
    """
    if principal <= 0 or annual_rate_pct < 0 or years <= 0:
        return []
    r = _monthly_rate(annual_rate_pct)
    term = int(math.ceil(years * 12))
    pmt = monthly_payment(principal, annual_rate_pct, years) if payment is None else payment

    balance = round(principal, 2)
    if payment is None and pmt < 0.01:
        # Instalment rounds to nothing; settle the whole balance in one row
        pmt = round(balance + round(balance * r, 2), 2)
    if pmt <= 0 or round(pmt - round(balance * r, 2), 2) < 0.01:
        logger.warning("Payment %.2f does not cover interest on %.2f at %.3f%%", pmt, balance, annual_rate_pct)
        return []

    rows = []
    cum_interest = cum_principal = 0.0
    month = 0
    while balance > 0:
        month += 1
        interest = round(balance * r, 2)
        principal_paid = round(pmt - interest, 2)
        if principal_paid >= balance or (payment is None and month >= term):
            principal_paid = balance
            paid = round(balance + interest, 2)
            balance = 0.0
        else:
            paid = pmt
            balance = round(balance - principal_paid, 2)

        cum_interest += interest
        cum_principal += principal_paid
        row = {
            "month": month,
            "payment": paid,
            "principal": principal_paid,
            "interest": interest,
            "remaining_balance": balance,
            "cumulative_interest": round(cum_interest, 2),
            "cumulative_principal": round(cum_principal, 2),
        }
        if start is not None:
            total = start.month - 1 + month
            row["date"] = f"{MONTH_NAMES[total % 12]} {start.year + total // 12}"
        rows.append(row)
    return rows


def remaining_term(balance: float, payment: float, annual_rate_pct: float) -> dict:
    """Months left at this payment; ``math.inf`` when the payment never beats the interest."""
    if balance <= 0:
        return {"months": 0, "years": 0.0, "formatted_duration": format_months(0)}

    r = _monthly_rate(annual_rate_pct)
    if payment <= 0 or payment <= balance * r:
        return {"months": math.inf, "years": math.inf, "formatted_duration": format_months(math.inf)}

    if r == 0:
        months = math.ceil(balance / payment)
    else:
        months = math.ceil(-math.log(1 - r * balance / payment) / math.log(1 + r))
    return {
        "months": months,
        "years": round(months / 12, 2),
        "formatted_duration": format_months(months),
    }


def total_interest(principal: float, annual_rate_pct: float, years: float) -> dict:
    pmt = monthly_payment(principal, annual_rate_pct, years)
    total_paid = pmt * years * 12
    interest = total_paid - principal
    return {
        "total_interest": round(interest, 2),
        "total_payment": round(total_paid, 2),
        "interest_ratio": round(interest / principal * 100, 2) if principal > 0 else 0.0,
        "monthly_payment": round(pmt, 2),
    }


def _interest_until_paid(balance, payment, annual_rate_pct, months):
    if months == math.inf:
        return math.inf
    paid = 0.0
    for _ in range(months):
        if balance <= 0:
            break
        step = payment_breakdown(balance, payment, annual_rate_pct)
        paid += step["interest_payment"]
        balance = step["new_balance"]
    return paid


def early_payoff(balance: float, payment: float, annual_rate_pct: float, extra_payment: float) -> dict:
    """Compare paying ``payment`` against ``payment + extra_payment`` every month."""
    current = remaining_term(balance, payment, annual_rate_pct)
    current_interest = _interest_until_paid(balance, payment, annual_rate_pct, current["months"])

    faster_payment = payment + extra_payment
    faster = remaining_term(balance, faster_payment, annual_rate_pct)
    faster_interest = _interest_until_paid(balance, faster_payment, annual_rate_pct, faster["months"])

    if current["months"] == math.inf:
        # Any payment that clears the loan beats one that never does
        if faster["months"] == math.inf:
            interest_saved = 0.0
            months_saved = 0
        else:
            interest_saved = months_saved = math.inf
    else:
        interest_saved = current_interest - faster_interest
        months_saved = current["months"] - faster["months"]

    return {
        "current": {
            "months": current["months"],
            "years": current["years"],
            "total_interest": round(current_interest, 2) if current_interest != math.inf else math.inf,
            "duration": current["formatted_duration"],
        },
        "accelerated": {
            "months": faster["months"],
            "years": faster["years"],
            "total_interest": round(faster_interest, 2) if faster_interest != math.inf else math.inf,
            "duration": faster["formatted_duration"],
            "monthly_payment": faster_payment,
        },
        "savings": {
            "interest_saved": round(interest_saved, 2) if interest_saved != math.inf else math.inf,
            "time_saved_months": months_saved,
            "time_saved_years": round(months_saved / 12, 2) if months_saved != math.inf else math.inf,
        },
    }


def refinancing(balance: float, current_rate_pct: float, remaining_years: float,
                new_rate_pct: float, refinancing_costs: float = 0.0) -> dict:
    cur_pmt = monthly_payment(balance, current_rate_pct, remaining_years)
    cur_total = total_interest(balance, current_rate_pct, remaining_years)
    new_pmt = monthly_payment(balance, new_rate_pct, remaining_years)
    new_total = total_interest(balance, new_rate_pct, remaining_years)
    new_total_with_costs = new_total["total_payment"] + refinancing_costs

    monthly_savings = cur_pmt - new_pmt
    total_savings = cur_total["total_payment"] - new_total_with_costs
    if refinancing_costs <= 0:
        break_even = 0
    elif monthly_savings > 0:
        break_even = math.ceil(refinancing_costs / monthly_savings)
    else:
        break_even = math.inf

    return {
        "current_loan": {
            "monthly_payment": cur_pmt,
            "total_payment": cur_total["total_payment"],
            "total_interest": cur_total["total_interest"],
        },
        "refinanced_loan": {
            "monthly_payment": new_pmt,
            "total_payment": new_total_with_costs,
            "total_interest": new_total["total_interest"],
            "refinancing_costs": refinancing_costs,
        },
        "savings": {
            "monthly_savings": round(monthly_savings, 2),
            "total_savings": round(total_savings, 2),
            "break_even_months": break_even,
            "worth_refinancing": total_savings > 0 and break_even <= remaining_years * 12,
        },
    }


def affordability(monthly_income: float, annual_rate_pct: float, years: float, dsr_pct: float = 40.0) -> dict:
    """Largest loan whose instalment stays within ``dsr_pct`` of monthly income."""
    max_payment = monthly_income * dsr_pct / 100
    r = _monthly_rate(annual_rate_pct)
    n = years * 12
    if n <= 0:
        max_loan = 0.0
    elif r == 0:
        max_loan = max_payment * n
    else:
        growth = (1 + r) ** n
        max_loan = max_payment * (growth - 1) / (r * growth)
    return {
        "max_loan_amount": round(max_loan, 2),
        "max_monthly_payment": round(max_payment, 2),
        "debt_service_ratio": dsr_pct,
        "monthly_income": monthly_income,
    }


def loan_to_value(property_value: float, loan_amount: float, down_payment=None) -> dict:
    if down_payment is None:
        down_payment = property_value - loan_amount
    if property_value <= 0:
        ltv = dp_ratio = 0.0
    else:
        ltv = loan_amount / property_value * 100
        dp_ratio = down_payment / property_value * 100
    return {
        "ltv_ratio": round(ltv, 2),
        "down_payment_ratio": round(dp_ratio, 2),
        "loan_amount": loan_amount,
        "down_payment": down_payment,
        "property_value": property_value,
    }


def validate_loan_parameters(principal=None, annual_rate_pct=None, years=None, payment=None) -> dict:
    errors = []
    if principal is not None and principal <= 0:
        errors.append("Principal must be greater than 0")
    if annual_rate_pct is not None and annual_rate_pct < 0:
        errors.append("Interest rate cannot be negative")
    if years is not None and years <= 0:
        errors.append("Loan term must be greater than 0")
    if payment is not None and payment < 0:
        errors.append("Monthly payment cannot be negative")
    return {"is_valid": not errors, "errors": errors}
