import logging

import pandas as pd

from .brackets import age_bracket_for_allocation
from .models import CpfAllocation, MediSaveStatus
from .rates import (
    ALLOCATION_RATES,
    BASE_INT,
    BASIC_HEALTHCARE_SUM,
    BASIC_RETIREMENT_SUM,
    ENHANCED_RETIREMENT_SUM,
    EXTRA_INTEREST_PRIORITY,
    EXTRA_INTEREST_TIERS,
    FULL_RETIREMENT_SUM,
    MEDISAVE_CONTRIBUTION_CEILING,
)

logger = logging.getLogger(__name__)

ACCOUNTS = ("OA", "SA", "MA", "RA")


def _cents(x) -> int:
    return int(round(x * 100))


# ==============================
# Contribution allocation
# ==============================
def allocate(total_contribution: float, age, medisave_balance: float = 0.0,
             ytd_medisave: float = 0.0, bhs: float = BASIC_HEALTHCARE_SUM) -> CpfAllocation:
    """Split one month's total contribution into OA/SA/MA.

    MA is capped first by the annual MediSave contribution ceiling (less what
    was already contributed this year), then by the room left under the Basic
    Healthcare Sum. Below 55 the excess goes back to SA and OA in the bracket's
    SA:OA ratio; from 55 it all goes to SA and is reported as ``ra``.
    """
    bracket = age_bracket_for_allocation(age)
    rates = ALLOCATION_RATES[bracket.value]
    ceiling = MEDISAVE_CONTRIBUTION_CEILING[bracket.value]

    oa = total_contribution * rates["OA"]
    sa = total_contribution * rates["SA"]
    ma_raw = total_contribution * rates["MA"]

    room = max(0.0, ceiling - ytd_medisave)
    ma = min(ma_raw, room)
    excess_ceiling = ma_raw - ma

    excess_bhs = 0.0
    if medisave_balance >= bhs:
        excess_bhs = ma
        ma = 0.0
    elif medisave_balance + ma > bhs:
        excess_bhs = medisave_balance + ma - bhs
        ma -= excess_bhs

    excess = excess_ceiling + excess_bhs
    if excess > 0:
        logger.debug("MA capped at age %s: %.2f over ceiling, %.2f over BHS redirected",
                     age, excess_ceiling, excess_bhs)
    ra = 0.0
    if age < 55:
        sa_ratio = rates["SA"] / (rates["SA"] + rates["OA"])
        sa += excess * sa_ratio
        oa += excess * (1 - sa_ratio)
    else:
        sa += excess
        ra = excess

    # OA takes whatever rounding leaves over so the parts add up to the total
    total_c = _cents(total_contribution)
    sa_c = _cents(sa)
    ma_c = _cents(ma)
    oa_c = total_c - sa_c - ma_c
    if oa_c < 0:
        sa_c += oa_c
        oa_c = 0
    ra_c = min(_cents(ra), sa_c)

    return CpfAllocation(
        oa=oa_c / 100,
        sa=sa_c / 100,
        ma=ma_c / 100,
        ra=ra_c / 100,
        total=total_contribution,
        age_bracket=bracket.value,
        medisave_status=MediSaveStatus(
            contributed=ma_c / 100,
            ceiling=ceiling,
            remaining_room=round(room, 2),
            exceeded_ceiling=excess_ceiling > 0,
            exceeded_bhs=excess_bhs > 0,
        ),
    )


# ==============================
# Interest
# ==============================
def tiered_interest(balances: dict, age, months: int = 1) -> dict:
    """Base plus extra interest on the combined balance.

    The first 30k earns +2% from age 55 (+1% before), the next 30k earns +1%.
    Accounts fill the tiers in the order SA, MA, RA, OA.
    """
    t1_left = EXTRA_INTEREST_TIERS["tier1_amount"]
    t2_left = EXTRA_INTEREST_TIERS["tier2_amount"]
    eligible = age >= 55
    t1_rate = EXTRA_INTEREST_TIERS["tier1_rate_55_plus" if eligible else "tier1_rate_below_55"]
    t2_rate = EXTRA_INTEREST_TIERS["tier2_rate"]
    period = months / 12

    out = {}
    total = 0.0
    for acct in EXTRA_INTEREST_PRIORITY:
        bal = max(0.0, float(balances.get(acct, 0.0) or 0.0))
        base = BASE_INT[acct]

        t1 = min(bal, t1_left); t1_left -= t1
        t2 = min(bal - t1, t2_left); t2_left -= t2
        regular = bal - t1 - t2

        i1 = t1 * (base + t1_rate) * period
        i2 = t2 * (base + t2_rate) * period
        ir = regular * base * period
        interest = i1 + i2 + ir
        total += interest

        eff = interest / bal / period if bal > 0 and months > 0 else 0.0
        out[acct] = {
            "interest": round(interest, 2),
            "effective_rate": round(eff, 4),
            "breakdown": {"tier1": i1, "tier2": i2, "regular": ir},
        }

    tier1_total = EXTRA_INTEREST_TIERS["tier1_amount"]
    tier2_total = EXTRA_INTEREST_TIERS["tier2_amount"]
    out.update({
        "total_interest": round(total, 2),
        "months": months,
        "extra_interest_eligible": eligible,
        "tier1_applied": tier1_total - t1_left,
        "tier2_applied": tier2_total - t2_left,
    })
    return out


def simple_cpf_growth(balance: float, monthly_rate: float, contribution: float) -> float:
    """One month of flat-rate growth on a single CPF balance, then the contribution."""
    return balance * (1 + monthly_rate) + contribution


def tiered_cpf_growth(initial_balances: dict, age, monthly_contribution: float, months: int) -> pd.DataFrame:
    """Per-account CPF projection: allocate each month, then credit tiered interest.

    Age goes up every 12 months and the year-to-date MediSave counter resets with it.
    """
    bal = {a: float(initial_balances.get(a, 0.0) or 0.0) for a in ACCOUNTS}
    cur_age = age
    ytd_ma = 0.0
    rows = []
    for m in range(1, months + 1):
        if m > 1 and m % 12 == 1:
            cur_age += 1
            ytd_ma = 0.0

        alloc = allocate(monthly_contribution, cur_age, bal["MA"], ytd_ma)
        ytd_ma += alloc.ma
        bal["OA"] += alloc.oa
        bal["SA"] += alloc.sa
        bal["MA"] += alloc.ma

        interest = tiered_interest(bal, cur_age, 1)
        for a in ACCOUNTS:
            bal[a] += interest[a]["interest"]

        rows.append({
            "Month": m,
            "Age": cur_age,
            "OA": round(bal["OA"], 2),
            "SA": round(bal["SA"], 2),
            "MA": round(bal["MA"], 2),
            "RA": round(bal["RA"], 2),
            "Total": round(sum(bal.values()), 2),
            "Alloc_OA": alloc.oa,
            "Alloc_SA": alloc.sa,
            "Alloc_MA": alloc.ma,
            "Interest": interest["total_interest"],
        })
    return pd.DataFrame(rows)


def retirement_adequacy(balances: dict, age, target_age: int = 65) -> dict:
    total = sum(float(balances.get(a, 0.0) or 0.0) for a in ACCOUNTS)
    years_left = max(0, target_age - age)

    if total >= ENHANCED_RETIREMENT_SUM:
        level = "Enhanced Retirement Sum"
    elif total >= FULL_RETIREMENT_SUM:
        level = "Full Retirement Sum"
    elif total >= BASIC_RETIREMENT_SUM:
        level = "Basic Retirement Sum"
    else:
        level = "Below Basic"

    return {
        "current_total": round(total, 2),
        "basic_retirement_sum": BASIC_RETIREMENT_SUM,
        "full_retirement_sum": FULL_RETIREMENT_SUM,
        "enhanced_retirement_sum": ENHANCED_RETIREMENT_SUM,
        "adequacy_ratio": round(total / FULL_RETIREMENT_SUM * 100, 2),
        "shortfall": max(0.0, FULL_RETIREMENT_SUM - total),
        "retirement_level": level,
        "years_to_retirement": years_left,
        "on_track": total >= BASIC_RETIREMENT_SUM or years_left > 10,
    }
