"""Regulatory tables: CPF rates, ceilings, retirement sums, interest tiers and tax brackets.

Figures follow CPF Board / IRAS publications for 2025 unless noted.
"""

# ==============================
# CPF contribution rates
# (employee_rate, employer_rate) keyed by contribution age bracket value
# ==============================
CITIZEN_RATES = {
    "55_and_below": (0.20, 0.17),
    "55_to_60": (0.15, 0.15),
    "60_to_65": (0.105, 0.095),
    "65_to_70": (0.075, 0.075),
    "above_70": (0.05, 0.05),
}

PR_FIRST_YEAR_RATES = {
    "55_and_below": (0.05, 0.15),
    "55_to_60": (0.05, 0.15),
    "60_to_65": (0.05, 0.085),
    "65_to_70": (0.05, 0.065),
    "above_70": (0.05, 0.045),
}

PR_SECOND_YEAR_RATES = {
    "55_and_below": (0.15, 0.15),
    "55_to_60": (0.15, 0.15),
    "60_to_65": (0.085, 0.085),
    "65_to_70": (0.06, 0.065),
    "above_70": (0.05, 0.045),
}

PR_THIRD_YEAR_ONWARDS_RATES = {
    "55_and_below": (0.20, 0.17),
    "55_to_60": (0.15, 0.15),
    "60_to_65": (0.095, 0.095),
    "65_to_70": (0.075, 0.075),
    "above_70": (0.05, 0.05),
}

OW_CEILING = 6000.0            # Ordinary Wage ceiling, per month
ANNUAL_TW_CEILING = 102000.0   # Additional Wage ceiling, OW + AW per year

# ==============================
# Allocation (share of the total contribution, sums to 1 per bracket)
# ==============================
ALLOCATION_RATES = {
    "35_and_below": {"OA": 0.6216, "SA": 0.1622, "MA": 0.2162},  # 23/6/8 of 37
    "35_to_45":     {"OA": 0.5676, "SA": 0.1622, "MA": 0.2703},
    "45_to_50":     {"OA": 0.5135, "SA": 0.1622, "MA": 0.3243},
    "50_to_55":     {"OA": 0.4054, "SA": 0.2162, "MA": 0.3784},
    "55_to_60":     {"OA": 0.4,    "SA": 0.1167, "MA": 0.4833},
    "60_to_65":     {"OA": 0.3,    "SA": 0.175,  "MA": 0.525},
    "65_to_70":     {"OA": 0.2667, "SA": 0.2333, "MA": 0.5},
    "above_70":     {"OA": 0.4,    "SA": 0.1,    "MA": 0.5},
}

# Annual MediSave contribution ceiling by allocation bracket
MEDISAVE_CONTRIBUTION_CEILING = {
    "35_and_below": 8280.0,
    "35_to_45": 10890.0,
    "45_to_50": 13080.0,
    "50_to_55": 15240.0,
    "55_to_60": 15240.0,
    "60_to_65": 11070.0,
    "65_to_70": 7920.0,
    "above_70": 5280.0,
}

BASIC_HEALTHCARE_SUM = 75500.0

# ==============================
# Retirement sums (cohort turning 55 in 2025)
# ==============================
FULL_RETIREMENT_SUM = 213000.0
BASIC_RETIREMENT_SUM = FULL_RETIREMENT_SUM / 2
ENHANCED_RETIREMENT_SUM = FULL_RETIREMENT_SUM * 1.5

# ==============================
# Interest
# ==============================
BASE_INT = {"OA": 0.025, "SA": 0.04, "MA": 0.04, "RA": 0.04}

EXTRA_INTEREST_TIERS = {
    "tier1_amount": 30000.0,
    "tier2_amount": 30000.0,
    "tier1_rate_below_55": 0.01,
    "tier1_rate_55_plus": 0.02,
    "tier2_rate": 0.01,
}

# Accounts fill the extra-interest tiers in this order
EXTRA_INTEREST_PRIORITY = ("SA", "MA", "RA", "OA")

# ==============================
# Projection defaults
# ==============================
# Traditional bonus months, in the order they become eligible as bonus_months grows
BONUS_MONTH_ORDER = (12, 2, 6, 9)

SAVINGS_GOAL_DEFAULT = 100000.0

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# ==============================
# Housing rules of thumb
# ==============================
TDSR_LIMIT_PCT = 55.0
MSR_LIMIT_PCT = 30.0
CPF_OA_SHARE_ESTIMATE = 0.6   # share of a single CPF balance assumed to sit in OA

# ==============================
# Personal income tax, YA 2025 (resident)
# ==============================
TAX_BRACKETS = [
    {"min": 0.0,         "max": 20000.0,      "rate": 0.0},
    {"min": 20000.0,     "max": 30000.0,      "rate": 0.02},
    {"min": 30000.0,     "max": 40000.0,      "rate": 0.035},
    {"min": 40000.0,     "max": 80000.0,      "rate": 0.07},
    {"min": 80000.0,     "max": 120000.0,     "rate": 0.115},
    {"min": 120000.0,    "max": 160000.0,     "rate": 0.15},
    {"min": 160000.0,    "max": 200000.0,     "rate": 0.18},
    {"min": 200000.0,    "max": 240000.0,     "rate": 0.19},
    {"min": 240000.0,    "max": 280000.0,     "rate": 0.195},
    {"min": 280000.0,    "max": 320000.0,     "rate": 0.20},
    {"min": 320000.0,    "max": 500000.0,     "rate": 0.22},
    {"min": 500000.0,    "max": 1000000.0,    "rate": 0.23},
    {"min": 1000000.0,   "max": float("inf"), "rate": 0.24},
]

TAX_RELIEF_CAPS = {
    "earned_income": 1000.0,
    "cpf": 37740.0,
    "spouse": 2000.0,
    "handicapped_spouse": 5500.0,
    "qualifying_child": 4000.0,
    "handicapped_child": 7500.0,
    "parent": 9000.0,
    "handicapped_parent": 14000.0,
    "grandparent_caregiver": 3000.0,
    "nsman_self": 3000.0,
    "nsman_wife": 750.0,
    "life_insurance": 5000.0,
    "course_fees": 5500.0,
    "supplementary_retirement": 15300.0,
    "foreign_domestic_worker": 9600.0,
}

DONATION_DEDUCTION_MULTIPLIER = 2.5
NON_RESIDENT_FLAT_RATE = 0.15

# ==============================
# Inflation (Singapore, 2020-2025 averages)
# ==============================
SINGAPORE_INFLATION_RATES = {
    "overall": 0.023,
    "housing": 0.028,
    "healthcare": 0.032,
    "education": 0.035,
    "transport": 0.025,
    "food": 0.030,
    "utilities": 0.020,
}

# ==============================
# Asset classes (long-run Singapore market assumptions, annual fractions)
# ==============================
ASSET_CLASSES = {
    "CASH":               {"name": "Cash/Savings",                     "expected_return": 0.015, "volatility": 0.0,  "liquidity": "High"},
    "SINGAPORE_BONDS":    {"name": "Singapore Government Bonds (SGS)", "expected_return": 0.03,  "volatility": 0.03, "liquidity": "High"},
    "CPF_OA":             {"name": "CPF Ordinary Account",             "expected_return": BASE_INT["OA"], "volatility": 0.0, "liquidity": "Low"},
    "CPF_SA":             {"name": "CPF Special Account",              "expected_return": BASE_INT["SA"], "volatility": 0.0, "liquidity": "Low"},
    "SINGAPORE_EQUITIES": {"name": "Singapore Stocks (STI)",           "expected_return": 0.07,  "volatility": 0.18, "liquidity": "High"},
    "GLOBAL_EQUITIES":    {"name": "Global Stocks",                    "expected_return": 0.08,  "volatility": 0.20, "liquidity": "High"},
    "SINGAPORE_REITS":    {"name": "Singapore REITs",                  "expected_return": 0.06,  "volatility": 0.15, "liquidity": "Medium"},
    "ROBO_ADVISOR":       {"name": "Robo-Advisor Portfolio",           "expected_return": 0.055, "volatility": 0.10, "liquidity": "Medium"},
}

RISK_FREE_RATE = 0.025

# Upper volatility bound of each risk level; anything above the last is "Very High"
RISK_LEVELS = ((0.05, "Very Low"), (0.10, "Low"), (0.15, "Medium"), (0.20, "High"))
