"""Build snapshot and settings records from the camelCase dicts the UI persists."""
import logging
import re
from dataclasses import fields
from datetime import date

from .contributions import EmployeeCategory, to_category
from .models import (
    ExpenseItem,
    Expenses,
    FinancialSnapshot,
    Income,
    MonthYear,
    PersonalInfo,
    ProjectionSettings,
    SalaryAdjustment,
    YearlyBonus,
    YearlyExpense,
)

logger = logging.getLogger(__name__)

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _num(value, default=0.0):
    """Numbers typed into a form arrive as strings or blanks; fall back to ``default``."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Could not parse %r as a number, using %r", value, default)
        return default


def _month_year(raw, fallback: MonthYear) -> MonthYear:
    if not raw:
        return fallback
    return MonthYear(month=int(_num(raw.get("month"), fallback.month)),
                     year=int(_num(raw.get("year"), fallback.year)))


def _only_fields(cls, raw: dict) -> dict:
    """snake_case the keys and keep only those ``cls`` declares."""
    names = {f.name for f in fields(cls)}
    converted = {snake(k): v for k, v in (raw or {}).items()}
    return {k: v for k, v in converted.items() if k in names}


def settings_from_dict(raw=None) -> ProjectionSettings:
    kwargs = _only_fields(ProjectionSettings, raw)
    defaults = ProjectionSettings()
    for name, value in list(kwargs.items()):
        if name == "bonus_amount":
            kwargs[name] = None if value in (None, "") else _num(value)
        elif name == "projection_years":
            kwargs[name] = int(_num(value, defaults.projection_years))
        else:
            kwargs[name] = _num(value, getattr(defaults, name))
    return ProjectionSettings(**kwargs)


def snapshot_from_dict(raw: dict, today=None) -> FinancialSnapshot:
    """``today`` fills a missing projection start; it defaults to the current date."""
    today = today or date.today()
    info = raw.get("personalInfo") or {}
    income = raw.get("income") or {}

    personal = PersonalInfo(
        birthday=_month_year(info.get("birthday"), MonthYear(1, 1990)),
        projection_start=_month_year(info.get("projectionStart"), MonthYear(today.month, today.year)),
        current_savings=_num(info.get("currentSavings")),
        current_cpf_balance=_num(info.get("currentCpfBalance")),
        remaining_loan=_num(info.get("remainingLoan")),
        monthly_repayment=_num(info.get("monthlyRepayment")),
        interest_rate=_num(info.get("interestRate")),
    )

    category = income.get("employeeType") or income.get("employeeCategory")
    cpf_rate = income.get("cpfRate")
    employer_rate = income.get("employerCpfRate")
    inc = Income(
        current_salary=_num(income.get("currentSalary")),
        employee_category=to_category(category) if category else EmployeeCategory.CITIZEN,
        cpf_rate=None if cpf_rate in (None, "") else _num(cpf_rate),
        employer_cpf_rate=None if employer_rate in (None, "") else _num(employer_rate),
        salary_adjustments=[
            SalaryAdjustment(int(_num(a.get("month"))), int(_num(a.get("year"))), _num(a.get("newSalary")))
            for a in income.get("salaryAdjustments") or []
        ],
    )

    raw_expenses = raw.get("expenses") or []
    if isinstance(raw_expenses, dict):
        monthly_raw = raw_expenses.get("monthly") or []
        yearly_raw = raw_expenses.get("yearly") or []
    else:
        monthly_raw = raw_expenses
        yearly_raw = []
    yearly_raw = list(yearly_raw) + list(raw.get("yearlyExpenses") or [])

    expenses = Expenses(
        monthly=[ExpenseItem(e.get("name", ""), _num(e.get("amount"))) for e in monthly_raw],
        yearly=[
            YearlyExpense(
                name=e.get("name", ""),
                amount=_num(e.get("amount")),
                month=int(_num(e.get("month"), 1)),
                start_year=int(_num(e.get("startYear"), personal.projection_start.year)),
                end_year=int(_num(e["endYear"])) if e.get("endYear") not in (None, "") else None,
            )
            for e in yearly_raw
        ],
    )

    bonuses = [
        YearlyBonus(
            month=int(_num(b.get("month"), 12)),
            year=int(_num(b.get("year"), personal.projection_start.year)),
            amount=_num(b.get("amount")),
            description=b.get("description") or "Bonus",
        )
        for b in raw.get("yearlyBonuses") or []
    ]

    return FinancialSnapshot(personal_info=personal, income=inc, expenses=expenses, yearly_bonuses=bonuses)
