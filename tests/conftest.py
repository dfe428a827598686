import pytest

from cpf_planner.models import (
    ExpenseItem,
    Expenses,
    FinancialSnapshot,
    Income,
    MonthYear,
    PersonalInfo,
    ProjectionSettings,
)


@pytest.fixture
def snapshot():
    return FinancialSnapshot(
        personal_info=PersonalInfo(
            birthday=MonthYear(6, 1990),
            projection_start=MonthYear(1, 2025),
            current_savings=20000.0,
            current_cpf_balance=50000.0,
        ),
        income=Income(current_salary=5000.0),
        expenses=Expenses(monthly=[ExpenseItem("Living", 1500.0), ExpenseItem("Transport", 500.0)]),
    )


@pytest.fixture
def flat_settings():
    """No growth anywhere, so month-to-month figures are easy to check by hand."""
    return ProjectionSettings(
        annual_salary_increase=0.0,
        annual_expense_increase=0.0,
        annual_investment_return=0.0,
        annual_cpf_interest_rate=0.0,
        projection_years=5,
        bonus_months=0,
    )
