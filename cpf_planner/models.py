from dataclasses import asdict, dataclass, field
from typing import List, Optional

import pandas as pd

from .contributions import EmployeeCategory
from .rates import SAVINGS_GOAL_DEFAULT


# ==============================
# Snapshot
# ==============================
@dataclass(frozen=True)
class MonthYear:
    month: int
    year: int


@dataclass
class PersonalInfo:
    birthday: MonthYear
    projection_start: MonthYear
    current_savings: float = 0.0
    current_cpf_balance: float = 0.0
    remaining_loan: float = 0.0
    monthly_repayment: float = 0.0
    interest_rate: float = 0.0   # annual %


@dataclass
class SalaryAdjustment:
    month: int
    year: int
    new_salary: float


@dataclass
class Income:
    current_salary: float
    employee_category: EmployeeCategory = EmployeeCategory.CITIZEN
    # Flat employee/employer % of the full salary; used only when both are set
    cpf_rate: Optional[float] = None
    employer_cpf_rate: Optional[float] = None
    salary_adjustments: List[SalaryAdjustment] = field(default_factory=list)


@dataclass
class ExpenseItem:
    name: str
    amount: float


@dataclass
class YearlyExpense:
    name: str
    amount: float
    month: int
    start_year: int
    end_year: Optional[int] = None

    def is_active(self, month: int, year: int) -> bool:
        if month != self.month or year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year


@dataclass
class Expenses:
    monthly: List[ExpenseItem] = field(default_factory=list)
    yearly: List[YearlyExpense] = field(default_factory=list)

    @property
    def monthly_total(self) -> float:
        return sum(e.amount for e in self.monthly)


@dataclass
class YearlyBonus:
    month: int
    year: int
    amount: float
    description: str = "Bonus"


@dataclass
class FinancialSnapshot:
    personal_info: PersonalInfo
    income: Income
    expenses: Expenses = field(default_factory=Expenses)
    yearly_bonuses: List[YearlyBonus] = field(default_factory=list)


@dataclass
class ProjectionSettings:
    # Annual percentages
    annual_salary_increase: float = 3.0
    annual_expense_increase: float = 2.0
    annual_investment_return: float = 4.0
    annual_cpf_interest_rate: float = 2.5
    projection_years: int = 30
    bonus_months: float = 2
    bonus_amount: Optional[float] = None   # None or 0: one month of the then-current salary
    savings_goal: float = SAVINGS_GOAL_DEFAULT


# ==============================
# Projection output
# ==============================
@dataclass(frozen=True)
class MonthlyProjectionPoint:
    month: int
    date: str
    age: str
    monthly_salary: float
    take_home_pay: float
    expenses: float
    loan_payment: float
    loan_remaining: float
    monthly_savings: float
    bonus_amount: float
    bonus_description: Optional[str]
    cpf_contribution: float
    employer_cpf_contribution: float
    total_cpf_contribution: float
    cpf_balance: float
    cash_savings: float
    total_net_worth: float
    milestone: Optional[str]
    year: int
    calendar_month: int
    age_years: int
    investment_return: float
    cpf_interest: float
    loan_interest: float
    yearly_expense_amount: float


@dataclass
class ProjectionResult:
    points: List[MonthlyProjectionPoint] = field(default_factory=list)
    loan_paid_off: Optional[MonthlyProjectionPoint] = None
    savings_goal_reached: Optional[MonthlyProjectionPoint] = None

    def __len__(self):
        return len(self.points)

    @property
    def time_to_savings_goal(self) -> Optional[int]:
        """Months from the start until the savings goal, or None if not reached."""
        return self.savings_goal_reached.month if self.savings_goal_reached else None

    @property
    def time_to_loan_payoff(self) -> Optional[int]:
        return self.loan_paid_off.month if self.loan_paid_off else None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(p) for p in self.points])

    def yearly_summary(self) -> pd.DataFrame:
        """Roll the monthly rows up to one row per calendar year."""
        df = self.to_dataframe()
        if df.empty:
            return df
        return df.groupby("year", as_index=False).agg(
            salary=("monthly_salary", "sum"),
            take_home_pay=("take_home_pay", "sum"),
            bonus=("bonus_amount", "sum"),
            expenses=("expenses", "sum"),
            loan_payments=("loan_payment", "sum"),
            savings=("monthly_savings", "sum"),
            cpf_contributions=("total_cpf_contribution", "sum"),
            investment_return=("investment_return", "sum"),
            cpf_interest=("cpf_interest", "sum"),
            end_cash=("cash_savings", "last"),
            end_cpf=("cpf_balance", "last"),
            end_loan=("loan_remaining", "last"),
            end_net_worth=("total_net_worth", "last"),
        )


# ==============================
# CPF allocation output
# ==============================
@dataclass(frozen=True)
class MediSaveStatus:
    contributed: float
    ceiling: float
    remaining_room: float
    exceeded_ceiling: bool
    exceeded_bhs: bool


@dataclass(frozen=True)
class CpfAllocation:
    oa: float
    sa: float
    ma: float
    ra: float
    total: float
    age_bracket: str
    medisave_status: MediSaveStatus
