from .adapters import settings_from_dict, snapshot_from_dict
from .allocation import allocate, retirement_adequacy, simple_cpf_growth, tiered_cpf_growth, tiered_interest
from .brackets import (
    AllocationBracket,
    ContributionBracket,
    age_at,
    age_bracket_for_allocation,
    age_bracket_for_contribution,
    bracket_crossing,
)
from .contributions import EmployeeCategory, calculate_cpf_contributions, get_cpf_rates
from .errors import InvalidCategoryError, PlannerError
from .loans import amortization_schedule, monthly_payment, payment_breakdown, remaining_term
from .models import (
    CpfAllocation,
    ExpenseItem,
    Expenses,
    FinancialSnapshot,
    Income,
    MonthlyProjectionPoint,
    MonthYear,
    PersonalInfo,
    ProjectionResult,
    ProjectionSettings,
    SalaryAdjustment,
    YearlyBonus,
    YearlyExpense,
)
from .projection import project

__version__ = "0.1.0"
