from enum import Enum

from .brackets import age_bracket_for_contribution
from .errors import InvalidCategoryError
from .rates import (
    ANNUAL_TW_CEILING,
    CITIZEN_RATES,
    OW_CEILING,
    PR_FIRST_YEAR_RATES,
    PR_SECOND_YEAR_RATES,
    PR_THIRD_YEAR_ONWARDS_RATES,
)


class EmployeeCategory(str, Enum):
    CITIZEN = "singaporean"
    PR_FIRST_YEAR = "pr_first_year"
    PR_SECOND_YEAR = "pr_second_year"
    PR_THIRD_YEAR_ONWARDS = "pr_third_year_onwards"


RATE_TABLES = {
    EmployeeCategory.CITIZEN: CITIZEN_RATES,
    EmployeeCategory.PR_FIRST_YEAR: PR_FIRST_YEAR_RATES,
    EmployeeCategory.PR_SECOND_YEAR: PR_SECOND_YEAR_RATES,
    EmployeeCategory.PR_THIRD_YEAR_ONWARDS: PR_THIRD_YEAR_ONWARDS_RATES,
}


def to_category(category) -> EmployeeCategory:
    if isinstance(category, EmployeeCategory):
        return category
    try:
        return EmployeeCategory(category)
    except ValueError:
        raise InvalidCategoryError(category) from None


def get_cpf_rates(category, age):
    """(employee_rate, employer_rate) for the category at this age."""
    table = RATE_TABLES[to_category(category)]
    return table[age_bracket_for_contribution(age).value]


def calculate_cpf_contributions(
    salary: float,
    category=EmployeeCategory.CITIZEN,
    age: int = 30,
    additional_wage: float = 0.0,
    ytd_ordinary_wage: float = 0.0,
) -> dict:
    employee_rate, employer_rate = get_cpf_rates(category, age)

    capped_salary = min(salary, OW_CEILING)
    employee = round(capped_salary * employee_rate, 2)
    employer = round(capped_salary * employer_rate, 2)

    aw_employee = aw_employer = 0.0
    aw_subject = 0.0
    if additional_wage > 0:
        ow_used = ytd_ordinary_wage or capped_salary * 12
        aw_ceiling_rem = max(0.0, ANNUAL_TW_CEILING - ow_used)
        aw_subject = min(additional_wage, aw_ceiling_rem)
        aw_employee = round(aw_subject * employee_rate, 2)
        aw_employer = round(aw_subject * employer_rate, 2)

    employee_total = employee + aw_employee
    employer_total = employer + aw_employer
    return {
        "employee_contribution": employee_total,
        "employer_contribution": employer_total,
        "total_contribution": employee_total + employer_total,
        "take_home_pay": salary + additional_wage - employee_total,
        "ow_subject": capped_salary,
        "aw_subject": aw_subject,
        "rates": {"employee_rate": employee_rate, "employer_rate": employer_rate},
    }


def estimate_yearly_cpf_contributions(
    monthly_salary: float,
    category=EmployeeCategory.CITIZEN,
    age: int = 30,
    bonus_months: float = 0.0,
) -> dict:
    """Twelve months of OW contributions plus one AW payment of ``bonus_months`` salaries."""
    monthly = calculate_cpf_contributions(monthly_salary, category, age)

    bonus = {"employee_contribution": 0.0, "employer_contribution": 0.0, "total_contribution": 0.0}
    if bonus_months > 0:
        bonus = calculate_cpf_contributions(
            0.0,
            category,
            age,
            additional_wage=monthly_salary * bonus_months,
            ytd_ordinary_wage=min(monthly_salary, OW_CEILING) * 12,
        )

    yearly_employee = monthly["employee_contribution"] * 12 + bonus["employee_contribution"]
    yearly_employer = monthly["employer_contribution"] * 12 + bonus["employer_contribution"]
    return {
        "yearly_employee_contribution": yearly_employee,
        "yearly_employer_contribution": yearly_employer,
        "yearly_total_contribution": yearly_employee + yearly_employer,
        "monthly_details": monthly,
        "bonus_details": bonus,
    }
