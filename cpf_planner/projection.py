import logging
from datetime import date

from .allocation import simple_cpf_growth
from .brackets import age_at, age_label, calendar_month
from .contributions import calculate_cpf_contributions
from .loans import payment_breakdown
from .models import MonthlyProjectionPoint, ProjectionResult
from .rates import BONUS_MONTH_ORDER, MONTH_NAMES

logger = logging.getLogger(__name__)

LOAN_PAID_OFF = "Loan Paid Off"
SAVINGS_GOAL_REACHED = "Savings Goal Reached"


def monthly_rate(annual_pct: float) -> float:
    """Monthly equivalent of an annual % rate, compounded."""
    return (1 + annual_pct / 100) ** (1 / 12) - 1


def _bonus_for_month(snapshot, settings, month: int, year: int, salary: float):
    explicit = [b for b in snapshot.yearly_bonuses if b.month == month and b.year == year]
    if explicit:
        amount = sum(b.amount for b in explicit)
        if amount > 0:
            return amount, ", ".join(b.description for b in explicit)

    if settings.bonus_months > 0:
        n_months = max(1, int(settings.bonus_months))
        if month in BONUS_MONTH_ORDER[:n_months]:
            amount = settings.bonus_amount or salary
            if amount > 0:
                return amount, "Year-end Bonus" if month == 12 else "Bonus"
    return 0.0, None


def _cpf_for_month(income, salary: float, age: int):
    if income.cpf_rate is not None and income.employer_cpf_rate is not None:
        employee = round(salary * income.cpf_rate / 100, 2)
        employer = round(salary * income.employer_cpf_rate / 100, 2)
        return employee, employer
    cpf = calculate_cpf_contributions(salary, income.employee_category, age)
    return cpf["employee_contribution"], cpf["employer_contribution"]


def project(snapshot, settings) -> ProjectionResult:
    """Month-by-month cash, CPF and loan projection over ``settings.projection_years``."""
    total_months = int(settings.projection_years) * 12
    if total_months < 12:
        logger.warning("Projection horizon of %s years is empty", settings.projection_years)
        return ProjectionResult()

    info = snapshot.personal_info
    income = snapshot.income
    start = info.projection_start

    r_salary = monthly_rate(settings.annual_salary_increase)
    r_expense = monthly_rate(settings.annual_expense_increase)
    r_invest = monthly_rate(settings.annual_investment_return)
    r_cpf = monthly_rate(settings.annual_cpf_interest_rate)

    salary = float(income.current_salary)
    base_expenses = float(snapshot.expenses.monthly_total)
    cash = float(info.current_savings)
    cpf = float(info.current_cpf_balance)
    loan = float(info.remaining_loan)

    logger.debug(
        "Projecting %d months from %02d/%d: salary=%.2f cash=%.2f cpf=%.2f loan=%.2f",
        total_months, start.month, start.year, salary, cash, cpf, loan,
    )

    result = ProjectionResult()
    for i in range(total_months):
        month, year = calendar_month(start.month, start.year, i)
        age = age_at(info.birthday, year, month)

        for adj in income.salary_adjustments:
            if adj.month == month and adj.year == year:
                salary = float(adj.new_salary)

        bonus, bonus_desc = _bonus_for_month(snapshot, settings, month, year, salary)

        employee_cpf, employer_cpf = _cpf_for_month(income, salary, age)
        take_home = salary + bonus - employee_cpf

        # Loan
        loan_interest = 0.0
        loan_payment = 0.0
        paid_off_now = False
        if loan > 0:
            step = payment_breakdown(loan, info.monthly_repayment, info.interest_rate)
            loan_interest = step["interest_payment"]
            loan_payment = min(info.monthly_repayment, round(loan + loan_interest, 2))
            loan = step["new_balance"]
            paid_off_now = loan == 0

        yearly_expense = sum(e.amount for e in snapshot.expenses.yearly if e.is_active(month, year))
        expenses = base_expenses + yearly_expense
        savings = take_home - expenses - loan_payment

        investment_return = cash * r_invest
        cash = cash + investment_return + savings
        cpf_interest = cpf * r_cpf
        cpf = simple_cpf_growth(cpf, r_cpf, employee_cpf + employer_cpf)

        milestone = None
        if paid_off_now and result.loan_paid_off is None:
            milestone = LOAN_PAID_OFF
        elif cash >= settings.savings_goal and result.savings_goal_reached is None:
            milestone = SAVINGS_GOAL_REACHED
        elif bonus_desc:
            milestone = bonus_desc

        point = MonthlyProjectionPoint(
            month=i + 1,
            date=f"{MONTH_NAMES[month - 1]} {year}",
            age=age_label(info.birthday, year, month),
            monthly_salary=salary,
            take_home_pay=take_home,
            expenses=expenses,
            loan_payment=loan_payment,
            loan_remaining=loan,
            monthly_savings=savings,
            bonus_amount=bonus,
            bonus_description=bonus_desc,
            cpf_contribution=employee_cpf,
            employer_cpf_contribution=employer_cpf,
            total_cpf_contribution=employee_cpf + employer_cpf,
            cpf_balance=cpf,
            cash_savings=cash,
            total_net_worth=cash + cpf - loan,
            milestone=milestone,
            year=year,
            calendar_month=month,
            age_years=age,
            investment_return=investment_return,
            cpf_interest=cpf_interest,
            loan_interest=loan_interest,
            yearly_expense_amount=yearly_expense,
        )
        result.points.append(point)

        if paid_off_now and result.loan_paid_off is None:
            result.loan_paid_off = point
        if cash >= settings.savings_goal and result.savings_goal_reached is None:
            result.savings_goal_reached = point

        salary *= 1 + r_salary
        base_expenses *= 1 + r_expense

    logger.debug(
        "Projection done: cash=%.2f cpf=%.2f loan=%.2f loan_paid_off=%s savings_goal=%s",
        cash, cpf, loan, result.time_to_loan_payoff, result.time_to_savings_goal,
    )
    return result


def time_to_milestone(result: ProjectionResult, milestone: str):
    """Months from the start until the first point tagged ``milestone``, or None."""
    if milestone == LOAN_PAID_OFF:
        return result.time_to_loan_payoff
    if milestone == SAVINGS_GOAL_REACHED:
        return result.time_to_savings_goal
    for p in result.points:
        if p.milestone == milestone:
            return p.month
    return None


def upcoming_events(snapshot, months_ahead: int = 3, today=None) -> list:
    """Salary adjustments and explicit bonuses in the next ``months_ahead`` months, this one included."""
    today = today or date.today()
    window = {calendar_month(today.month, today.year, i) for i in range(months_ahead)}

    events = []
    for adj in snapshot.income.salary_adjustments:
        if (adj.month, adj.year) in window:
            events.append({
                "type": "Salary Adjustment",
                "date": f"{MONTH_NAMES[adj.month - 1]} {adj.year}",
                "amount": adj.new_salary,
                "description": f"Salary changes to {adj.new_salary:,.2f}",
            })
    for bonus in snapshot.yearly_bonuses:
        if (bonus.month, bonus.year) in window:
            events.append({
                "type": "Bonus",
                "date": f"{MONTH_NAMES[bonus.month - 1]} {bonus.year}",
                "amount": bonus.amount,
                "description": bonus.description,
            })
    return events
