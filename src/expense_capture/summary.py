"""Spending totals over parsed expenses."""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from .models import Category, ParsedExpense

PERIODS = ('today', 'week', 'month', 'all')


def period_start(period: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    First moment of a reporting period.

    Weeks start on Sunday. Returns None for 'all'.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period {period!r}, expected one of {', '.join(PERIODS)}")
    if period == 'all':
        return None

    now = now or datetime.now()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == 'today':
        return start_of_day
    if period == 'week':
        # weekday() is 0 for Monday; shift so Sunday is day 0
        return start_of_day - timedelta(days=(start_of_day.weekday() + 1) % 7)
    return start_of_day.replace(day=1)


def filter_by_period(expenses: Iterable[ParsedExpense],
                     period: str = 'all',
                     now: Optional[datetime] = None) -> List[ParsedExpense]:
    """Expenses that occurred within the period."""
    start = period_start(period, now)
    if start is None:
        return list(expenses)
    return [expense for expense in expenses if expense.occurred_at >= start]


def total_by_period(expenses: Iterable[ParsedExpense],
                    period: str = 'all',
                    now: Optional[datetime] = None) -> float:
    return sum(expense.amount for expense in filter_by_period(expenses, period, now))


def totals_by_category(expenses: Iterable[ParsedExpense],
                       period: str = 'all',
                       now: Optional[datetime] = None) -> Dict[Category, float]:
    """Spending per category, in category order, omitting empty categories."""
    totals = {}
    for expense in filter_by_period(expenses, period, now):
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return {category: totals[category] for category in Category if category in totals}


def format_currency(amount: float) -> str:
    """Render an amount as US dollars, e.g. $1,234.50."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
