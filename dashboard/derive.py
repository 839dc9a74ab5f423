"""
dashboard/derive.py
-------------------
Pure functions computing the dashboard's derived view from a list of
transactions, a date range and a budget. Nothing here mutates its inputs.
"""

import re
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from common.enum import ACCOUNT_LABELS, TRANSACTION_TYPE_LABELS, TransactionTypeEnum
from schemas import TransactionResponse

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_DATE_PREFIX = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")

DateRange = Tuple[Optional[str], Optional[str]]


class DerivedView(BaseModel):
    filtered: List[TransactionResponse] = []
    total_expenses: float = 0.0
    budget_exceeded: bool = False
    income_expense: Dict[str, float] = {}
    accounts: Dict[str, float] = {}


def parse_amount(value) -> float:
    """Read the leading number of an amount, like ``parseFloat`` does.

    Values with no numeric prefix count as zero.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_PREFIX.match(str(value or ""))
    return float(match.group(0)) if match else 0.0


def parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    # Accepts "2024-01-05", "2024-1-5" and timestamps starting with a date
    match = _DATE_PREFIX.match(str(value))
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def filter_by_date_range(transactions: List[TransactionResponse], start, end) -> List[TransactionResponse]:
    """Keep transactions dated within [start, end], both ends included.

    With either bound unset the list comes back unchanged.
    """
    if not start or not end:
        return list(transactions)

    start_date, end_date = parse_date(start), parse_date(end)
    if start_date is None or end_date is None:
        return []

    filtered = []
    for t in transactions:
        t_date = parse_date(t.date)
        if t_date is not None and start_date <= t_date <= end_date:
            filtered.append(t)
    return filtered


def _sum_by(transactions: Iterable[TransactionResponse], field: str, labels: List[str]) -> Dict[str, float]:
    totals = {label: 0.0 for label in labels}
    for t in transactions:
        key = getattr(t, field)
        if key in totals:
            totals[key] += parse_amount(t.amount)
    return totals


def total_expenses(transactions: Iterable[TransactionResponse]) -> float:
    return sum(
        (parse_amount(t.amount) for t in transactions if t.type == TransactionTypeEnum.EXPENSE.value),
        0.0,
    )


def is_budget_exceeded(total: float, budget: Optional[float]) -> bool:
    # Spending exactly the budget does not exceed it
    return budget is not None and total > budget


def income_expense_series(transactions: Iterable[TransactionResponse]) -> Dict[str, float]:
    return _sum_by(transactions, "type", TRANSACTION_TYPE_LABELS)


def account_series(transactions: Iterable[TransactionResponse]) -> Dict[str, float]:
    return _sum_by(transactions, "account", ACCOUNT_LABELS)


def derive_view(transactions: List[TransactionResponse], date_range: DateRange, budget: Optional[float]) -> DerivedView:
    start, end = date_range
    filtered = filter_by_date_range(transactions, start, end)
    expenses = total_expenses(filtered)
    return DerivedView(
        filtered=filtered,
        total_expenses=expenses,
        budget_exceeded=is_budget_exceeded(expenses, budget),
        income_expense=income_expense_series(filtered),
        accounts=account_series(filtered),
    )
