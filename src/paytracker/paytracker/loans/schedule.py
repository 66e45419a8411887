from __future__ import annotations

import math
from datetime import date
from decimal import Decimal

from ..core.enums import LoanStatus, PayPeriod
from .model import Loan

ZERO = Decimal("0")


def repayment_due(loan: Loan, period_end: date) -> Decimal:
    """Amount withheld from the period ending ``period_end``."""
    if loan.status != LoanStatus.ACTIVE or loan.start_date > period_end:
        return ZERO
    if loan.balance <= ZERO:
        return ZERO
    return min(loan.balance, loan.repayment_amount)


def elapsed_periods(start: date, as_of: date, pay_period: PayPeriod) -> int:
    if as_of <= start:
        return 0
    if pay_period == PayPeriod.MONTHLY:
        months = (as_of.year - start.year) * 12 + (as_of.month - start.month)
        if as_of.day < start.day:
            months -= 1
        return max(months, 0)
    days = 14 if pay_period == PayPeriod.BI_WEEKLY else 7
    return (as_of - start).days // days


def projected_balance(loan: Loan, pay_period: PayPeriod, as_of: date) -> Decimal:
    """amount - repayment x elapsed periods, never below zero.

    Only meaningful while the loan is active; otherwise the stored balance is returned.
    """
    if loan.status != LoanStatus.ACTIVE:
        return loan.balance
    paid = loan.repayment_amount * elapsed_periods(loan.start_date, as_of, PayPeriod(pay_period))
    return max(loan.amount - paid, ZERO)


def remaining_periods(loan: Loan) -> int:
    if loan.balance <= ZERO or loan.repayment_amount <= ZERO:
        return 0
    return int(math.ceil(loan.balance / loan.repayment_amount))
