from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple

from ..core.constants import FRENCH_MONTHS, FRENCH_MONTHS_SHORT, FRENCH_WEEKDAYS
from ..core.enums import PayPeriod

SUNDAY = 6


@dataclass(frozen=True)
class PeriodWindow:
    """One pay period. ``dates`` are the markable days (Sundays excluded)."""

    pay_period: PayPeriod
    start: date
    end: date

    @property
    def dates(self) -> Tuple[date, ...]:
        days = []
        d = self.start
        while d <= self.end:
            if d.weekday() != SUNDAY:
                days.append(d)
            d += timedelta(days=1)
        return tuple(days)

    @property
    def label(self) -> str:
        if self.pay_period == PayPeriod.MONTHLY:
            return f"Mois de {FRENCH_MONTHS[self.start.month - 1]} {self.start.year}"
        prefix = "Quinzaine" if self.pay_period == PayPeriod.BI_WEEKLY else "Semaine"
        return f"{prefix} du {_short(self.start)} au {_short(self.end)} {self.end.year}"

    def contains(self, day: date) -> bool:
        return day in self.dates

    def next_start(self) -> date:
        return self.end + timedelta(days=1)


def _short(d: date) -> str:
    return f"{d.day:02d} {FRENCH_MONTHS_SHORT[d.month - 1]}"


def day_label(d: date) -> str:
    """Column header for an attendance day, e.g. ``lundi 21``."""
    return f"{FRENCH_WEEKDAYS[d.weekday()]} {d.day:02d}"


def build_period(pay_period: PayPeriod, reference_date: date) -> PeriodWindow:
    pay_period = PayPeriod(pay_period)

    if pay_period == PayPeriod.MONTHLY:
        first = reference_date.replace(day=1)
        last_day = calendar.monthrange(first.year, first.month)[1]
        return PeriodWindow(pay_period, first, first.replace(day=last_day))

    monday = reference_date - timedelta(days=reference_date.weekday())
    length = 13 if pay_period == PayPeriod.BI_WEEKLY else 6
    return PeriodWindow(pay_period, monday, monday + timedelta(days=length))
