"""Run dates and billing periods of auto-billing schedules."""

import calendar
from datetime import date, timedelta

from zevbill.models.enums import BillingFrequency

MONTHS_PER_RUN = {
    BillingFrequency.MONTHLY: 1,
    BillingFrequency.QUARTERLY: 3,
    BillingFrequency.HALF_YEARLY: 6,
    BillingFrequency.YEARLY: 12,
}

QUARTER_MONTHS = (1, 4, 7, 10)


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def initial_next_run(
    frequency: BillingFrequency,
    generation_day: int,
    first_execution_date: date | None,
    today: date,
) -> date:
    """First run of a newly saved schedule.

    A first execution date in the future wins. Otherwise runs fall on the
    generation day of the next suitable month: any month for monthly
    schedules, January/April/July/October for quarterly ones, January/July
    for half-yearly ones and January for yearly ones.
    """
    if first_execution_date is not None and first_execution_date > today:
        return first_execution_date

    if frequency == BillingFrequency.MONTHLY:
        run = date(today.year, today.month, generation_day)
        if run < today:
            run = add_months(run, 1)
        return run

    if frequency == BillingFrequency.QUARTERLY:
        for month in QUARTER_MONTHS:
            if month > today.month:
                return date(today.year, month, generation_day)
        return date(today.year + 1, QUARTER_MONTHS[0], generation_day)

    if frequency == BillingFrequency.HALF_YEARLY:
        if today.month < 7:
            return date(today.year, 7, generation_day)
        return date(today.year + 1, 1, generation_day)

    return date(today.year + 1, 1, generation_day)


def next_run_after(frequency: BillingFrequency, generation_day: int, current: date) -> date:
    """Run following one executed on current."""
    if frequency == BillingFrequency.YEARLY:
        return date(current.year + 1, 1, generation_day)
    shifted = add_months(current.replace(day=1), MONTHS_PER_RUN[frequency])
    return shifted.replace(day=generation_day)


def billing_period(frequency: BillingFrequency, run_date: date) -> tuple[date, date]:
    """Period billed by a run: up to the day before it, one interval long."""
    end = run_date - timedelta(days=1)
    start = add_months(end, -MONTHS_PER_RUN[frequency])
    return start, end
