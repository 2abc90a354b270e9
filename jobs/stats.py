"""
Hiring rate aggregation.

success_rate  = hires / (hires + rejections) * 100
response_rate = (hires + rejections) / applications received * 100

Both are rounded half-up to two decimals and are 0 when the denominator
is 0. Counters are reloaded from the database before every computation.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from accounts.repositories import UserStore, UserStoreProtocol

from .repositories import JobStore, JobStoreProtocol

CENT = Decimal('0.01')
HUNDRED = Decimal('100')
ZERO = Decimal('0.00')


def percentage(part: int, whole: int) -> Decimal:
    if not whole:
        return ZERO
    return (Decimal(part) * HUNDRED / Decimal(whole)).quantize(CENT, rounding=ROUND_HALF_UP)


def hiring_rates(hires: int, rejections: int, received: int) -> Tuple[Decimal, Decimal]:
    decided = hires + rejections
    return percentage(hires, decided), percentage(decided, received)


class StatsAggregator:
    """Recomputes hiring success and response rates."""

    def __init__(self, users: UserStoreProtocol = None, jobs: JobStoreProtocol = None):
        self.users = users or UserStore()
        self.jobs = jobs or JobStore()

    def recompute(self, job_owner_id) -> Tuple[Decimal, Decimal]:
        """Recompute the employer-level rates from fresh profile counters."""
        totals = self.users.employer_totals(job_owner_id)
        if totals is None:
            return ZERO, ZERO

        success_rate, response_rate = hiring_rates(
            totals['total_hires'],
            totals['total_rejections'],
            totals['total_applications_received'],
        )
        self.users.save_employer_rates(job_owner_id, success_rate, response_rate)
        return success_rate, response_rate

    def recompute_job(self, job_id) -> Tuple[Decimal, Decimal]:
        """Recompute a job's own rates from fresh counters."""
        totals = self.jobs.hiring_totals(job_id)
        if totals is None:
            return ZERO, ZERO

        success_rate, response_rate = hiring_rates(
            totals['total_hires'],
            totals['total_rejections'],
            totals['total_applications_received'],
        )
        self.jobs.save_rates(job_id, success_rate, response_rate)
        return success_rate, response_rate
