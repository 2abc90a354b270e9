"""
Hiring rate tests.
"""

from decimal import Decimal

import pytest

from accounts.models import EmployerProfile
from jobs.models import Job
from jobs.stats import StatsAggregator, hiring_rates, percentage


class TestRates:
    """Tests for the rate formulas."""

    def test_percentage_rounds_half_up(self):
        assert percentage(1, 3) == Decimal('33.33')
        assert percentage(2, 3) == Decimal('66.67')
        assert percentage(1, 8) == Decimal('12.50')

    def test_zero_denominator(self):
        assert percentage(0, 0) == Decimal('0.00')

    def test_hiring_rates(self):
        success, response = hiring_rates(hires=3, rejections=1, received=8)
        assert success == Decimal('75.00')
        assert response == Decimal('50.00')

    def test_no_decisions_yet(self):
        assert hiring_rates(0, 0, 5) == (Decimal('0.00'), Decimal('0.00'))


@pytest.mark.services
@pytest.mark.django_db
class TestStatsAggregator:
    """Tests for StatsAggregator."""

    def test_recompute_employer_rates(self, employer):
        EmployerProfile.objects.filter(user=employer).update(
            total_hires=3, total_rejections=1, total_applications_received=8
        )

        success, response = StatsAggregator().recompute(employer.pk)

        profile = EmployerProfile.objects.get(user=employer)
        assert (success, response) == (Decimal('75.00'), Decimal('50.00'))
        assert profile.hiring_success_rate == Decimal('75.00')
        assert profile.response_rate == Decimal('50.00')

    def test_recompute_without_profile(self, employer_factory):
        assert StatsAggregator().recompute(employer_factory().pk) == (Decimal('0.00'), Decimal('0.00'))

    def test_recompute_job_rates(self, job):
        Job.objects.filter(pk=job.pk).update(
            total_hires=1, total_rejections=2, total_applications_received=3
        )

        StatsAggregator().recompute_job(job.pk)

        job.refresh_from_db()
        assert job.hiring_success_rate == Decimal('33.33')
        assert job.response_rate == Decimal('100.00')


class FakeUserStore:
    def __init__(self, totals):
        self.totals = totals
        self.saved = {}

    def employer_totals(self, user_id):
        return self.totals.get(user_id)

    def save_employer_rates(self, user_id, success_rate, response_rate):
        self.saved[user_id] = (success_rate, response_rate)


class FakeJobStore:
    def __init__(self, totals):
        self.totals = totals
        self.saved = {}

    def hiring_totals(self, job_id):
        return self.totals.get(job_id)

    def save_rates(self, job_id, success_rate, response_rate):
        self.saved[job_id] = (success_rate, response_rate)


class TestStatsAggregatorStores:
    """StatsAggregator only reads and writes through its stores."""

    def test_employer_rates_through_user_store(self):
        users = FakeUserStore({7: {'total_hires': 3, 'total_rejections': 1, 'total_applications_received': 8}})
        aggregator = StatsAggregator(users=users, jobs=FakeJobStore({}))

        assert aggregator.recompute(7) == (Decimal('75.00'), Decimal('50.00'))
        assert users.saved == {7: (Decimal('75.00'), Decimal('50.00'))}

    def test_job_rates_through_job_store(self):
        jobs = FakeJobStore({3: {'total_hires': 1, 'total_rejections': 2, 'total_applications_received': 3}})
        aggregator = StatsAggregator(users=FakeUserStore({}), jobs=jobs)

        assert aggregator.recompute_job(3) == (Decimal('33.33'), Decimal('100.00'))
        assert jobs.saved == {3: (Decimal('33.33'), Decimal('100.00'))}

    def test_missing_rows_are_not_written(self):
        users, jobs = FakeUserStore({}), FakeJobStore({})
        aggregator = StatsAggregator(users=users, jobs=jobs)

        assert aggregator.recompute(1) == (Decimal('0.00'), Decimal('0.00'))
        assert aggregator.recompute_job(1) == (Decimal('0.00'), Decimal('0.00'))
        assert users.saved == {} and jobs.saved == {}
