"""
Application analytics tests.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.utils import timezone

from jobs.analytics import AnalyticsCalculator, elapsed_hours


START = datetime(2024, 1, 1, 9, 0, tzinfo=dt_timezone.utc)


class TestElapsedHours:
    """Tests for whole-hour elapsed time."""

    def test_floors_partial_hours(self):
        assert elapsed_hours(START, START + timedelta(hours=5, minutes=59)) == 5

    def test_exact_hours(self):
        assert elapsed_hours(START, START + timedelta(hours=48)) == 48

    def test_under_one_hour_is_zero(self):
        assert elapsed_hours(START, START + timedelta(minutes=30)) == 0

    def test_clock_skew_clamps_to_zero(self):
        """Test an end time before the start never yields a negative value."""
        assert elapsed_hours(START, START - timedelta(hours=2)) == 0


@pytest.mark.django_db
class TestAnalyticsCalculator:
    """Tests for AnalyticsCalculator."""

    def test_review_sets_time_to_review(self, application_factory):
        application = application_factory(applied_at=START)

        changed = AnalyticsCalculator().apply(application, 'reviewed', START + timedelta(hours=26, minutes=10))

        assert changed == ['time_to_review']
        assert application.time_to_review == 26
        assert application.time_to_decision is None

    def test_decision_sets_time_to_decision(self, application_factory):
        application = application_factory(applied_at=START)

        changed = AnalyticsCalculator().apply(application, 'rejected', START + timedelta(hours=72))

        assert changed == ['time_to_decision']
        assert application.time_to_decision == 72

    def test_values_are_write_once(self, application_factory):
        """Test existing analytics values are never recomputed."""
        application = application_factory(applied_at=START, time_to_review=3, time_to_decision=10)

        calculator = AnalyticsCalculator()
        assert calculator.apply(application, 'reviewed', START + timedelta(hours=99)) == []
        assert calculator.apply(application, 'accepted', START + timedelta(hours=99)) == []

        assert application.time_to_review == 3
        assert application.time_to_decision == 10

    def test_withdrawal_sets_nothing(self, application_factory):
        application = application_factory(applied_at=START)
        assert AnalyticsCalculator().apply(application, 'withdrawn', START + timedelta(hours=5)) == []

    def test_record_view(self, application_factory):
        application = application_factory()

        calculator = AnalyticsCalculator()
        calculator.record_view(application)
        calculator.record_view(application)

        assert application.view_count == 2
        assert application.last_viewed_at is not None
        assert application.last_viewed_at <= timezone.now()

    def test_job_application_stats(self, job, application_factory):
        """Test per-job counts and average decision times."""
        # Setup
        application_factory(job=job, status='accepted', time_to_decision=10, view_count=3)
        application_factory(job=job, status='rejected', time_to_decision=4)
        application_factory(job=job, status='rejected', time_to_decision=7, view_count=1)
        application_factory(job=job, status='pending')

        # Execute
        stats = AnalyticsCalculator().job_application_stats(job)

        # Verify
        assert stats['total'] == 4
        assert stats['by_status']['accepted'] == 1
        assert stats['by_status']['rejected'] == 2
        assert stats['by_status']['pending'] == 1
        assert stats['by_status']['withdrawn'] == 0
        assert stats['avg_time_to_hire'] == 10
        assert stats['avg_time_to_reject'] == 6
        assert stats['total_views'] == 4

    def test_job_application_stats_empty(self, job):
        stats = AnalyticsCalculator().job_application_stats(job)
        assert stats['total'] == 0
        assert stats['avg_time_to_hire'] == 0
        assert stats['total_views'] == 0
