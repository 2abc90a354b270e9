"""
Application analytics.

Elapsed times are whole hours (floored) since the application was
submitted. Once set they are never recomputed.
"""

from datetime import datetime
from typing import Any, Dict

from django.db.models import Avg, Count, F, Sum
from django.utils import timezone

from .models import Application, Job


Status = Application.ApplicationStatus

SECONDS_PER_HOUR = 3600


def elapsed_hours(start: datetime, end: datetime) -> int:
    """Whole hours between start and end, never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // SECONDS_PER_HOUR)


class AnalyticsCalculator:
    """Fills in time_to_review / time_to_decision and tracks views."""

    def apply(self, application: Application, new_status: str, now: datetime = None) -> list:
        """
        Update the analytics fields for an application entering new_status.

        Returns:
            Names of the fields that were set
        """
        now = now or timezone.now()
        changed = []

        if new_status == Status.REVIEWED and application.time_to_review is None:
            application.time_to_review = elapsed_hours(application.applied_at, now)
            changed.append('time_to_review')

        if new_status in (Status.ACCEPTED, Status.REJECTED) and application.time_to_decision is None:
            application.time_to_decision = elapsed_hours(application.applied_at, now)
            changed.append('time_to_decision')

        return changed

    def record_view(self, application: Application) -> Application:
        """Count one view of the application."""
        now = timezone.now()
        Application.objects.filter(pk=application.pk).update(
            view_count=F('view_count') + 1,
            last_viewed_at=now,
        )
        application.refresh_from_db(fields=['view_count', 'last_viewed_at'])
        return application

    def job_application_stats(self, job: Job) -> Dict[str, Any]:
        """
        Application metrics for one job.

        Returns:
            Counts per status, average hours to hire and to reject (rounded)
            and the total number of views
        """
        applications = Application.objects.filter(job=job)

        by_status = {status: 0 for status in Status.values}
        for row in applications.values('status').annotate(count=Count('id')):
            by_status[row['status']] = row['count']

        hired = applications.filter(status=Status.ACCEPTED).aggregate(avg=Avg('time_to_decision'))
        rejected = applications.filter(status=Status.REJECTED).aggregate(avg=Avg('time_to_decision'))
        views = applications.aggregate(total=Sum('view_count'))

        return {
            'total': sum(by_status.values()),
            'by_status': by_status,
            'avg_time_to_hire': round(hired['avg']) if hired['avg'] is not None else 0,
            'avg_time_to_reject': round(rejected['avg']) if rejected['avg'] is not None else 0,
            'total_views': views['total'] or 0,
        }
