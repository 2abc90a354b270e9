"""
Jobs Repositories - Application and Job persistence.

The transition engine talks to the database only through these stores,
so tests can swap any of them for an in-memory fake.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional, Protocol

from django.db.models import F
from django.utils import timezone

from .models import Application, ApplicationActivity, Job

logger = logging.getLogger(__name__)

HIRING_TOTALS = ('total_hires', 'total_rejections', 'total_applications_received')


class ApplicationStoreProtocol(Protocol):

    def get(self, application_id) -> Optional[Application]: ...

    def get_for_update(self, application_id) -> Optional[Application]: ...

    def mark_decision_counted(self, application_id) -> bool: ...

    def save_transition(
        self,
        application: Application,
        previous_status: str,
        changed_fields: Iterable[str],
        actor_id=None,
        notes: str = '',
    ) -> Application: ...


class JobStoreProtocol(Protocol):

    def get(self, job_id) -> Optional[Job]: ...

    def mark_completed(self, job_id) -> bool: ...

    def record_decision(self, job_id, hires: int = 0, rejections: int = 0) -> None: ...

    def hiring_totals(self, job_id) -> Optional[Dict[str, int]]: ...

    def save_rates(self, job_id, success_rate: Decimal, response_rate: Decimal) -> None: ...

    def increment_applications(self, job_id) -> None: ...


class ApplicationStore:
    """ORM-backed application store."""

    def get(self, application_id) -> Optional[Application]:
        return Application.objects.select_related(
            'job', 'job__posted_by', 'applicant'
        ).filter(pk=application_id).first()

    def get_for_update(self, application_id) -> Optional[Application]:
        """Load and row-lock an application. Must run inside transaction.atomic()."""
        return Application.objects.select_for_update(of=('self',)).select_related(
            'job', 'job__posted_by', 'applicant'
        ).filter(pk=application_id).first()

    def mark_decision_counted(self, application_id) -> bool:
        """Flag the decision as counted. False when it already was."""
        updated = Application.objects.filter(
            pk=application_id, decision_counted_at__isnull=True
        ).update(decision_counted_at=timezone.now())
        return updated == 1

    def exists(self, job_id, applicant_id) -> bool:
        return Application.objects.filter(job_id=job_id, applicant_id=applicant_id).exists()

    def create(self, **fields) -> Application:
        application = Application.objects.create(**fields)
        ApplicationActivity.objects.create(
            application=application,
            activity_type=ApplicationActivity.ActivityType.CREATED,
            performed_by_id=application.applicant_id,
            new_value=application.status,
            notes='Application submitted',
        )
        return application

    def save_transition(
        self,
        application: Application,
        previous_status: str,
        changed_fields: Iterable[str],
        actor_id=None,
        notes: str = '',
    ) -> Application:
        """
        Persist a status change and its audit row.

        Raises:
            ConcurrentModificationError: the row's version moved since it was read
        """
        application.save_versioned(update_fields=list(changed_fields))
        ApplicationActivity.objects.create(
            application=application,
            activity_type=ApplicationActivity.ActivityType.STATUS_CHANGE,
            performed_by_id=actor_id,
            old_value=previous_status,
            new_value=application.status,
            notes=notes or f'Status updated from {previous_status} to {application.status}',
        )
        return application


class JobStore:
    """ORM-backed job store."""

    def get(self, job_id) -> Optional[Job]:
        return Job.objects.select_related('posted_by').filter(pk=job_id).first()

    def mark_completed(self, job_id) -> bool:
        updated = Job.objects.filter(pk=job_id).exclude(
            status=Job.JobStatus.COMPLETED
        ).update(status=Job.JobStatus.COMPLETED, updated_at=timezone.now())
        return updated == 1

    def record_decision(self, job_id, hires: int = 0, rejections: int = 0) -> None:
        Job.objects.filter(pk=job_id).update(
            total_hires=F('total_hires') + hires,
            total_rejections=F('total_rejections') + rejections,
            updated_at=timezone.now(),
        )

    def hiring_totals(self, job_id) -> Optional[Dict[str, int]]:
        return Job.objects.filter(pk=job_id).values(*HIRING_TOTALS).first()

    def save_rates(self, job_id, success_rate: Decimal, response_rate: Decimal) -> None:
        Job.objects.filter(pk=job_id).update(
            hiring_success_rate=success_rate,
            response_rate=response_rate,
        )

    def increment_applications(self, job_id) -> None:
        Job.objects.filter(pk=job_id).update(
            applications_count=F('applications_count') + 1,
            total_applications_received=F('total_applications_received') + 1,
            updated_at=timezone.now(),
        )
