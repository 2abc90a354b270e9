"""
Jobs Models - Job postings and the application lifecycle.

This module implements:
- Job: a posting owned by an employer or partner, with hiring stats
- Application: a specialist's application to a job
- ApplicationActivity: audit trail of every status change

Status changes on Application go through jobs.services.StatusTransitionEngine.
Models hold no cross-entity side effects.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from accounts.models import HiringStats
from core.db.models import TimeStampedModel, VersionedModel


class Job(TimeStampedModel, HiringStats):
    """
    Job posting.

    An accepted application completes the job.
    """

    class JobStatus(models.TextChoices):
        ACTIVE = 'active', _('Active')
        REVIEWING = 'reviewing', _('Reviewing')
        COMPLETED = 'completed', _('Completed')
        PAUSED = 'paused', _('Paused')
        CANCELLED = 'cancelled', _('Cancelled')

    posted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='posted_jobs'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=JobStatus.choices,
        default=JobStatus.ACTIVE,
        db_index=True
    )

    # Compensation
    salary_min = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    salary_max = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=10, default='USD')

    application_deadline = models.DateTimeField(null=True, blank=True)
    applications_count = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _('Job')
        verbose_name_plural = _('Jobs')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['posted_by', 'status'], name='jobs_job_owner_status_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def is_accepting_applications(self) -> bool:
        if self.status != self.JobStatus.ACTIVE:
            return False
        if self.application_deadline and self.application_deadline < timezone.now():
            return False
        return True


class Application(VersionedModel):
    """
    Job application linking a specialist to a job posting.

    Lifecycle: pending -> reviewed -> accepted | rejected | withdrawn.
    Each status timestamp is written once, on first entry to that status.
    """

    class ApplicationStatus(models.TextChoices):
        PENDING = 'pending', _('Pending')
        REVIEWED = 'reviewed', _('Reviewed')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')
        WITHDRAWN = 'withdrawn', _('Withdrawn')

    # Status -> timestamp field set on first entry
    STATUS_TIMESTAMP_FIELDS = {
        ApplicationStatus.REVIEWED: 'reviewed_at',
        ApplicationStatus.ACCEPTED: 'hired_at',
        ApplicationStatus.REJECTED: 'rejected_at',
        ApplicationStatus.WITHDRAWN: 'withdrawn_at',
    }

    job = models.ForeignKey(
        Job,
        on_delete=models.CASCADE,
        related_name='applications'
    )
    applicant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='applications'
    )
    status = models.CharField(
        max_length=20,
        choices=ApplicationStatus.choices,
        default=ApplicationStatus.PENDING,
        db_index=True
    )

    # Application content
    cover_letter = models.TextField(blank=True)
    resume_url = models.URLField(blank=True, max_length=500)
    proposed_rate = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    proposed_currency = models.CharField(max_length=10, blank=True)
    estimated_completion_time = models.CharField(max_length=100, blank=True)
    availability = models.CharField(max_length=100, blank=True)
    portfolio_items = models.JSONField(default=list, blank=True)
    # initial_offer / counter_offer / final_terms, each {amount, currency, terms, ...}
    negotiation = models.JSONField(default=dict, blank=True)

    # Timestamps
    applied_at = models.DateTimeField(default=timezone.now)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    hired_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    withdrawn_at = models.DateTimeField(null=True, blank=True)

    # Analytics, in whole hours since applied_at
    time_to_review = models.PositiveIntegerField(null=True, blank=True)
    time_to_decision = models.PositiveIntegerField(null=True, blank=True)
    view_count = models.PositiveIntegerField(default=0)
    last_viewed_at = models.DateTimeField(null=True, blank=True)

    # Set once the hire or rejection was added to the hiring counters
    decision_counted_at = models.DateTimeField(null=True, blank=True, editable=False)

    class Meta:
        verbose_name = _('Application')
        verbose_name_plural = _('Applications')
        ordering = ['-applied_at']
        indexes = [
            models.Index(fields=['job', 'status'], name='jobs_app_job_status_idx'),
            models.Index(fields=['applicant', 'applied_at'], name='jobs_app_applicant_applied_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['job', 'applicant'],
                name='jobs_application_unique_job_applicant'
            ),
        ]

    def __str__(self):
        return f"{self.applicant_id} -> {self.job_id} ({self.status})"


class ApplicationActivity(models.Model):
    """
    Activity log for application events.
    One STATUS_CHANGE row is written with every status change.
    """

    class ActivityType(models.TextChoices):
        CREATED = 'created', _('Application Created')
        STATUS_CHANGE = 'status_change', _('Status Changed')

    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='activities'
    )
    activity_type = models.CharField(
        max_length=30,
        choices=ActivityType.choices
    )
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    old_value = models.CharField(max_length=200, blank=True)
    new_value = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Application Activity')
        verbose_name_plural = _('Application Activities')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.application_id} - {self.get_activity_type_display()}"
