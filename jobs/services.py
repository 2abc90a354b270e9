"""
Jobs Services - Business Logic Layer

This module provides the service classes that drive the application
lifecycle:

- StatusTransitionEngine: validate, persist and fan out status changes
- ApplicationService: submit new applications

A status change is committed first, under a row lock and a version
compare-and-swap. Its side effects (notification, ledger entry, job
completion, counters, rates) run afterwards, each in its own savepoint.
A failing side effect never undoes the status change: it is logged,
returned as a SideEffectFailure and, when RETRY_FAILED_SIDE_EFFECTS is on,
replayed by Celery.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Iterable, List

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.repositories import UserStore, UserStoreProtocol
from api.exceptions import (
    ApplicationNotAllowedError,
    HireLinkAPIException,
    InvalidAmountError,
    InvalidTransitionError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)
from core.db.exceptions import ConcurrentModificationError
from finance.services import LedgerService
from notifications.models import Notification
from notifications.services import NotificationDispatcher

from . import transitions
from .analytics import AnalyticsCalculator
from .models import Application, Job
from .repositories import (
    ApplicationStore,
    ApplicationStoreProtocol,
    JobStore,
    JobStoreProtocol,
)
from .stats import StatsAggregator

logger = logging.getLogger(__name__)

Status = Application.ApplicationStatus


# =============================================================================
# DATA CLASSES FOR SERVICE RESULTS
# =============================================================================

@dataclass
class SideEffectFailure:
    """A side effect that raised after the status change was committed."""
    step: str
    error: str


@dataclass
class TransitionResult:
    """Result of a committed status change."""
    application: Application
    previous_status: str
    failures: List[SideEffectFailure] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [f"{failure.step}_failed" for failure in self.failures]


# =============================================================================
# STATUS TRANSITION ENGINE
# =============================================================================

class StatusTransitionEngine:
    """
    Moves applications through their lifecycle.

    Every collaborator is injected; the defaults are the ORM-backed stores
    and services.
    """

    def __init__(
        self,
        applications: ApplicationStoreProtocol = None,
        jobs: JobStoreProtocol = None,
        users: UserStoreProtocol = None,
        ledger: LedgerService = None,
        notifier: NotificationDispatcher = None,
        stats: StatsAggregator = None,
        validator: transitions.TransitionValidator = None,
        analytics: AnalyticsCalculator = None,
    ):
        self.applications = applications or ApplicationStore()
        self.jobs = jobs or JobStore()
        self.users = users or UserStore()
        self.ledger = ledger or LedgerService(users=self.users)
        self.notifier = notifier or NotificationDispatcher()
        self.stats = stats or StatsAggregator(users=self.users, jobs=self.jobs)
        self.validator = validator or transitions.TransitionValidator()
        self.analytics = analytics or AnalyticsCalculator()

        self._effects: Dict[str, Callable] = {
            transitions.NOTIFICATION: self._notify,
            transitions.LEDGER: self._create_payment,
            transitions.JOB_STATUS: self._complete_job,
            transitions.COUNTERS: self._update_counters,
            transitions.STATS: self._recompute_stats,
        }

    def transition(self, application_id, requested_status: str, actor_id, notes: str = '') -> TransitionResult:
        """
        Change an application's status.

        Args:
            application_id: Application to change
            requested_status: Target status
            actor_id: User requesting the change
            notes: Optional note stored on the activity row

        Returns:
            TransitionResult; failures lists side effects that did not run

        Raises:
            ResourceNotFoundError: application or job does not exist
            PermissionDeniedError: actor may not make this change
            InvalidTransitionError: not an allowed edge, a no-op, or lost a race
            InvalidAmountError: accepting with no positive payment amount
        """
        context: Dict[str, Any] = {}

        with transaction.atomic():
            application = self.applications.get_for_update(application_id)
            if application is None:
                raise ResourceNotFoundError(resource_type='Application', resource_id=application_id)

            job = self.jobs.get(application.job_id)
            if job is None:
                raise ResourceNotFoundError(resource_type='Job', resource_id=application.job_id)
            application.job = job

            self._authorize(application, job, requested_status, actor_id)

            previous_status = application.status
            decision = self.validator.validate(previous_status, requested_status)
            if not decision.allowed:
                logger.warning(
                    f"Transition denied for application {application.pk}: "
                    f"{previous_status} -> {requested_status} ({decision.reason})"
                )
                raise InvalidTransitionError(
                    current_status=previous_status,
                    requested_status=requested_status,
                    reason=decision.reason,
                )

            if requested_status == Status.ACCEPTED:
                context.update(self._resolve_payment(job, application))

            now = timezone.now()
            application.status = requested_status
            changed_fields = ['status']

            timestamp_field = Application.STATUS_TIMESTAMP_FIELDS.get(requested_status)
            if timestamp_field and getattr(application, timestamp_field) is None:
                setattr(application, timestamp_field, now)
                changed_fields.append(timestamp_field)

            changed_fields.extend(self.analytics.apply(application, requested_status, now))

            try:
                self.applications.save_transition(
                    application, previous_status, changed_fields, actor_id=actor_id, notes=notes
                )
            except ConcurrentModificationError as e:
                logger.warning(f"Lost race on application {application.pk}: {e}")
                raise InvalidTransitionError(
                    current_status=previous_status,
                    requested_status=requested_status,
                    reason='The application was changed by another request.',
                )

        logger.info(
            f"Application {application.pk} status changed: {previous_status} -> "
            f"{requested_status} by user {actor_id}"
        )

        failures = self._run_side_effects(
            application, job, self._steps_for(requested_status, decision.side_effects), context
        )
        return TransitionResult(
            application=application,
            previous_status=previous_status,
            failures=failures,
        )

    def bulk_transition(self, application_ids: Iterable, requested_status: str, actor_id) -> Dict[str, Any]:
        """
        Run transition() for each id independently.

        Returns:
            updated, failed and already_processed counts, per-id errors and
            per-id side-effect warnings
        """
        summary = {
            'updated': 0,
            'failed': 0,
            'already_processed': 0,
            'errors': {},
            'warnings': {},
        }

        for application_id in application_ids:
            key = str(application_id)
            try:
                result = self.transition(application_id, requested_status, actor_id)
            except InvalidTransitionError as e:
                if e.extra_data.get('current_status') == requested_status:
                    summary['already_processed'] += 1
                    continue
                summary['failed'] += 1
                summary['errors'][key] = {'error_code': e.error_code, 'message': str(e.detail)}
            except HireLinkAPIException as e:
                summary['failed'] += 1
                summary['errors'][key] = {'error_code': e.error_code, 'message': str(e.detail)}
            else:
                summary['updated'] += 1
                if result.warnings:
                    summary['warnings'][key] = result.warnings

        logger.info(
            f"Bulk transition to {requested_status} by user {actor_id}: "
            f"{summary['updated']} updated, {summary['failed']} failed, "
            f"{summary['already_processed']} already processed"
        )
        return summary

    def replay_side_effect(self, application_id, step: str, expected_status: str) -> bool:
        """
        Re-run one side effect of an earlier transition.

        Skipped when the application has since left expected_status.
        Errors propagate so the caller can retry.
        """
        application = self.applications.get(application_id)
        if application is None:
            raise ResourceNotFoundError(resource_type='Application', resource_id=application_id)

        if application.status != expected_status:
            logger.info(
                f"Skipping {step} replay for application {application_id}: "
                f"status is {application.status}, expected {expected_status}"
            )
            return False

        job = self.jobs.get(application.job_id)
        if job is None:
            raise ResourceNotFoundError(resource_type='Job', resource_id=application.job_id)

        context = {}
        if step == transitions.LEDGER:
            context.update(self._resolve_payment(job, application))

        # Rates are derived from the counters, so they are refreshed with them
        steps = (step, transitions.STATS) if step == transitions.COUNTERS else (step,)
        with transaction.atomic():
            for name in steps:
                self._effects[name](application, job, context)

        logger.info(f"Replayed {step} for application {application_id}")
        return True

    # ==================== VALIDATION ====================

    def _authorize(self, application: Application, job: Job, requested_status: str, actor_id) -> None:
        if requested_status == Status.WITHDRAWN:
            allowed = actor_id is not None and actor_id == application.applicant_id
            action = 'withdraw this application'
        else:
            allowed = actor_id is not None and actor_id == job.posted_by_id
            action = 'change the status of this application'

        if not allowed:
            logger.warning(
                f"User {actor_id} denied {requested_status} on application {application.pk}"
            )
            raise PermissionDeniedError(
                action=action,
                detail=f"You are not allowed to {action}.",
            )

    def _resolve_payment(self, job: Job, application: Application) -> Dict[str, Any]:
        amount, currency = self.ledger.resolve_payment_amount(job, application)
        if amount is None or amount <= 0:
            raise InvalidAmountError(
                amount=amount,
                detail='No positive payment amount could be determined for this hire.',
            )
        return {'amount': amount, 'currency': currency}

    @staticmethod
    def _steps_for(status: str, side_effects: tuple) -> tuple:
        if status == Status.WITHDRAWN and getattr(settings, 'NOTIFY_EMPLOYER_ON_WITHDRAWAL', False):
            return (transitions.NOTIFICATION,)
        return side_effects

    # ==================== SIDE EFFECTS ====================

    def _run_side_effects(
        self,
        application: Application,
        job: Job,
        steps: tuple,
        context: Dict[str, Any],
    ) -> List[SideEffectFailure]:
        failures = []
        for step in steps:
            try:
                with transaction.atomic():
                    self._effects[step](application, job, context)
            except Exception as e:
                logger.exception(f"Side effect {step} failed for application {application.pk}: {e}")
                failures.append(SideEffectFailure(step=step, error=str(e)))

        if failures and getattr(settings, 'RETRY_FAILED_SIDE_EFFECTS', False):
            self._schedule_replay(application, failures)
        return failures

    def _schedule_replay(self, application: Application, failures: List[SideEffectFailure]) -> None:
        from .tasks import replay_transition_side_effect

        for failure in failures:
            transaction.on_commit(partial(
                replay_transition_side_effect.delay,
                application.pk,
                failure.step,
                application.status,
            ))

    def _notify(self, application: Application, job: Job, context: Dict[str, Any]) -> None:
        senders = {
            Status.REVIEWED: self.notifier.reviewed,
            Status.ACCEPTED: self.notifier.accepted,
            Status.REJECTED: self.notifier.rejected,
            Status.WITHDRAWN: self.notifier.withdrawn,
        }
        senders[application.status](application)

    def _create_payment(self, application: Application, job: Job, context: Dict[str, Any]) -> None:
        self.ledger.create_job_payment(
            job_id=job.pk,
            employer_id=job.posted_by_id,
            specialist_id=application.applicant_id,
            amount=context['amount'],
            application_id=application.pk,
            currency=context.get('currency') or job.currency,
            description=f'Payment for job "{job.title}"',
        )

    def _complete_job(self, application: Application, job: Job, context: Dict[str, Any]) -> None:
        if not self.jobs.mark_completed(job.pk):
            return

        job.status = Job.JobStatus.COMPLETED
        logger.info(f"Job {job.pk} completed by hire of application {application.pk}")
        self.notifier.job_completed(job, job.posted_by_id, is_employer=True, application_id=application.pk)
        self.notifier.job_completed(job, application.applicant_id, application_id=application.pk)

    def _update_counters(self, application: Application, job: Job, context: Dict[str, Any]) -> None:
        if not self.applications.mark_decision_counted(application.pk):
            logger.info(f"Decision on application {application.pk} already counted")
            return

        hires = 1 if application.status == Status.ACCEPTED else 0
        rejections = 1 if application.status == Status.REJECTED else 0
        self.users.increment_employer_decisions(job.posted_by_id, hires=hires, rejections=rejections)
        self.jobs.record_decision(job.pk, hires=hires, rejections=rejections)

    def _recompute_stats(self, application: Application, job: Job, context: Dict[str, Any]) -> None:
        self.stats.recompute(job.posted_by_id)
        self.stats.recompute_job(job.pk)


# =============================================================================
# APPLICATION SERVICE
# =============================================================================

class ApplicationService:
    """
    Service for submitting job applications.

    Handles:
    - Applicant and job eligibility checks
    - Creating the application and its audit row
    - Application counters on the job and the employer
    - Notifying the employer once the application is committed
    """

    PAYLOAD_FIELDS = (
        'cover_letter',
        'resume_url',
        'proposed_rate',
        'proposed_currency',
        'estimated_completion_time',
        'availability',
        'portfolio_items',
        'negotiation',
    )

    def __init__(
        self,
        applications: ApplicationStore = None,
        jobs: JobStore = None,
        users: UserStoreProtocol = None,
        notifier: NotificationDispatcher = None,
    ):
        self.applications = applications or ApplicationStore()
        self.jobs = jobs or JobStore()
        self.users = users or UserStore()
        self.notifier = notifier or NotificationDispatcher()

    def apply(self, job: Job, applicant, **payload) -> Application:
        """
        Submit a new job application.

        Args:
            job: The job being applied to
            applicant: The specialist applying
            **payload: cover_letter, resume_url, proposed_rate, ... (see PAYLOAD_FIELDS)

        Returns:
            The created application

        Raises:
            ApplicationNotAllowedError: applicant is not a specialist, or the
                job is closed or past its deadline
            ResourceAlreadyExistsError: applicant already applied to this job
        """
        if not applicant.is_specialist:
            raise ApplicationNotAllowedError(detail='Only specialists can apply to jobs.')

        if not job.is_accepting_applications:
            if job.status == Job.JobStatus.ACTIVE:
                raise ApplicationNotAllowedError(detail='The application deadline for this job has passed.')
            raise ApplicationNotAllowedError(detail='This job is no longer accepting applications.')

        if self.applications.exists(job.pk, applicant.pk):
            raise ResourceAlreadyExistsError(
                resource_type='Application',
                conflicting_fields=['job', 'applicant'],
                detail='You have already applied for this job.',
            )

        fields = {name: payload[name] for name in self.PAYLOAD_FIELDS if name in payload}

        with transaction.atomic():
            try:
                with transaction.atomic():
                    application = self.applications.create(job=job, applicant=applicant, **fields)
            except IntegrityError:
                raise ResourceAlreadyExistsError(
                    resource_type='Application',
                    conflicting_fields=['job', 'applicant'],
                    detail='You have already applied for this job.',
                )

            self.jobs.increment_applications(job.pk)
            self.users.increment_applications_received(job.posted_by_id)

            transaction.on_commit(partial(self._notify_employer, application))

        logger.info(f"Application {application.pk} created: user {applicant.pk} -> job {job.pk}")
        return application

    def _notify_employer(self, application: Application) -> None:
        from notifications.tasks import send_notification_task

        try:
            send_notification_task.delay(
                application.job.posted_by_id,
                Notification.NotificationType.APPLICATION_RECEIVED.value,
                self.notifier.received_payload(application),
            )
        except Exception as e:
            logger.exception(f"Failed to queue new application notification for {application.pk}: {e}")
