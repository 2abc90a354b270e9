"""
jobs Celery Tasks

Out-of-band replay of transition side effects that failed after the
status change was committed.
"""

import logging

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    max_retries=5,
    default_retry_delay=30,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=900,
    queue='jobs'
)
def replay_transition_side_effect(self, application_id: int, step: str, expected_status: str):
    """
    Re-run one failed side effect of an application status change.

    Args:
        application_id: Application whose transition left the failure
        step: notification, ledger, job_status, counters or stats
        expected_status: Status the application moved to; the replay is
            skipped if the application has since left it

    Returns:
        dict: Replay result
    """
    from .services import StatusTransitionEngine

    logger.info(
        f"Replaying {step} for application {application_id} "
        f"(attempt {self.request.retries + 1})"
    )
    replayed = StatusTransitionEngine().replay_side_effect(application_id, step, expected_status)

    return {
        'status': 'replayed' if replayed else 'skipped',
        'application_id': application_id,
        'step': step,
        'processed_at': timezone.now().isoformat(),
    }
