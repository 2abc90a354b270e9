"""
Finance Services - Ledger Business Logic

This module provides the LedgerService, the only writer of Transaction
rows:

- create_job_payment: record the payment owed when an application is hired
- complete_transaction / fail_transaction: settle pending entries
- resolve_payment_amount: decide what a hire is worth
- get_user_transactions / get_financial_summary: read side for users

Amounts are Decimals rounded half-up to cents. Payer and payee financial
stats are incremented exactly once, when an entry becomes completed.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet, Sum
from django.utils import timezone

from accounts.repositories import UserStore, UserStoreProtocol
from api.exceptions import InvalidAmountError, InvalidTransitionError, ResourceNotFoundError

from .models import Transaction
from .repositories import TransactionStore, TransactionStoreProtocol

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def to_money(value) -> Decimal:
    """Convert value to a Decimal rounded half-up to cents."""
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(amount=value, detail=f"'{value}' is not a valid amount.")


def split_amount(amount, fee_percentage) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Split a gross amount into (amount, platform_fee, net_amount).

    Raises:
        InvalidAmountError: amount is not positive or fee_percentage is
            outside 0..100
    """
    gross = to_money(amount)
    if gross <= 0:
        raise InvalidAmountError(amount=amount)

    try:
        pct = Decimal(str(fee_percentage))
        out_of_range = pct < 0 or pct > HUNDRED
    except (InvalidOperation, TypeError, ValueError):
        out_of_range = True
    if out_of_range:
        raise InvalidAmountError(
            amount=amount,
            detail=f"Platform fee percentage must be between 0 and 100, got {fee_percentage}."
        )

    platform_fee = (gross * pct / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)
    return gross, platform_fee, gross - platform_fee


class LedgerService:
    """
    Service for the marketplace ledger.

    Handles:
    - Job payments created once per hired application
    - Settling pending entries
    - Per-user financial summaries
    """

    def __init__(
        self,
        transactions: TransactionStoreProtocol = None,
        users: UserStoreProtocol = None,
    ):
        self.transactions = transactions or TransactionStore()
        self.users = users or UserStore()

    @property
    def default_fee_percentage(self) -> Decimal:
        return Decimal(str(getattr(settings, 'PLATFORM_FEE_PERCENTAGE', '10.00')))

    # ==================== PAYMENTS ====================

    def create_job_payment(
        self,
        job_id,
        employer_id,
        specialist_id,
        amount,
        fee_pct=None,
        application_id=None,
        payment_method: str = None,
        currency: str = 'USD',
        description: str = '',
    ) -> Transaction:
        """
        Record the payment for a hired application.

        A live (non-failed) payment for the same job and payee is returned
        as-is instead of creating a second one.

        Args:
            job_id: Job being paid for
            employer_id: Payer
            specialist_id: Payee
            amount: Gross amount
            fee_pct: Platform fee percentage, PLATFORM_FEE_PERCENTAGE by default
            application_id: Hired application, if any
            payment_method: credit_card, bank_transfer or paypal
            currency: ISO currency code

        Returns:
            The completed Transaction

        Raises:
            InvalidAmountError: amount <= 0 or fee_pct outside 0..100
        """
        fee_pct = self.default_fee_percentage if fee_pct is None else fee_pct
        gross, platform_fee, net_amount = split_amount(amount, fee_pct)

        existing = self.transactions.find_active_job_payment(job_id, specialist_id)
        if existing is not None:
            logger.info(
                f"Job payment {existing.transaction_id} already exists for job {job_id} "
                f"and payee {specialist_id}"
            )
            return existing

        try:
            with transaction.atomic():
                txn = self.transactions.create(
                    transaction_type=Transaction.TransactionType.JOB_PAYMENT,
                    status=Transaction.Status.COMPLETED,
                    amount=gross,
                    currency=currency or 'USD',
                    platform_fee=platform_fee,
                    platform_fee_percentage=Decimal(str(fee_pct)),
                    net_amount=net_amount,
                    payer_id=employer_id,
                    payee_id=specialist_id,
                    job_id=job_id,
                    application_id=application_id,
                    payment_method=payment_method or getattr(
                        settings, 'DEFAULT_PAYMENT_METHOD', Transaction.PaymentMethod.BANK_TRANSFER
                    ),
                    description=description or 'Payment for job completion',
                    completed_at=timezone.now(),
                )
                self._record_completion(txn)
        except IntegrityError:
            # Another worker created the payment between lookup and insert
            existing = self.transactions.find_active_job_payment(job_id, specialist_id)
            if existing is None:
                raise
            return existing

        logger.info(
            f"Job payment {txn.transaction_id} created: {gross} {txn.currency} "
            f"(fee {platform_fee}, net {net_amount}) for job {job_id}"
        )
        return txn

    def complete_transaction(self, transaction_id: str) -> Transaction:
        """
        Move a pending transaction to completed.

        Completing an already completed transaction is a no-op, and
        financial stats are only counted by the call that flipped the row.
        """
        with transaction.atomic():
            txn = self._get_or_404(transaction_id)
            if txn.status == Transaction.Status.FAILED:
                raise InvalidTransitionError(
                    current_status=txn.status,
                    requested_status=Transaction.Status.COMPLETED,
                )

            if self.transactions.mark_completed(transaction_id):
                txn.refresh_from_db()
                self._record_completion(txn)
                logger.info(f"Transaction {transaction_id} completed")
            else:
                txn.refresh_from_db()

        return txn

    def fail_transaction(self, transaction_id: str, reason: str = '') -> Transaction:
        """Move a pending transaction to failed."""
        txn = self._get_or_404(transaction_id)
        if txn.status == Transaction.Status.FAILED:
            return txn

        if not self.transactions.mark_failed(transaction_id, reason):
            txn.refresh_from_db()
            raise InvalidTransitionError(
                current_status=txn.status,
                requested_status=Transaction.Status.FAILED,
            )

        txn.refresh_from_db()
        logger.warning(f"Transaction {transaction_id} failed: {reason}")
        return txn

    def _record_completion(self, txn: Transaction) -> None:
        is_job_payment = txn.transaction_type == Transaction.TransactionType.JOB_PAYMENT
        self.users.record_payment_sent(txn.payer_id, txn.amount, job_completed=is_job_payment)
        self.users.record_payment_received(txn.payee_id, txn.net_amount, job_completed=is_job_payment)

    def _get_or_404(self, transaction_id: str) -> Transaction:
        txn = self.transactions.get(transaction_id)
        if txn is None:
            raise ResourceNotFoundError(resource_type='Transaction', resource_id=transaction_id)
        return txn

    # ==================== AMOUNT RESOLUTION ====================

    @staticmethod
    def resolve_payment_amount(job, application) -> Tuple[Optional[Decimal], str]:
        """
        Decide what a hire is worth.

        Precedence: agreed negotiation terms, the job's maximum salary, its
        minimum salary, then the applicant's proposed rate.

        Returns:
            (amount or None, currency)
        """
        negotiation = application.negotiation or {}
        final_terms = negotiation.get('final_terms') or {}
        if final_terms.get('amount') not in (None, ''):
            currency = final_terms.get('currency') or job.currency
            return Decimal(str(final_terms['amount'])), currency

        for candidate in (job.salary_max, job.salary_min):
            if candidate is not None:
                return Decimal(str(candidate)), job.currency

        if application.proposed_rate is not None:
            return Decimal(str(application.proposed_rate)), application.proposed_currency or job.currency

        return None, job.currency

    # ==================== REPORTING ====================

    def get_user_transactions(self, user) -> QuerySet:
        """All transactions where the user paid or was paid, newest first."""
        return self.transactions.for_user(getattr(user, 'pk', user))

    def get_financial_summary(self, user) -> Dict[str, Any]:
        """
        Totals over the user's completed transactions.

        Returns:
            total_paid, total_received, total_fees_paid, completed_jobs and
            total_transactions
        """
        user_id = getattr(user, 'pk', user)
        completed = Transaction.objects.filter(status=Transaction.Status.COMPLETED)

        paid = completed.filter(payer_id=user_id).aggregate(
            total=Sum('amount'),
            fees=Sum('platform_fee'),
            count=Count('id'),
        )
        received = completed.filter(payee_id=user_id).exclude(payer_id=user_id).aggregate(
            total=Sum('net_amount'),
            count=Count('id'),
        )

        return {
            'total_paid': paid['total'] or Decimal('0.00'),
            'total_received': received['total'] or Decimal('0.00'),
            'total_fees_paid': paid['fees'] or Decimal('0.00'),
            'completed_jobs': paid['count'],
            'total_transactions': paid['count'] + received['count'],
        }

