"""
Finance Models - Marketplace ledger.

A Transaction records money moving from an employer (payer) to a
specialist (payee) for a job. The platform keeps platform_fee and the
payee receives net_amount, so net_amount + platform_fee always equals the
gross amount.
"""

import string
import time
import uuid

from django.conf import settings
from django.db import models
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _


def generate_transaction_id() -> str:
    """TXN_<epoch millis>_<6 upper-case characters>"""
    suffix = get_random_string(6, allowed_chars=string.ascii_uppercase + string.digits)
    return f"TXN_{int(time.time() * 1000)}_{suffix}"


class Transaction(models.Model):
    """
    Ledger entry between a payer and a payee.
    Job payments are created by the hire of an application.
    """

    class TransactionType(models.TextChoices):
        JOB_PAYMENT = 'job_payment', _('Job Payment')
        WITHDRAWAL = 'withdrawal', _('Withdrawal')

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        COMPLETED = 'completed', _('Completed')
        FAILED = 'failed', _('Failed')

    class PaymentMethod(models.TextChoices):
        CREDIT_CARD = 'credit_card', _('Credit Card')
        BANK_TRANSFER = 'bank_transfer', _('Bank Transfer')
        PAYPAL = 'paypal', _('PayPal')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    transaction_id = models.CharField(
        max_length=40,
        unique=True,
        default=generate_transaction_id,
        editable=False
    )
    transaction_type = models.CharField(
        max_length=20,
        choices=TransactionType.choices,
        default=TransactionType.JOB_PAYMENT
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )

    # Amounts
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=10, default='USD')
    platform_fee = models.DecimalField(max_digits=12, decimal_places=2)
    platform_fee_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    net_amount = models.DecimalField(max_digits=12, decimal_places=2)

    # Parties
    payer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='payments_sent'
    )
    payee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='payments_received'
    )

    # What was paid for
    job = models.ForeignKey(
        'jobs.Job',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )
    application = models.ForeignKey(
        'jobs.Application',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.BANK_TRANSFER
    )
    description = models.CharField(max_length=255, blank=True)
    failure_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Transaction')
        verbose_name_plural = _('Transactions')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['payer', 'status'], name='finance_txn_payer_status_idx'),
            models.Index(fields=['payee', 'status'], name='finance_txn_payee_status_idx'),
            models.Index(fields=['job', 'payee'], name='finance_txn_job_payee_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount=models.F('net_amount') + models.F('platform_fee')),
                name='finance_transaction_net_plus_fee_equals_amount'
            ),
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='finance_transaction_amount_positive'
            ),
            # One live payment per job and payee
            models.UniqueConstraint(
                fields=['job', 'payee'],
                condition=(
                    models.Q(transaction_type='job_payment') &
                    ~models.Q(status='failed')
                ),
                name='finance_transaction_unique_active_job_payment'
            ),
        ]

    def __str__(self):
        return f"{self.transaction_id} - {self.status} - {self.amount} {self.currency}"
