# Generated for the initial finance schema

import django.db.models.deletion
import finance.models
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('jobs', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('transaction_id', models.CharField(default=finance.models.generate_transaction_id, editable=False, max_length=40, unique=True)),
                ('transaction_type', models.CharField(
                    choices=[
                        ('job_payment', 'Job Payment'),
                        ('withdrawal', 'Withdrawal')
                    ],
                    default='job_payment',
                    max_length=20
                )),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Pending'),
                        ('completed', 'Completed'),
                        ('failed', 'Failed')
                    ],
                    db_index=True,
                    default='pending',
                    max_length=20
                )),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('currency', models.CharField(default='USD', max_length=10)),
                ('platform_fee', models.DecimalField(decimal_places=2, max_digits=12)),
                ('platform_fee_percentage', models.DecimalField(decimal_places=2, max_digits=5)),
                ('net_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('payment_method', models.CharField(
                    choices=[
                        ('credit_card', 'Credit Card'),
                        ('bank_transfer', 'Bank Transfer'),
                        ('paypal', 'PayPal')
                    ],
                    default='bank_transfer',
                    max_length=20
                )),
                ('description', models.CharField(blank=True, max_length=255)),
                ('failure_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('application', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='jobs.application')),
                ('job', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='jobs.job')),
                ('payee', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments_received', to=settings.AUTH_USER_MODEL)),
                ('payer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments_sent', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Transaction',
                'verbose_name_plural': 'Transactions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['payer', 'status'], name='finance_txn_payer_status_idx'),
                    models.Index(fields=['payee', 'status'], name='finance_txn_payee_status_idx'),
                    models.Index(fields=['job', 'payee'], name='finance_txn_job_payee_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(amount=models.F('net_amount') + models.F('platform_fee')),
                        name='finance_transaction_net_plus_fee_equals_amount'
                    ),
                    models.CheckConstraint(
                        condition=models.Q(amount__gt=0),
                        name='finance_transaction_amount_positive'
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(('transaction_type', 'job_payment'), models.Q(('status', 'failed'), _negated=True)),
                        fields=('job', 'payee'),
                        name='finance_transaction_unique_active_job_payment'
                    ),
                ],
            },
        ),
    ]
