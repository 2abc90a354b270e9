# Generated for the initial jobs schema

import django.db.models.deletion
import django.utils.timezone
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Job',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name='UUID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('total_applications_received', models.PositiveIntegerField(default=0)),
                ('total_hires', models.PositiveIntegerField(default=0)),
                ('total_rejections', models.PositiveIntegerField(default=0)),
                ('hiring_success_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5)),
                ('response_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(
                    choices=[
                        ('active', 'Active'),
                        ('reviewing', 'Reviewing'),
                        ('completed', 'Completed'),
                        ('paused', 'Paused'),
                        ('cancelled', 'Cancelled')
                    ],
                    db_index=True,
                    default='active',
                    max_length=20
                )),
                ('salary_min', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('salary_max', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('currency', models.CharField(default='USD', max_length=10)),
                ('application_deadline', models.DateTimeField(blank=True, null=True)),
                ('applications_count', models.PositiveIntegerField(default=0)),
                ('posted_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='posted_jobs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Job',
                'verbose_name_plural': 'Jobs',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['posted_by', 'status'], name='jobs_job_owner_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Application',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name='UUID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('version', models.PositiveIntegerField(default=1, help_text='Record version for optimistic locking.', verbose_name='Version')),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Pending'),
                        ('reviewed', 'Reviewed'),
                        ('accepted', 'Accepted'),
                        ('rejected', 'Rejected'),
                        ('withdrawn', 'Withdrawn')
                    ],
                    db_index=True,
                    default='pending',
                    max_length=20
                )),
                ('cover_letter', models.TextField(blank=True)),
                ('resume_url', models.URLField(blank=True, max_length=500)),
                ('proposed_rate', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('proposed_currency', models.CharField(blank=True, max_length=10)),
                ('estimated_completion_time', models.CharField(blank=True, max_length=100)),
                ('availability', models.CharField(blank=True, max_length=100)),
                ('portfolio_items', models.JSONField(blank=True, default=list)),
                ('negotiation', models.JSONField(blank=True, default=dict)),
                ('applied_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('hired_at', models.DateTimeField(blank=True, null=True)),
                ('rejected_at', models.DateTimeField(blank=True, null=True)),
                ('withdrawn_at', models.DateTimeField(blank=True, null=True)),
                ('time_to_review', models.PositiveIntegerField(blank=True, null=True)),
                ('time_to_decision', models.PositiveIntegerField(blank=True, null=True)),
                ('view_count', models.PositiveIntegerField(default=0)),
                ('last_viewed_at', models.DateTimeField(blank=True, null=True)),
                ('decision_counted_at', models.DateTimeField(blank=True, editable=False, null=True)),
                ('applicant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to=settings.AUTH_USER_MODEL)),
                ('job', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='jobs.job')),
            ],
            options={
                'verbose_name': 'Application',
                'verbose_name_plural': 'Applications',
                'ordering': ['-applied_at'],
                'indexes': [
                    models.Index(fields=['job', 'status'], name='jobs_app_job_status_idx'),
                    models.Index(fields=['applicant', 'applied_at'], name='jobs_app_applicant_applied_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('job', 'applicant'), name='jobs_application_unique_job_applicant'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ApplicationActivity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_type', models.CharField(
                    choices=[
                        ('created', 'Application Created'),
                        ('status_change', 'Status Changed')
                    ],
                    max_length=30
                )),
                ('old_value', models.CharField(blank=True, max_length=200)),
                ('new_value', models.CharField(blank=True, max_length=200)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='jobs.application')),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Application Activity',
                'verbose_name_plural': 'Application Activities',
                'ordering': ['-created_at'],
            },
        ),
    ]
