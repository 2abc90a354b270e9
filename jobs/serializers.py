"""
Jobs Serializers - DRF Serializers.

Application Serializers:
    - ApplicationSerializer: Application detail view
    - ApplicationStatusSerializer: Requested status change
    - ApplicationBulkStatusSerializer: Bulk accept/reject
    - ApplicationCreateSerializer: New application payload
"""

from rest_framework import serializers

from .models import Application


# ==================== APPLICATION SERIALIZERS ====================

class ApplicationSerializer(serializers.ModelSerializer):
    """Application detail serializer (read-only)."""
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Application
        fields = [
            'id', 'uuid', 'job', 'applicant', 'status', 'status_display',
            'cover_letter', 'resume_url', 'proposed_rate', 'proposed_currency',
            'estimated_completion_time', 'availability', 'portfolio_items',
            'negotiation', 'applied_at', 'reviewed_at', 'hired_at',
            'rejected_at', 'withdrawn_at', 'time_to_review', 'time_to_decision',
            'view_count', 'last_viewed_at', 'version', 'updated_at',
        ]
        read_only_fields = fields


class ApplicationStatusSerializer(serializers.Serializer):
    """Serializer for a requested status change."""
    status = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ApplicationBulkStatusSerializer(serializers.Serializer):
    """Serializer for bulk status changes."""
    application_ids = serializers.ListField(
        child=serializers.IntegerField(),
        min_length=1,
        max_length=100
    )
    status = serializers.ChoiceField(choices=[
        Application.ApplicationStatus.ACCEPTED,
        Application.ApplicationStatus.REJECTED,
    ])


class ApplicationCreateSerializer(serializers.Serializer):
    """Serializer for a new application."""
    cover_letter = serializers.CharField(required=False, allow_blank=True)
    resume_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
    proposed_rate = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    proposed_currency = serializers.CharField(required=False, allow_blank=True, max_length=10)
    estimated_completion_time = serializers.CharField(required=False, allow_blank=True, max_length=100)
    availability = serializers.CharField(required=False, allow_blank=True, max_length=100)
    portfolio_items = serializers.ListField(child=serializers.DictField(), required=False)
    negotiation = serializers.DictField(required=False)
