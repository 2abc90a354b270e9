"""
Jobs API Views

Endpoints:
    POST /api/v1/applications/<id>/status/      Change an application's status
    POST /api/v1/applications/bulk-status/      Accept or reject many applications
    POST /api/v1/jobs/<id>/apply/               Apply to a job
"""

import logging

from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from api.base import APIResponse
from api.exceptions import ResourceNotFoundError

from .models import Job
from .serializers import (
    ApplicationBulkStatusSerializer,
    ApplicationCreateSerializer,
    ApplicationSerializer,
    ApplicationStatusSerializer,
)
from .services import ApplicationService, StatusTransitionEngine

logger = logging.getLogger(__name__)


class ApplicationStatusView(APIView):
    """Change the status of one application."""

    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = ApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = StatusTransitionEngine().transition(
            pk,
            serializer.validated_data['status'],
            request.user.id,
            notes=serializer.validated_data.get('notes', ''),
        )

        data = ApplicationSerializer(result.application).data
        data['warnings'] = result.warnings
        return APIResponse.success(
            data=data,
            message=f"Application status updated to {result.application.status}.",
        )


class ApplicationBulkStatusView(APIView):
    """Accept or reject several applications; each one is processed on its own."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ApplicationBulkStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        summary = StatusTransitionEngine().bulk_transition(
            serializer.validated_data['application_ids'],
            serializer.validated_data['status'],
            request.user.id,
        )
        return APIResponse.success(
            data=summary,
            message=f"{summary['updated']} applications updated.",
        )


class JobApplyView(APIView):
    """Submit an application to a job."""

    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        job = Job.objects.select_related('posted_by').filter(pk=pk).first()
        if job is None:
            raise ResourceNotFoundError(resource_type='Job', resource_id=pk)

        serializer = ApplicationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = ApplicationService().apply(job, request.user, **serializer.validated_data)
        return APIResponse.created(
            data=ApplicationSerializer(application).data,
            message='Application submitted successfully.',
        )
