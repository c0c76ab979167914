"""
Core views providing infrastructure endpoints and view helpers.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks, plus the
mixin that turns ServiceResult failures into HTTP responses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

if TYPE_CHECKING:
    from core.services import ServiceResult

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check database probe failed")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JsonResponse(health_status, status=status_code)


class ServiceResponseMixin:
    """
    Render ServiceResult failures as DRF responses.

    Error codes map to HTTP statuses through ``error_status_map``;
    unknown codes fall back to 400. Views extend the map when they
    introduce new codes.

    Usage:
        class ChatViewSet(ServiceResponseMixin, viewsets.ViewSet):
            def create(self, request):
                result = ChatService.create_chat(...)
                if not result.success:
                    return self.failure_response(result)
                return Response(ChatSerializer(result.data).data, status=201)
    """

    error_status_map: dict[str, int] = {
        "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
        "NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
        "CONFLICT": status.HTTP_409_CONFLICT,
    }

    def failure_response(self, result: ServiceResult) -> Response:
        """Build the error response for a failed ServiceResult."""
        status_code = self.error_status_map.get(
            result.error_code, status.HTTP_400_BAD_REQUEST
        )
        return Response(result.to_response(), status=status_code)
