from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from marketplace.api.serializers import HealthResponseSerializer


@extend_schema(
    operation_id="healthcheck",
    summary="Service health",
    responses={200: HealthResponseSerializer},
    tags=["System"],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def healthcheck(request):
    return Response({"status": "ok", "timestamp": timezone.now()})
