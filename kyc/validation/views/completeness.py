from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from ..serializers.input import CompletenessInputSerializer
from ..serializers.output import ProgressOutputSerializer
from ..services.validator import CompletenessValidator, DEFAULT_COMPLETE_THRESHOLD

@extend_schema(
    tags=["Document Validation"],
    request=CompletenessInputSerializer,
    responses={200: OpenApiResponse(ProgressOutputSerializer, description="Pourcentage, palier, champs manquants")},
    examples=[
        OpenApiExample(
            "Requête",
            value={"side": "front", "fields": {"Name": "Jane Smith", "Date of Birth": "04/15/1985"}},
            request_only=True,
        ),
    ],
)
class CompletenessView(APIView):
    """POST /document/completeness"""
    serializer_class = CompletenessInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        threshold = settings.CHECKID_SCAN.get("COMPLETE_THRESHOLD", DEFAULT_COMPLETE_THRESHOLD)
        snap = CompletenessValidator(complete_threshold=threshold).evaluate(data["fields"], data["side"])
        return Response(snap.as_dict(), status=200)
