from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from ..serializers.input import AuthenticityInputSerializer
from ..serializers.output import AuthenticityOutputSerializer
from ..services.authenticity import AuthenticityAnalyzer
from ..services.pixels import decode_pixel_buffer


def _buffer(data):
    return decode_pixel_buffer(
        pixels_base64=data["pixels_base64"],
        width=data["width"],
        height=data["height"],
        bytes_per_row=data.get("bytes_per_row"),
        bytes_per_pixel=data.get("bytes_per_pixel", 4),
    )


@extend_schema(
    tags=["Frame Quality"],
    request=AuthenticityInputSerializer,
    responses={
        200: OpenApiResponse(response=AuthenticityOutputSerializer, description="Composantes, score, niveau"),
        400: OpenApiResponse(description="INVALID_* | EMPTY_IMAGE"),
    },
    examples=[
        OpenApiExample(
            "Réponse",
            value={
                "digital_manipulation": 60.0, "printing_artifacts": 100.0, "holographic": 50.0,
                "security_features": 30.0, "consistency": 100.0, "format_validation": 100.0,
                "security_pattern": 51.2, "material": 45.7, "score": 63.95,
                "level": "Suspicious", "confidence": "Medium",
            },
            response_only=True,
        ),
    ],
)
class AuthenticityView(APIView):
    """
    POST /frame/authenticity
    Recto obligatoire ; sans verso la cohérence vaut 50.
    """
    serializer_class = AuthenticityInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            front = _buffer(data["front"])
            back = _buffer(data["back"]) if data.get("back") else None
        except ValueError as e:
            return Response({"error": {"code": str(e), "message": "Invalid pixel buffer"}}, status=400)

        try:
            report = AuthenticityAnalyzer().analyze(front, back)
        except ValueError as e:
            return Response({"error": {"code": str(e), "message": "Front image is empty"}}, status=400)
        return Response(report.as_dict(), status=200)
