from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from ..serializers.input import PixelBufferInputSerializer
from ..serializers.output import FrameQualityOutputSerializer
from ..services.analyzer import QualityAnalyzer
from ..services.pixels import decode_pixel_buffer

@extend_schema(
    tags=["Frame Quality"],
    request=PixelBufferInputSerializer,
    responses={
        200: OpenApiResponse(response=FrameQualityOutputSerializer, description="Luminosité, contraste, netteté et palier"),
        400: OpenApiResponse(description="INVALID_*"),
    },
    examples=[
        OpenApiExample(
            "Requête",
            value={"pixels_base64": "<...>", "width": 640, "height": 480, "bytes_per_row": 2560, "bytes_per_pixel": 4},
            request_only=True,
        ),
        OpenApiExample(
            "Réponse",
            value={"brightness": 121.4, "contrast": 42.0, "sharpness": 23.8, "tier": "Excellent"},
            response_only=True,
        ),
    ],
)
class FrameQualityView(APIView):
    """
    POST /frame/quality
    Géométrie dégénérée -> Poor avec métriques à 0 (pas d'erreur).
    """
    serializer_class = PixelBufferInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            buf = decode_pixel_buffer(
                pixels_base64=data["pixels_base64"],
                width=data["width"],
                height=data["height"],
                bytes_per_row=data.get("bytes_per_row"),
                bytes_per_pixel=data.get("bytes_per_pixel", 4),
            )
        except ValueError as e:
            return Response({"error": {"code": str(e), "message": "Invalid pixel buffer"}}, status=400)

        q = QualityAnalyzer().analyze(buf)
        return Response(q.as_dict(), status=200)
