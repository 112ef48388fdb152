from dataclasses import asdict

from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from ..serializers.input import MatchInputSerializer
from ..serializers.output import MatchOutputSerializer
from ..services.matcher import DocumentMatcher

@extend_schema(
    tags=["Document Validation"],
    request=MatchInputSerializer,
    responses={200: OpenApiResponse(MatchOutputSerializer, description="Cohérence recto/verso")},
    examples=[
        OpenApiExample(
            "Requête",
            value={
                "front_fields": {"Date of Birth": "04/15/1985", "Driver License Number": "A1234567"},
                "back_fields": {"Date of Birth": "04/15/1985", "License Number": "A1234567"},
                "front_text": "DOB 04/15/1985 DLN A1234567",
                "back_text": "DBB04151985 DAQA1234567",
            },
            request_only=True,
        ),
    ],
)
class DocumentMatchView(APIView):
    """POST /document/match"""
    serializer_class = MatchInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        res = DocumentMatcher().match(
            front=data["front_fields"],
            back=data["back_fields"],
            front_text=data.get("front_text", ""),
            back_text=data.get("back_text", ""),
        )
        return Response({
            "percentage": res.percentage,
            "confidence_level": res.confidence_level,
            "score": res.score,
            "max_score": res.max_score,
            "word_matches": res.word_matches,
            "comparisons": [asdict(c) for c in res.comparisons],
        }, status=200)
