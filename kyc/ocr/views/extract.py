from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from kyc.core.frames import TextCandidate
from ..serializers.input import TextExtractInputSerializer
from ..serializers.output import TextExtractOutputSerializer
from ..services.extractor import TextFieldExtractor
from ..services.provider import join_candidates

@extend_schema(
    tags=["Document OCR"],
    request=TextExtractInputSerializer,
    responses={
        200: OpenApiResponse(response=TextExtractOutputSerializer, description="Champs extraits du texte reconnu"),
        400: OpenApiResponse(description="Requête invalide"),
    },
    examples=[
        OpenApiExample(
            "Requête",
            value={"candidates": [
                {"text": "NEW YORK DRIVER LICENSE", "confidence": 0.93},
                {"text": "DOB 04/15/1985 EXP 04/15/2027 CLASS D", "confidence": 0.88},
            ]},
            request_only=True,
        ),
        OpenApiExample(
            "Réponse",
            value={
                "text": "NEW YORK DRIVER LICENSE DOB 04/15/1985 EXP 04/15/2027 CLASS D",
                "confidence": 0.905,
                "fields": {"State": "New York", "Date of Birth": "04/15/1985",
                           "Expiration Date": "04/15/2027", "Class": "D"},
            },
            response_only=True,
        ),
    ],
)
class TextExtractView(APIView):
    """
    POST /document/text/extract
    Accepte un texte déjà joint ou les candidats bruts du moteur OCR.
    """
    serializer_class = TextExtractInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        if "candidates" in data:
            text, confidence = join_candidates([TextCandidate(**c) for c in data["candidates"]])
        else:
            text, confidence = data["text"], 1.0

        fields = TextFieldExtractor().extract(text)
        return Response({"text": text, "confidence": confidence, "fields": fields}, status=200)
