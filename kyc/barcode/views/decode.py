from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from kyc.core.frames import BarcodeCandidate
from ..serializers.input import BarcodeDecodeInputSerializer
from ..serializers.output import BarcodeDecodeOutputSerializer
from ..services.decoder import BarcodeFieldDecoder, to_canonical
from ..services.provider import select_candidate

@extend_schema(
    tags=["Document Barcode"],
    request=BarcodeDecodeInputSerializer,
    responses={
        200: OpenApiResponse(response=BarcodeDecodeOutputSerializer, description="Champs décodés (ANSI / AAMVA / brut)"),
        400: OpenApiResponse(description="Requête invalide"),
    },
    examples=[
        OpenApiExample(
            "Requête",
            value={"payload": "^DCSDOE$DACJOHN$DBB01011990$DBA01012030$DCAC1234567"},
            request_only=True,
        ),
        OpenApiExample(
            "Réponse",
            value={
                "shape": "aamva",
                "fields": {
                    "Name": "John Doe",
                    "Driver License Number": "C1234567",
                    "Last Name": "Doe",
                    "First Name": "John",
                    "Date of Birth": "01/01/1990",
                    "Expiration Date": "01/01/2030",
                    "License Number": "C1234567",
                },
                "native_fields": {"Last Name": "Doe", "First Name": "John"},
            },
            response_only=True,
        ),
    ],
)
class BarcodeDecodeView(APIView):
    """
    POST /document/barcode/decode
    Un payload malformé n'est jamais une erreur : les champs non décodés sont absents.
    """
    serializer_class = BarcodeDecodeInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        payload = data.get("payload")
        if not payload:
            chosen = select_candidate([BarcodeCandidate(**c) for c in data.get("candidates", [])])
            payload = chosen.payload if chosen else ""

        native, shape = BarcodeFieldDecoder().decode_native(payload)
        return Response({
            "shape": shape,
            "fields": to_canonical(native),
            "native_fields": native,
        }, status=200)
