import uuid

from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from ..serializers.input import ScanInputSerializer, ScanAsyncInputSerializer
from ..serializers.output import AggregateResultOutputSerializer, ScanAcceptedOutputSerializer
from ..services.payload import frames_from_payload
from ..services.runner import run_batch
from ..tasks import run_scan_task

SCAN_REQUEST_EXAMPLE = {
    "side": "back",
    "frames": [
        {"barcode_candidates": [{"payload": "^DCSDOE$DACJOHN$DBB01011990", "symbology": "PDF417", "confidence": 0.92}]},
        {"barcode_candidates": []},
    ],
}

@extend_schema(
    tags=["Document Scan"],
    request=ScanInputSerializer,
    responses={
        200: OpenApiResponse(response=AggregateResultOutputSerializer, description="Résultat agrégé de la session"),
        400: OpenApiResponse(description="INVALID_* / TOO_MANY_FRAMES"),
    },
    examples=[OpenApiExample("Requête", value=SCAN_REQUEST_EXAMPLE, request_only=True)],
)
class ScanView(APIView):
    """
    POST /document/scan
    Les frames sont rejouées dans l'ordre, une par tick, jusqu'à l'échéance
    ou la complétude.
    """
    serializer_class = ScanInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            frames = frames_from_payload(data["frames"])
            result = run_batch(frames, data["side"], stop_when_complete=data["stop_when_complete"])
        except ValueError as e:
            return Response({"error": {"code": str(e), "message": "Invalid scan request"}}, status=400)
        return Response(result.as_dict(), status=200)


@extend_schema(
    tags=["Document Scan"],
    request=ScanAsyncInputSerializer,
    responses={202: OpenApiResponse(ScanAcceptedOutputSerializer)},
    examples=[OpenApiExample(
        "Requête",
        value={**SCAN_REQUEST_EXAMPLE, "callback_url": "https://client.example.com/hooks/scan"},
        request_only=True,
    )],
)
class ScanAsyncView(APIView):
    """
    POST /document/scan/async → 202 + scan_id
    Le résultat est livré à callback_url (POST signé, retry exponentiel).
    """
    serializer_class = ScanAsyncInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        scan_id = f"scn_{uuid.uuid4().hex}"
        run_scan_task.delay(
            scan_id=scan_id,
            side=data["side"],
            frames=data["frames"],
            callback_url=data["callback_url"],
            stop_when_complete=data["stop_when_complete"],
        )
        return Response({"scan_id": scan_id, "status": "queued"}, status=202)
