from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from kyc.core.frames import Frame, FaceBox, FaceDetection
from ..serializers.input import LivenessScoreInputSerializer
from ..serializers.output import LivenessScoreOutputSerializer
from ..services.liveness_service import LivenessService

@extend_schema(
    tags=["Liveness"],
    request=LivenessScoreInputSerializer,
    responses={
        200: OpenApiResponse(response=LivenessScoreOutputSerializer, description="Score de liveness [0,1] + palier"),
        400: OpenApiResponse(description="Requête invalide"),
    },
    examples=[
        OpenApiExample(
            "Requête",
            value={"frames": [
                {"offset_s": 0.0, "detections": [{"box": {"x": 0.3, "y": 0.25, "width": 0.4, "height": 0.5}, "confidence": 0.97}]},
                {"offset_s": 0.1, "detections": []},
            ]},
            request_only=True,
        ),
        OpenApiExample(
            "Réponse",
            value={"score": 0.694, "detections": 1, "average_confidence": 0.97, "quality": "Poor", "elapsed_s": 0.1},
            response_only=True,
        ),
    ],
)
class LivenessScoreView(APIView):
    """
    POST /liveness/score
    Sans offset_s, les frames sont supposées espacées de TICK_S.
    """
    serializer_class = LivenessScoreInputSerializer

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        conf = settings.CHECKID_LIVENESS
        tick = settings.CHECKID_SCAN.get("TICK_S", 0.1)
        duration = data.get("duration_s", conf.get("DURATION_S", 5.0))

        frames = []
        for i, f in enumerate(data["frames"]):
            detections = tuple(
                FaceDetection(box=FaceBox(**d["box"]), confidence=d["confidence"])
                for d in f.get("detections", [])
            )
            offset = f.get("offset_s", i * tick)
            frames.append((offset, Frame(index=i, face_detections=detections)))

        svc = LivenessService(expected_detections=conf.get("EXPECTED_DETECTIONS", 50))
        res = svc.run(frames=frames, duration_s=duration)
        return Response(res.as_dict(), status=200)
