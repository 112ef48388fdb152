from rest_framework import serializers

from kyc.core.vocabulary import SIDES
from kyc.barcode.serializers.input import BarcodeCandidateSerializer
from kyc.ocr.serializers.input import TextCandidateSerializer
from kyc.quality.serializers.input import PixelBufferInputSerializer

class ScanFrameSerializer(serializers.Serializer):
    text_candidates = TextCandidateSerializer(many=True, required=False)
    barcode_candidates = BarcodeCandidateSerializer(many=True, required=False)
    pixels = PixelBufferInputSerializer(required=False)

class ScanInputSerializer(serializers.Serializer):
    side = serializers.ChoiceField(choices=SIDES)
    frames = ScanFrameSerializer(many=True)
    stop_when_complete = serializers.BooleanField(default=True)

class ScanAsyncInputSerializer(ScanInputSerializer):
    callback_url = serializers.URLField()
