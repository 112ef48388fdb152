from rest_framework import serializers

class BarcodeCandidateSerializer(serializers.Serializer):
    payload = serializers.CharField(allow_blank=True, trim_whitespace=False)
    symbology = serializers.CharField(default="PDF417")
    confidence = serializers.FloatField(min_value=0.0, max_value=1.0, default=1.0)

class BarcodeDecodeInputSerializer(serializers.Serializer):
    payload = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    candidates = BarcodeCandidateSerializer(many=True, required=False)

    def validate(self, attrs):
        if not attrs.get("payload") and not attrs.get("candidates"):
            raise serializers.ValidationError("payload or candidates is required")
        return attrs
