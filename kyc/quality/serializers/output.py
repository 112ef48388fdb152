from rest_framework import serializers

class FrameQualityOutputSerializer(serializers.Serializer):
    brightness = serializers.FloatField()
    contrast = serializers.FloatField()
    sharpness = serializers.FloatField()
    tier = serializers.ChoiceField(choices=["Poor", "Fair", "Good", "Excellent"])


class AuthenticityOutputSerializer(serializers.Serializer):
    digital_manipulation = serializers.FloatField()
    printing_artifacts = serializers.FloatField()
    holographic = serializers.FloatField()
    security_features = serializers.FloatField()
    consistency = serializers.FloatField()
    format_validation = serializers.FloatField()
    security_pattern = serializers.FloatField()
    material = serializers.FloatField()
    score = serializers.FloatField()
    level = serializers.ChoiceField(
        choices=["Authentic", "Likely Authentic", "Suspicious", "Likely Fake", "Fake Detected"],
    )
    confidence = serializers.CharField()
