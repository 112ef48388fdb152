from rest_framework import serializers

class FaceBoxSerializer(serializers.Serializer):
    x = serializers.FloatField(min_value=0.0, max_value=1.0)
    y = serializers.FloatField(min_value=0.0, max_value=1.0)
    width = serializers.FloatField(min_value=0.0, max_value=1.0)
    height = serializers.FloatField(min_value=0.0, max_value=1.0)

class FaceDetectionSerializer(serializers.Serializer):
    box = FaceBoxSerializer()
    confidence = serializers.FloatField(min_value=0.0, max_value=1.0)

class LivenessFrameSerializer(serializers.Serializer):
    offset_s = serializers.FloatField(min_value=0.0, required=False)
    detections = FaceDetectionSerializer(many=True, default=list)

class LivenessScoreInputSerializer(serializers.Serializer):
    frames = LivenessFrameSerializer(many=True)
    duration_s = serializers.FloatField(required=False)
