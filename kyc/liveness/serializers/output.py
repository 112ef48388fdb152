from rest_framework import serializers

class LivenessScoreOutputSerializer(serializers.Serializer):
    score = serializers.FloatField()            # 0..1
    detections = serializers.IntegerField()
    average_confidence = serializers.FloatField()
    quality = serializers.ChoiceField(choices=["Poor", "Fair", "Good", "Excellent"])
    elapsed_s = serializers.FloatField()
