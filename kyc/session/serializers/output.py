from rest_framework import serializers

class FrameAnalysisOutputSerializer(serializers.Serializer):
    index = serializers.IntegerField()
    confidence = serializers.FloatField()
    quality = serializers.CharField()
    barcode_detected = serializers.BooleanField()
    text_length = serializers.IntegerField()

class AggregateResultOutputSerializer(serializers.Serializer):
    side = serializers.CharField()
    fields = serializers.DictField(child=serializers.CharField())
    field_status = serializers.DictField(child=serializers.CharField())
    required = serializers.ListField(child=serializers.CharField())
    missing = serializers.ListField(child=serializers.CharField())
    percentage = serializers.FloatField()
    tier = serializers.ChoiceField(choices=["Excellent", "Complete", "Partial", "Incomplete"])
    is_complete = serializers.BooleanField()
    overall_quality = serializers.FloatField()
    frame_count = serializers.IntegerField()
    average_confidence = serializers.FloatField()
    elapsed_s = serializers.FloatField()
    frames = FrameAnalysisOutputSerializer(many=True)

class ScanAcceptedOutputSerializer(serializers.Serializer):
    scan_id = serializers.CharField()
    status = serializers.CharField()
