from rest_framework import serializers

class ProgressOutputSerializer(serializers.Serializer):
    side = serializers.CharField()
    required = serializers.ListField(child=serializers.CharField())
    missing = serializers.ListField(child=serializers.CharField())
    percentage = serializers.FloatField()
    tier = serializers.ChoiceField(choices=["Excellent", "Complete", "Partial", "Incomplete"])
    is_complete = serializers.BooleanField()
    feedback = serializers.ChoiceField(choices=["Poor", "Good", "Excellent"])
    field_status = serializers.DictField(child=serializers.CharField())

class MatchOutputSerializer(serializers.Serializer):
    percentage = serializers.IntegerField()
    confidence_level = serializers.CharField()
    score = serializers.IntegerField()
    max_score = serializers.IntegerField()
    word_matches = serializers.ListField(child=serializers.CharField())
    comparisons = serializers.ListField(child=serializers.DictField())
