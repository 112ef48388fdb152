from rest_framework import serializers

class TextCandidateSerializer(serializers.Serializer):
    text = serializers.CharField(allow_blank=True, trim_whitespace=False)
    confidence = serializers.FloatField(min_value=0.0, max_value=1.0, default=1.0)

class TextExtractInputSerializer(serializers.Serializer):
    text = serializers.CharField(required=False, allow_blank=True)
    candidates = TextCandidateSerializer(many=True, required=False)

    def validate(self, attrs):
        if "text" not in attrs and "candidates" not in attrs:
            raise serializers.ValidationError("text or candidates is required")
        return attrs
