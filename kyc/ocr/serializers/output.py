from rest_framework import serializers

class TextExtractOutputSerializer(serializers.Serializer):
    text = serializers.CharField()          # texte joint analysé
    confidence = serializers.FloatField()   # moyenne des candidats (1.0 si texte brut)
    fields = serializers.DictField(child=serializers.CharField())
