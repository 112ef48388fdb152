from rest_framework import serializers

from kyc.core.vocabulary import SIDES

class CompletenessInputSerializer(serializers.Serializer):
    side = serializers.ChoiceField(choices=SIDES)
    fields = serializers.DictField(child=serializers.CharField(allow_blank=True))

class MatchInputSerializer(serializers.Serializer):
    front_fields = serializers.DictField(child=serializers.CharField(allow_blank=True))
    back_fields = serializers.DictField(child=serializers.CharField(allow_blank=True))
    front_text = serializers.CharField(required=False, allow_blank=True, default="")
    back_text = serializers.CharField(required=False, allow_blank=True, default="")
