from rest_framework import serializers

class BarcodeDecodeOutputSerializer(serializers.Serializer):
    shape = serializers.ChoiceField(choices=["ansi", "aamva", "raw"], allow_null=True)
    fields = serializers.DictField(child=serializers.CharField())  # FieldMap canonique
    native_fields = serializers.DictField(child=serializers.CharField())
