from rest_framework import serializers

class PixelBufferInputSerializer(serializers.Serializer):
    pixels_base64 = serializers.CharField(allow_blank=True)
    width = serializers.IntegerField()
    height = serializers.IntegerField()
    bytes_per_row = serializers.IntegerField(required=False)
    bytes_per_pixel = serializers.IntegerField(default=4)


class AuthenticityInputSerializer(serializers.Serializer):
    front = PixelBufferInputSerializer()
    back = PixelBufferInputSerializer(required=False)
