import bleach
from rest_framework import serializers


class AcknowledgeSerializer(serializers.Serializer):
    alertId = serializers.CharField()
    hospitalId = serializers.CharField(max_length=40, required=False, allow_blank=True)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    response = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate_response(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class EmergencyCreateSerializer(serializers.Serializer):
    """``message`` is checked by the broadcaster so its absence maps to MissingField."""
    hospitalId = serializers.CharField(max_length=40, required=False, allow_blank=True)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    message = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    type = serializers.CharField(required=False, allow_blank=True, max_length=50)
    priority = serializers.CharField(required=False, allow_blank=True, max_length=20)

    def validate_message(self, v):
        return bleach.clean((v or '').strip(), strip=True)
