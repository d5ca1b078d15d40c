import bleach
from rest_framework import serializers


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class VisitCreateSerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=40)
    hospitalId = serializers.CharField(max_length=40, required=False, allow_blank=True)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    diagnosis = serializers.CharField()
    prescription = serializers.CharField()
    doctorName = serializers.CharField(max_length=255)
    labResults = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_diagnosis(self, v):
        return _clean(v)

    def validate_prescription(self, v):
        return _clean(v)

    def validate_labResults(self, v):
        return _clean(v)

    def validate_notes(self, v):
        return _clean(v)
