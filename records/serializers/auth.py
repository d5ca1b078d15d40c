import bleach
from rest_framework import serializers

from records.models import BLOOD_TYPE_CHOICES


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class PatientRegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(required=False, allow_blank=True, write_only=True)
    dateOfBirth = serializers.DateField()
    bloodGroup = serializers.ChoiceField(choices=BLOOD_TYPE_CHOICES)
    emergencyContact = serializers.CharField(max_length=255)
    address = serializers.CharField()
    registeredBy = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_name(self, v):
        v = _clean(v)
        if len(v) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters')
        return v

    def validate_emergencyContact(self, v):
        return _clean(v)

    def validate_address(self, v):
        return _clean(v)


class HospitalRegisterSerializer(serializers.Serializer):
    hospitalName = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_hospitalName(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Hospital name cannot be empty')
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class PatientLoginSerializer(LoginSerializer):
    userId = serializers.CharField(required=False, allow_blank=True)


class HospitalLoginSerializer(LoginSerializer):
    hospitalId = serializers.CharField(required=False, allow_blank=True)
