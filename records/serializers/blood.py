from rest_framework import serializers

from records.models import BLOOD_TYPE_CHOICES


class StockChangeSerializer(serializers.Serializer):
    """Body of add/remove.  Quantity rules are enforced by the ledger."""
    hospitalId = serializers.CharField(max_length=40, required=False, allow_blank=True)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    bloodType = serializers.ChoiceField(choices=BLOOD_TYPE_CHOICES)
    units = serializers.IntegerField()


class StockSetSerializer(serializers.Serializer):
    hospitalId = serializers.CharField(max_length=40, required=False, allow_blank=True)
    hospitalName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    bloodType = serializers.ChoiceField(choices=BLOOD_TYPE_CHOICES)
    availableUnits = serializers.IntegerField()
