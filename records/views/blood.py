"""
Blood bank inventory endpoints.

Every mutation goes through :class:`BloodInventoryLedger`, which keeps
the critical-stock alerts of the pair in step with the new count.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.permissions import IsHospitalOrAdmin
from records.serializers.blood import StockChangeSerializer, StockSetSerializer
from records.services.blood_bank import BloodInventoryLedger, format_stock, format_stock_alert
from records.views.common import resolve_hospital


def _change_payload(change) -> dict:
    payload = {'ok': True, 'stock': format_stock(change.stock), 'resolvedAlerts': change.resolved_alerts}
    if change.raised_alert is not None:
        payload['alert'] = format_stock_alert(change.raised_alert)
    return payload


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def list_stock(request, hospital_id):
    hospital = resolve_hospital(request, hospital_id)
    ledger = BloodInventoryLedger()
    return Response({
        'ok': True,
        'hospitalId': hospital.hospital_id,
        'threshold': ledger.threshold,
        'stock': [format_stock(s) for s in ledger.stock_for(hospital).select_related('hospital')],
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def add_stock(request):
    s = StockChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = resolve_hospital(request, vd.get('hospitalId'))
    change = BloodInventoryLedger().add(hospital, vd['bloodType'], vd['units'])
    return Response(_change_payload(change))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def remove_stock(request):
    s = StockChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = resolve_hospital(request, vd.get('hospitalId'))
    change = BloodInventoryLedger().remove(hospital, vd['bloodType'], vd['units'])
    return Response(_change_payload(change))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def update_stock(request):
    """Overwrite the count of a pair (``availableUnits`` may be zero)."""
    s = StockSetSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = resolve_hospital(request, vd.get('hospitalId'))
    change = BloodInventoryLedger().set(hospital, vd['bloodType'], vd['availableUnits'])
    return Response(_change_payload(change))
