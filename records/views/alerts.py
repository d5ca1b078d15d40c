"""
Critical-stock and emergency alert endpoints.

Lists return active alerts newest first together with the
acknowledgements collected so far.  Creating an emergency alert and
acknowledging either kind is reserved to hospitals and administrators.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.models import Hospital, User
from records.permissions import IsHospitalOrAdmin
from records.serializers.alerts import AcknowledgeSerializer, EmergencyCreateSerializer
from records.services.blood_bank import CriticalStockAlertTracker, format_stock_alert
from records.services.emergency import EmergencyAlertBroadcaster, format_emergency_alert
from records.views.common import display_name, resolve_hospital


def _acknowledger(request, vd) -> tuple[str, str]:
    """(hospital code, hospital name) recorded on an acknowledgement."""
    if request.user.role == User.ROLE_HOSPITAL:
        hospital = Hospital.objects.filter(user=request.user).first()
        if hospital is not None:
            return hospital.hospital_id, hospital.name
    return vd.get('hospitalId', ''), vd.get('hospitalName', '')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def critical_alerts(request):
    alerts = CriticalStockAlertTracker().active_alerts()
    return Response({'ok': True, 'alerts': [format_stock_alert(a) for a in alerts]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def acknowledge_critical(request):
    s = AcknowledgeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    code, name = _acknowledger(request, vd)
    alert = CriticalStockAlertTracker().acknowledge(
        vd['alertId'], hospital_code=code, hospital_name=name, response=vd.get('response'),
    )
    return Response({'ok': True, 'alert': format_stock_alert(alert)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def emergency_alerts(request):
    broadcaster = EmergencyAlertBroadcaster()
    if request.method == 'GET':
        return Response({'ok': True, 'alerts': [format_emergency_alert(a) for a in broadcaster.active_alerts()]})

    if not IsHospitalOrAdmin().has_permission(request, None):
        raise PermissionDenied('Only hospitals can raise emergency alerts')
    s = EmergencyCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = resolve_hospital(request, vd.get('hospitalId'))
    alert = broadcaster.create(
        hospital, vd.get('message'),
        hospital_name=display_name(request, hospital, vd.get('hospitalName')),
        alert_type=vd.get('type'),
        priority=vd.get('priority'),
    )
    return Response({'ok': True, 'alert': format_emergency_alert(alert)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def acknowledge_emergency(request):
    s = AcknowledgeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    code, name = _acknowledger(request, vd)
    alert = EmergencyAlertBroadcaster().acknowledge(
        vd['alertId'], hospital_code=code, hospital_name=name, response=vd.get('response'),
    )
    return Response({'ok': True, 'alert': format_emergency_alert(alert)})
