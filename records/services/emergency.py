"""
Emergency alerts broadcast by hospitals.

An emergency alert is recorded, pushed to every connected client and then
only collects acknowledgements; its status is never changed by the
application.
"""
import logging
from typing import Callable, Optional

from django.utils import timezone

from records.exceptions import MissingField
from records.models import AlertStatus, EmergencyAlert, EmergencyAlertAcknowledgement, Hospital
from records.services import ids
from records.services.acknowledgements import acknowledge, format_acknowledgements
from records.services.broadcast import broadcast_emergency_alert

logger = logging.getLogger(__name__)

DEFAULT_TYPE = 'general'
DEFAULT_PRIORITY = 'medium'


class EmergencyAlertBroadcaster:
    def __init__(self, notify: Optional[Callable[[dict], object]] = None):
        self.notify = notify or broadcast_emergency_alert

    def create(self, hospital: Hospital, message: Optional[str], *, hospital_name: Optional[str] = None,
               alert_type: Optional[str] = None, priority: Optional[str] = None) -> EmergencyAlert:
        if not message:
            raise MissingField('message')
        alert = EmergencyAlert.objects.create(
            alert_id=ids.generate_unique_id(ids.EMERGENCY_ALERT),
            hospital=hospital,
            hospital_name=hospital_name or hospital.name,
            message=message,
            alert_type=alert_type or DEFAULT_TYPE,
            priority=priority or DEFAULT_PRIORITY,
        )
        logger.warning('Emergency alert %s from %s (%s/%s)',
                       alert.alert_id, hospital.hospital_id, alert.alert_type, alert.priority)
        self.notify({
            'alertId': alert.alert_id,
            'hospitalName': alert.hospital_name,
            'message': alert.message,
            'type': alert.alert_type,
            'priority': alert.priority,
            'timestamp': timezone.now().isoformat(),
        })
        return alert

    def acknowledge(self, alert_id: str, *, hospital_code: str = '', hospital_name: str = '',
                    response: Optional[str] = None) -> EmergencyAlert:
        return acknowledge(
            EmergencyAlert, EmergencyAlertAcknowledgement, alert_id,
            hospital_code=hospital_code, hospital_name=hospital_name, response=response,
        )

    def active_alerts(self):
        return (
            EmergencyAlert.objects.filter(status=AlertStatus.ACTIVE)
            .select_related('hospital')
            .prefetch_related('acknowledgements')
            .order_by('-created_at', '-id')
        )


def format_emergency_alert(alert: EmergencyAlert) -> dict:
    return {
        'alertId': alert.alert_id,
        'hospitalId': alert.hospital.hospital_id,
        'hospitalName': alert.hospital_name,
        'message': alert.message,
        'type': alert.alert_type,
        'priority': alert.priority,
        'status': alert.status,
        'createdAt': alert.created_at.isoformat(),
        'acknowledgedBy': format_acknowledgements(alert),
    }
