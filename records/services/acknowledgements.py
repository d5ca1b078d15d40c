from typing import Optional, Type

from django.db import models
from django.utils import timezone

from records.exceptions import NotFound


def acknowledge(alert_model: Type[models.Model], ack_model: Type[models.Model], alert_id: str, *,
                hospital_code: str = '', hospital_name: str = '', response: Optional[str] = None):
    """Append one acknowledgement to the alert identified by ``alert_id``.

    Works for any alert status and never changes it.  Raises
    :class:`NotFound` without writing anything when the id is unknown.
    """
    alert = alert_model.objects.filter(alert_id=alert_id).first()
    if alert is None:
        raise NotFound('Alert not found')
    ack_model.objects.create(
        alert=alert,
        hospital_code=hospital_code or '',
        hospital_name=hospital_name or '',
        response=response or '',
        timestamp=timezone.now(),
    )
    return alert


def format_acknowledgements(alert) -> list[dict]:
    return [{
        'hospitalId': a.hospital_code,
        'hospitalName': a.hospital_name,
        'response': a.response,
        'timestamp': a.timestamp.isoformat(),
    } for a in alert.acknowledgements.all()]
