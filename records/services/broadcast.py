"""
Fire-and-forget delivery of alert events to connected WebSocket clients.

Every client of :class:`records.realtime.consumers.AlertsConsumer` sits in
the ``alerts`` group; events are not stored and failed sends are only
logged.
"""
import logging
from typing import Any, Dict

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

ALERTS_GROUP = 'alerts'

STOCK_CRITICAL = 'stock.critical'
EMERGENCY_ALERT = 'emergency.alert'


def broadcast(event_type: str, payload: Dict[str, Any]) -> bool:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    try:
        async_to_sync(channel_layer.group_send)(ALERTS_GROUP, {'type': event_type, 'payload': payload})
    except Exception:
        logger.exception('Broadcast of %s failed', event_type)
        return False
    return True


def broadcast_stock_critical(payload: Dict[str, Any]) -> bool:
    return broadcast(STOCK_CRITICAL, payload)


def broadcast_emergency_alert(payload: Dict[str, Any]) -> bool:
    return broadcast(EMERGENCY_ALERT, payload)
