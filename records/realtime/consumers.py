import json
from channels.generic.websocket import AsyncWebsocketConsumer

from records.services.broadcast import ALERTS_GROUP


class AlertsConsumer(AsyncWebsocketConsumer):
    """Push critical-stock and emergency alerts to every connected dashboard."""
    GROUP = ALERTS_GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def stock_critical(self, event):
        # event: {"type": "stock.critical", "payload": {...}}
        await self.send(json.dumps({"type": "stock-critical", "data": event["payload"]}))

    async def emergency_alert(self, event):
        await self.send(json.dumps({"type": "emergency-alert", "data": event["payload"]}))
