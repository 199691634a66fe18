"""
WebSocket consumer for live back-office notifications

Protocol:
- client → {"type": "join_company", "companyId": <id>}
- client → {"type": "ping"}  (answered with {"type": "pong"})
- server → {"type": "appointment_created" | "appointment_updated" |
  "appointment_deleted", "payload": {...}}

The company a socket listens to always comes from the session user; the
companyId in the join message must match it or the join is refused.
"""

import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

logger = logging.getLogger(__name__)


def company_group(company_id):
    """Channel-layer group holding every socket of one company"""
    return f"company_{company_id}"


class CompanyConsumer(AsyncWebsocketConsumer):

    async def connect(self):
        self.user = self.scope.get("user")
        self.group_name = None

        if not self.user or not self.user.is_authenticated:
            await self.close()
            return

        await self.accept()

    async def disconnect(self, close_code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            message = json.loads(text_data or "")
        except json.JSONDecodeError:
            logger.warning("Invalid JSON received on the company socket")
            await self.send_json({"type": "error", "message": "JSON inválido"})
            return

        if not isinstance(message, dict):
            await self.send_json({"type": "error", "message": "Mensagem inválida"})
            return

        message_type = message.get("type")

        if message_type == "join_company":
            await self.join_company(message.get("companyId"))
        elif message_type == "ping":
            await self.send_json({"type": "pong"})

    async def join_company(self, requested_company_id):
        company_id = self.user.company_id

        if company_id is None or str(requested_company_id) != str(company_id):
            logger.warning(
                f"User {self.user.pk} tried to join company {requested_company_id} (own company: {company_id})"
            )
            await self.send_json({"type": "error", "message": "Empresa inválida para este usuário"})
            return

        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

        self.group_name = company_group(company_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.send_json({"type": "joined", "companyId": company_id})

    async def company_event(self, event):
        """Handler for group messages sent by apps.core.notifications"""
        await self.send_json({"type": event["event"], "payload": event["payload"]})

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))
