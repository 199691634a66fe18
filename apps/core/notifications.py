"""
Fan-out of business events to the company's open sockets

Best-effort: a failure to reach the channel layer is logged and never
undoes the write that triggered the event.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from apps.core.consumers import company_group

logger = logging.getLogger(__name__)


def broadcast_to_company(company_id, event, payload):
    """
    Push {"type": event, "payload": payload} to every socket joined to the company

    Args:
        company_id: tenant whose sockets receive the event
        event: e.g. 'appointment_created'
        payload: JSON-serializable dict
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug(f"No channel layer configured; dropping {event} for company {company_id}")
        return

    try:
        async_to_sync(channel_layer.group_send)(
            company_group(company_id),
            {"type": "company.event", "event": event, "payload": payload},
        )
    except Exception:
        logger.exception(f"Failed to broadcast {event} to company {company_id}")
