"""Websocket transport for the realtime gateway.

Clients exchange JSON frames shaped ``{"event": <name>, "data": <payload>}``.
The only inbound event is ``agent_identify`` whose data is the agent name;
the connection then joins that agent's room and receives
``unread_notification_count``. Every event emitted by the services arrives
as an outbound frame of the same shape.
"""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from dossier_hub.api.v1.dependencies import GatewayDep, StoreDep
from dossier_hub.services.agents import AgentService
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import Subscription

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

IDENTIFY_EVENT = "agent_identify"


async def _pump(websocket: WebSocket, subscription: Subscription) -> None:
    while True:
        envelope = await subscription.queue.get()
        await websocket.send_json(envelope)


@router.websocket("/ws")
async def realtime(websocket: WebSocket, store: StoreDep, gateway: GatewayDep) -> None:
    """Relay gateway events to one client until it disconnects."""
    await websocket.accept()
    subscription = gateway.connect()
    pump = asyncio.create_task(_pump(websocket, subscription))
    agents = AgentService(store)
    notifications = NotificationService(store, gateway)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except ValueError:
                logger.warning("Ignoring non-JSON frame on subscription %d", subscription.id)
                continue
            if not isinstance(frame, dict) or frame.get("event") != IDENTIFY_EVENT:
                logger.debug("Ignoring frame on subscription %d: %r", subscription.id, frame)
                continue
            name = frame.get("data")
            if not isinstance(name, str) or not name.strip():
                logger.warning("Ignoring %s without an agent name", IDENTIFY_EVENT)
                continue
            agent = agents.canonical(name)
            gateway.join(subscription, agent)
            subscription.deliver("unread_notification_count", notifications.unread_count(agent))
    except WebSocketDisconnect:
        logger.info("Subscription %d disconnected", subscription.id)
    finally:
        gateway.disconnect(subscription)
        pump.cancel()
        await asyncio.gather(pump, return_exceptions=True)
