"""
WebSocket endpoint for collaborative rooms.

Each frame is `{"event": ..., "data": {...}}`. Frames are handled one at a
time per connection; the coordinator returns what to send and the manager
sends it.
"""
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.schemas import CodePayload, Connected, ErrorMessage, InboundMessage, JoinRoomPayload
from app.services import events
from app.services.room_coordinator import RoomCoordinator, get_room_coordinator
from app.services.ws_manager import WebSocketManager, ws_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rooms"])


def get_ws_manager() -> WebSocketManager:
    return ws_manager


async def handle_message(
    coordinator: RoomCoordinator,
    manager: WebSocketManager,
    connection_id: str,
    message: InboundMessage,
) -> None:
    if message.event == events.JOIN_ROOM:
        payload = JoinRoomPayload(**message.data)
        await manager.dispatch(coordinator.join(connection_id, payload.room_id))

    elif message.event == events.CODE_CHANGE:
        payload = CodePayload(**message.data)
        await manager.dispatch(coordinator.change_code(connection_id, payload.room_id, payload.code))

    elif message.event == events.CHECK_SOLUTION:
        payload = CodePayload(**message.data)
        await manager.dispatch(await coordinator.check_solution(connection_id, payload.room_id, payload.code))

    else:
        await manager.send(connection_id, events.ERROR, ErrorMessage(message=f"Unknown event: {message.event}"))


@router.websocket("/ws")
async def room_socket(
    websocket: WebSocket,
    coordinator: RoomCoordinator = Depends(get_room_coordinator),
    manager: WebSocketManager = Depends(get_ws_manager),
):
    connection_id = coordinator.connect()
    await manager.connect(connection_id, websocket)
    await manager.send(connection_id, events.CONNECTED, Connected(connection_id=connection_id))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = InboundMessage(**json.loads(raw))
                await handle_message(coordinator, manager, connection_id, message)
            except (json.JSONDecodeError, TypeError, ValidationError) as e:
                logger.warning("Malformed message from %s: %s", connection_id, e)
                await manager.send(connection_id, events.ERROR, ErrorMessage(message=f"Malformed message: {e}"))
    except WebSocketDisconnect:
        pass
    finally:
        # A dropped transport is an ordinary leave
        outbound = coordinator.disconnect(connection_id)
        manager.disconnect(connection_id)
        await manager.dispatch(outbound)
