import json
import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends, Query
from followfeed.db.session import get_session_factory
from followfeed.core.auth import get_user_from_token
from followfeed.core.websocket import manager, channel_for

router = APIRouter()
logger = logging.getLogger(__name__)

# Close code for a rejected subscription (4000-4999 is application range)
WS_UNAUTHORIZED = 4401

@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    token: str = Query(...),
    session_factory=Depends(get_session_factory)
):
    """Subscribe to the current user's private notification channel"""
    # Authenticate on a short-lived session; the socket may stay open for hours
    db = session_factory()
    try:
        user = get_user_from_token(db, token)
        user_id = user.id if user else None
    finally:
        db.close()
    if user_id is None:
        logger.info("Rejected websocket subscription with invalid token")
        await websocket.close(code=WS_UNAUTHORIZED)
        return

    channel = channel_for(user_id)
    await manager.connect(websocket, channel)
    await websocket.send_text(json.dumps({"type": "subscribed", "channel": channel}))
    
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message_data = json.loads(data)
            except ValueError:
                continue
            
            if isinstance(message_data, dict) and message_data.get("type") == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
    except WebSocketDisconnect:
        logger.debug("Websocket on %s closed by client", channel)
    finally:
        manager.disconnect(websocket, channel)
