import logging
from typing import Any, Dict

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from mlfq.session import (
    add_process,
    block_process,
    get_state,
    init_session,
    reset_session,
    run_session,
    set_config,
    tick_session,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _send_state(ws: WebSocket) -> None:
    await ws.send_json({"type": "state", "data": get_state()})


def _dispatch(msg: Dict[str, Any]) -> None:
    mtype = str(msg.get("type", "")).lower()

    if mtype == "init":
        payload = dict(msg)
        payload.pop("type", None)
        init_session(payload)
    elif mtype == "tick":
        tick_session(msg.get("elapsed"))
    elif mtype == "run":
        run_session(msg.get("steps", 1))
    elif mtype == "add_process":
        add_process(msg.get("process") or {})
    elif mtype == "block":
        block_process(str(msg.get("pid", "")), msg.get("blocking_time", 0))
    elif mtype == "config":
        payload = dict(msg)
        payload.pop("type", None)
        set_config(payload)
    elif mtype == "reset":
        reset_session()


@router.websocket("/ws/state")
async def ws_state(websocket: WebSocket) -> None:
    await websocket.accept()
    await _send_state(websocket)

    try:
        while True:
            msg: Dict[str, Any] = await websocket.receive_json()
            try:
                _dispatch(msg)
            except ValueError as exc:
                logger.warning("Rejected %s message: %s", msg.get("type"), exc)
                await websocket.send_json({"type": "error", "detail": str(exc)})

            await _send_state(websocket)
    except WebSocketDisconnect:
        return
