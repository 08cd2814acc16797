from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

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

router = APIRouter()


@router.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@router.post("/sim/init")
def sim_init(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return init_session(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/tick")
def sim_tick(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return tick_session(payload.get("elapsed"))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/run")
def sim_run(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    return run_session(payload.get("steps", 1))


@router.post("/sim/add")
def sim_add(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    process_payload = payload.get("process") if isinstance(payload.get("process"), dict) else payload
    try:
        return add_process(process_payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/block/{pid}")
def sim_block(pid: str, payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return block_process(pid, payload.get("blocking_time", 0))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/sim/config")
def sim_config(payload: Dict[str, Any] = Body(default_factory=dict)) -> Dict[str, Any]:
    try:
        return set_config(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.get("/sim/state")
def sim_state() -> Dict[str, Any]:
    return get_state()


@router.post("/sim/reset")
def sim_reset() -> Dict[str, Any]:
    return reset_session()
