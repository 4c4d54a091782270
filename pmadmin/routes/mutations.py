from __future__ import annotations

import inspect

from fastapi import APIRouter, HTTPException

from pmadmin.application import MUTATIONS, build_mutation
from pmadmin.infrastructure import CollectingNotificationSink, get_api_client

router = APIRouter(prefix="/mutations", tags=["mutations"])


@router.get("")
async def list_mutations() -> dict:
    return {"items": sorted(MUTATIONS)}


@router.post("/{name}")
async def run_mutation(name: str, payload: dict) -> dict:
    if name not in MUTATIONS:
        raise HTTPException(status_code=404, detail="mutation not found")
    args = payload.get("args") or []
    if not isinstance(args, list):
        raise HTTPException(status_code=400, detail="args must be a list")

    api = get_api_client()
    try:
        inspect.signature(getattr(api, MUTATIONS[name])).bind(*args)
    except TypeError as exc:
        raise HTTPException(status_code=400, detail=f"invalid args for '{name}': {exc}") from exc

    sink = CollectingNotificationSink()
    command = build_mutation(name, client=api, sink=sink)
    result = await command.invoke(*args)

    return {
        "ok": result is not None,
        "data": result.data if result is not None else None,
        "message": result.message if result is not None else None,
        "error": command.state.error,
        "notifications": sink.as_dicts(),
    }
