from __future__ import annotations

from fastapi import APIRouter, HTTPException

from pmadmin.core.config import load_settings
from pmadmin.core.phone import format_phone_number
from pmadmin.infrastructure.link_probe import build_probe_url, probe_url

router = APIRouter(tags=["tools"])


@router.post("/links/check")
async def check_link(payload: dict) -> dict:
    url = payload.get("url")
    if not isinstance(url, str) or not url:
        raise HTTPException(status_code=400, detail="url is required")
    target = build_probe_url(url)
    if target is None:
        return {"url": url, "normalized": None, "exists": False}
    exists = await probe_url(target, timeout=load_settings().probe_timeout)
    return {"url": url, "normalized": str(target), "exists": exists}


@router.post("/phone/format")
async def format_phone(payload: dict) -> dict:
    value = payload.get("value")
    if value is None:
        raise HTTPException(status_code=400, detail="value is required")
    return {"formatted": format_phone_number(value)}
