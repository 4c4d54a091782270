from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.encoders import jsonable_encoder

from pmadmin.application import build_list_query, get_board, get_boards
from pmadmin.core.errors import ValidationError
from pmadmin.infrastructure import CollectingNotificationSink, get_api_client

router = APIRouter(prefix="/boards", tags=["boards"])

SCOPE_QUERY_KEYS = {
    "project_id": "projectId",
    "organization_id": "organizationId",
    "member_id": "memberId",
}


@router.get("")
async def list_boards() -> dict:
    return {"items": [spec.describe() for spec in get_boards().values()]}


@router.get("/{board}")
async def read_board(board: str, request: Request) -> dict:
    try:
        spec = get_board(board)
    except KeyError:
        raise HTTPException(status_code=404, detail="board not found")

    query = request.query_params
    filters = spec.parse_filters(query)
    scope = {name: query.get(key) for name, key in SCOPE_QUERY_KEYS.items()}
    try:
        params = spec.params_for(filters, scope)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    sink = CollectingNotificationSink()
    list_query = build_list_query(spec, client=get_api_client(), sink=sink)
    state = await list_query.set_params(*params)
    list_query.close()

    payload = jsonable_encoder(state.as_dict())
    payload.pop("loading")
    payload["filters"] = filters.to_query(default_page_size=spec.page_size)
    payload["notifications"] = sink.as_dicts()
    return payload
