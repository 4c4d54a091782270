#!/usr/bin/env python
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pmadmin.application import build_list_query, get_board, get_boards
from pmadmin.core.errors import ValidationError
from pmadmin.infrastructure import AdminApiClient


async def _fetch(board: str, query: dict[str, str], scope: dict[str, str]) -> dict:
    spec = get_board(board)
    filters = spec.parse_filters(query)
    client = AdminApiClient.from_settings()
    try:
        list_query = build_list_query(spec, client=client)
        state = await list_query.set_params(*spec.params_for(filters, scope))
    finally:
        await client.aclose()
    return state.as_dict()


def main() -> None:
    parser = argparse.ArgumentParser(description="Print one page of an admin board as JSON")
    parser.add_argument("board", choices=sorted(get_boards()), help="board name")
    parser.add_argument("--keyword", default="")
    parser.add_argument("--status", default="")
    parser.add_argument("--type", default="")
    parser.add_argument("--page", default="1", help="currentPage")
    parser.add_argument("--page-size", default=None, help="pageSize (board default when omitted)")
    parser.add_argument("--project-id", default=None)
    parser.add_argument("--organization-id", default=None)
    parser.add_argument("--member-id", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    query = {"keyword": args.keyword, "status": args.status, "type": args.type, "currentPage": args.page}
    if args.page_size:
        query["pageSize"] = args.page_size
    scope = {
        "project_id": args.project_id,
        "organization_id": args.organization_id,
        "member_id": args.member_id,
    }

    try:
        payload = asyncio.run(_fetch(args.board, query, scope))
    except ValidationError as exc:
        parser.error(str(exc))
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=lambda item: item.model_dump(by_alias=True)))


if __name__ == "__main__":
    main()
