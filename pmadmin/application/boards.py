"""Board registry and ListQuery factories for every admin list page."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from pmadmin.application.list_query import ListQuery
from pmadmin.core.errors import ValidationError
from pmadmin.core.filters import QUERY_KEYS, BoardFilters
from pmadmin.core.schema import ITEM_MODELS
from pmadmin.infrastructure.api_client import AdminApiClient, get_api_client
from pmadmin.infrastructure.notifications import NotificationSink

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@dataclass(frozen=True, slots=True)
class BoardSpec:
    name: str
    label: str
    fetch: str
    collection_key: str
    model: str | None = None
    scope: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    page_size: int = 10
    options: dict[str, dict[str, str]] = field(default_factory=dict)

    def parse_filters(self, query: Mapping[str, str]) -> BoardFilters:
        return BoardFilters.from_query(query, default_page_size=self.page_size)

    def params_for(self, filters: BoardFilters, scope: Mapping[str, Any] | None = None) -> tuple[Any, ...]:
        """Build the positional arguments of :attr:`fetch` for one page."""

        scope = scope or {}
        missing = [name for name in self.scope if not scope.get(name)]
        if missing:
            raise ValidationError(f"{', '.join(missing)} is required for board '{self.name}'")
        scope_values = tuple(str(scope[name]) for name in self.scope)
        filter_values = tuple(getattr(filters, name) for name in self.filters)
        return scope_values + filter_values + (filters.current_page, filters.page_size)

    def describe(self) -> dict[str, object]:
        return {
            "name": self.name,
            "label": self.label,
            "scope": list(self.scope),
            "filters": [QUERY_KEYS[name] for name in self.filters],
            "pageSize": self.page_size,
            "options": self.options,
        }


def _load_boards(path: Path) -> dict[str, BoardSpec]:
    with path.open("r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp) or {}

    boards: dict[str, BoardSpec] = {}
    for name, entry in (raw.get("boards") or {}).items():
        for filter_name in entry.get("filters") or []:
            if filter_name not in QUERY_KEYS:
                raise ValueError(f"board '{name}' uses unknown filter '{filter_name}'")
        for option_name in entry.get("options") or {}:
            if option_name not in (entry.get("filters") or []):
                raise ValueError(f"board '{name}' has options for '{option_name}' but no such filter")
        model = entry.get("model")
        if model is not None and model not in ITEM_MODELS:
            raise ValueError(f"board '{name}' uses unknown model '{model}'")
        boards[name] = BoardSpec(
            name=name,
            label=entry.get("label") or name,
            fetch=entry["fetch"],
            collection_key=entry["collection_key"],
            model=model,
            scope=tuple(entry.get("scope") or ()),
            filters=tuple(entry.get("filters") or ()),
            page_size=int(entry.get("page_size") or 10),
            options=dict(entry.get("options") or {}),
        )
    return boards


@lru_cache(maxsize=1)
def get_boards() -> dict[str, BoardSpec]:
    return _load_boards(CONFIG_DIR / "boards.yaml")


def get_board(name: str) -> BoardSpec:
    try:
        return get_boards()[name]
    except KeyError:
        raise KeyError(f"unknown board '{name}'") from None


def build_list_query(
    board: str | BoardSpec,
    *,
    client: AdminApiClient | None = None,
    sink: NotificationSink | None = None,
) -> ListQuery:
    spec = board if isinstance(board, BoardSpec) else get_board(board)
    api = client or get_api_client()
    return ListQuery(
        getattr(api, spec.fetch),
        spec.collection_key,
        sink=sink,
        item_model=ITEM_MODELS.get(spec.model) if spec.model else None,
    )
