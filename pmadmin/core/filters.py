"""Board filters persisted in the dashboard's query string."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Mapping

DEFAULT_PAGE_SIZE = 10

QUERY_KEYS: dict[str, str] = {
    "keyword": "keyword",
    "status": "status",
    "type": "type",
    "category": "category",
    "role": "role",
    "management_step": "managementStep",
    "is_deleted": "isDeleted",
    "progress_step_id": "progressStepId",
    "current_page": "currentPage",
    "page_size": "pageSize",
}


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True, slots=True)
class BoardFilters:
    """Immutable filter and pagination inputs for one board page."""

    keyword: str = ""
    status: str = ""
    type: str = ""
    category: str = ""
    role: str = ""
    management_step: str = ""
    is_deleted: str = ""
    progress_step_id: str = ""
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_query(cls, query: Mapping[str, str], *, default_page_size: int = DEFAULT_PAGE_SIZE) -> "BoardFilters":
        values: dict[str, object] = {}
        for field in fields(cls):
            raw = query.get(QUERY_KEYS[field.name])
            if field.name == "current_page":
                values[field.name] = _positive_int(raw, 1)
            elif field.name == "page_size":
                values[field.name] = _positive_int(raw, default_page_size)
            else:
                values[field.name] = (raw or "").strip()
        return cls(**values)

    def with_page(self, page: int) -> "BoardFilters":
        return replace(self, current_page=page)

    def with_filter(self, name: str, value: str) -> "BoardFilters":
        """Change one filter and go back to the first page."""

        if name not in QUERY_KEYS or name in {"current_page", "page_size"}:
            raise KeyError(name)
        return replace(self, **{name: value, "current_page": 1})

    def to_query(self, *, default_page_size: int = DEFAULT_PAGE_SIZE) -> dict[str, str]:
        """Serialise the non-default values back into query parameters."""

        query: dict[str, str] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name == "current_page" and value == 1:
                continue
            if field.name == "page_size" and value == default_page_size:
                continue
            if value == "":
                continue
            query[QUERY_KEYS[field.name]] = str(value)
        return query
