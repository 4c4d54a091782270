"""State holders owned by a single list or mutation consumer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pmadmin.core.schema import PaginationInfo

T = TypeVar("T")


@dataclass(slots=True)
class QueryState(Generic[T]):
    """Snapshot of a paginated list request.

    ``data`` and ``pagination`` stay ``None`` until the first successful
    fetch. A missing ``pagination`` means "unknown", not zero pages.
    """

    data: list[T] | None = None
    pagination: PaginationInfo | None = None
    loading: bool = False
    error: str | None = None

    @property
    def loaded(self) -> bool:
        return self.data is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "items": self.data,
            "pagination": self.pagination.model_dump(by_alias=True) if self.pagination else None,
            "loading": self.loading,
            "error": self.error,
        }


@dataclass(slots=True)
class MutationState:
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True, slots=True)
class Link:
    """A named external link attached to a project or article."""

    name: str
    url: str
