from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pmadmin.core.errors import ServerError


class PaginationInfo(BaseModel):
    """Pagination metadata returned next to every list collection."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    current_page: int = Field(alias="currentPage", ge=1)
    page_size: int = Field(alias="pageSize", gt=0)
    total_pages: int = Field(alias="totalPages", ge=0)
    total_count: int = Field(alias="totalCount", ge=0)

    @classmethod
    def from_counts(cls, current_page: int, page_size: int, total_count: int) -> "PaginationInfo":
        total_pages = -(-total_count // page_size)
        return cls(
            current_page=current_page,
            page_size=page_size,
            total_pages=total_pages,
            total_count=total_count,
        )

    @property
    def is_out_of_range(self) -> bool:
        return self.current_page > max(self.total_pages, 1)

    def clamp_page(self, page: int) -> int:
        """Return ``page`` limited to ``1..max(total_pages, 1)``."""

        return min(max(page, 1), max(self.total_pages, 1))


class ListEnvelope(BaseModel):
    """``{"data": {<collectionKey>: [...], "meta": {...}}, "message": ...}``"""

    data: dict[str, Any]
    message: str | None = None

    def collection(self, key: str) -> list[Any]:
        if key not in self.data:
            raise ServerError(f"Response does not contain the '{key}' collection")
        items = self.data[key]
        if items is None:
            return []
        if not isinstance(items, list):
            raise ServerError(f"Collection '{key}' is not a list")
        return list(items)

    @property
    def pagination(self) -> PaginationInfo | None:
        meta = self.data.get("meta")
        if meta is None:
            return None
        return PaginationInfo.model_validate(meta)


class MutationEnvelope(BaseModel):
    """``{"data": T, "message": ...}`` returned by create/update/delete calls."""

    data: Any = None
    message: str | None = None


class _Resource(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | str


class ProjectSummary(_Resource):
    name: str | None = None
    status: str | None = None
    start_at: str | None = Field(default=None, alias="startAt")
    close_at: str | None = Field(default=None, alias="closeAt")
    customer_name: str | None = Field(default=None, alias="customerName")
    developer_name: str | None = Field(default=None, alias="developerName")


class ProjectArticle(_Resource):
    title: str | None = None
    status: str | None = None
    progress_step_id: int | str | None = Field(default=None, alias="progressStepId")
    author_name: str | None = Field(default=None, alias="authorName")
    created_at: str | None = Field(default=None, alias="createdAt")


class CompletionHistory(_Resource):
    title: str | None = None
    status: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class Notice(_Resource):
    title: str | None = None
    category: str | None = None
    is_deleted: bool | None = Field(default=None, alias="isDeleted")
    created_at: str | None = Field(default=None, alias="createdAt")


class Organization(_Resource):
    name: str | None = None
    type: str | None = None
    status: str | None = None
    br_number: str | None = Field(default=None, alias="brNumber")
    phone_number: str | None = Field(default=None, alias="phoneNumber")


class Member(_Resource):
    name: str | None = None
    email: str | None = None
    role: str | None = None
    status: str | None = None
    phone_num: str | None = Field(default=None, alias="phoneNum")
    organization_name: str | None = Field(default=None, alias="organizationName")


ITEM_MODELS: dict[str, type[BaseModel]] = {
    "ProjectSummary": ProjectSummary,
    "ProjectArticle": ProjectArticle,
    "CompletionHistory": CompletionHistory,
    "Notice": Notice,
    "Organization": Organization,
    "Member": Member,
}
