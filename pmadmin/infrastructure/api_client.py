"""HTTP client for the project-management admin REST backend."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence
from urllib.parse import urlparse

import httpx

from pmadmin.core.config import Settings, load_settings
from pmadmin.core.errors import ServerError, TransportError
from pmadmin.core.schema import ListEnvelope, MutationEnvelope

logger = logging.getLogger(__name__)


class AdminApiClient:
    """One coroutine per backend operation.

    List operations return a :class:`ListEnvelope`, mutations a
    :class:`MutationEnvelope`. Failures surface as :class:`TransportError`
    (no response) or :class:`ServerError` (error response).
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("base_url must include scheme and host")

        self._base_url = base_url.rstrip("/")
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AdminApiClient":
        settings = settings or load_settings()
        return cls(settings.api_base_url, token=settings.api_token, timeout=settings.api_timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            if response.is_error:
                return {}
            raise ServerError("Malformed response from server", status_code=response.status_code)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = await self._client.request(method, url, params=params, json=json, headers=self._headers)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        payload = self._decode(response)
        if response.is_error:
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.debug("%s %s -> %s %s", method, url, response.status_code, message)
            raise ServerError(message, status_code=response.status_code, payload=payload)
        return payload

    async def _list(
        self,
        path: str,
        filters: Mapping[str, Any],
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        params = {key: value for key, value in filters.items() if value not in ("", None)}
        params["currentPage"] = current_page
        params["pageSize"] = page_size
        payload = await self._request("GET", path, params=params)
        return ListEnvelope.model_validate(payload)

    async def _mutate(self, method: str, path: str, json: Any = None) -> MutationEnvelope:
        payload = await self._request(method, path, json=json)
        if not isinstance(payload, dict):
            payload = {"data": payload}
        return MutationEnvelope.model_validate(payload)

    # ------------------------------------------------------------------
    # list operations
    # ------------------------------------------------------------------
    async def fetch_project_list(
        self, keyword: str, status: str, current_page: int, page_size: int
    ) -> ListEnvelope:
        return await self._list("/projects", {"keyword": keyword, "status": status}, current_page, page_size)

    async def fetch_project_question_list(
        self,
        project_id: str,
        keyword: str,
        progress_step_id: str,
        status: str,
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "progressStepId": progress_step_id, "status": status}
        return await self._list(f"/projects/{project_id}/questions", filters, current_page, page_size)

    async def fetch_project_approval_list(
        self,
        project_id: str,
        keyword: str,
        progress_step_id: str,
        status: str,
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "progressStepId": progress_step_id, "status": status}
        return await self._list(f"/projects/{project_id}/approvals", filters, current_page, page_size)

    async def fetch_organization_project_list(
        self,
        organization_id: str,
        keyword: str,
        management_step: str,
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "managementStep": management_step}
        return await self._list(f"/organizations/{organization_id}/projects", filters, current_page, page_size)

    async def fetch_member_project_list(
        self,
        member_id: str,
        keyword: str,
        management_step: str,
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "managementStep": management_step}
        return await self._list(f"/members/{member_id}/projects", filters, current_page, page_size)

    async def fetch_notice_list(
        self, keyword: str, category: str, is_deleted: str, current_page: int, page_size: int
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "category": category, "isDeleted": is_deleted}
        return await self._list("/notices", filters, current_page, page_size)

    async def fetch_member_list(
        self, keyword: str, role: str, status: str, current_page: int, page_size: int
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "role": role, "status": status}
        return await self._list("/members", filters, current_page, page_size)

    async def fetch_organization_member_list(
        self,
        organization_id: str,
        keyword: str,
        role: str,
        status: str,
        current_page: int,
        page_size: int,
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "role": role, "status": status}
        return await self._list(f"/organizations/{organization_id}/members", filters, current_page, page_size)

    async def fetch_organization_list(
        self, keyword: str, type: str, status: str, current_page: int, page_size: int
    ) -> ListEnvelope:
        filters = {"keyword": keyword, "type": type, "status": status}
        return await self._list("/organizations", filters, current_page, page_size)

    async def fetch_completion_requests(
        self, project_id: str, progress_step_id: str, current_page: int, page_size: int
    ) -> ListEnvelope:
        filters = {"progressStepId": progress_step_id}
        return await self._list(f"/projects/{project_id}/completion-requests", filters, current_page, page_size)

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    async def create_member(self, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("POST", "/members", dict(payload))

    async def update_member(self, member_id: str, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("PATCH", f"/members/{member_id}", dict(payload))

    async def delete_member(self, member_id: str, reason: str = "") -> MutationEnvelope:
        return await self._mutate("DELETE", f"/members/{member_id}", {"deleteReason": reason})

    async def create_organization(self, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("POST", "/organizations", dict(payload))

    async def update_organization(self, organization_id: str, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("PATCH", f"/organizations/{organization_id}", dict(payload))

    async def delete_organization(self, organization_id: str, reason: str = "") -> MutationEnvelope:
        return await self._mutate("DELETE", f"/organizations/{organization_id}", {"deleteReason": reason})

    async def change_organization_status(self, organization_id: str) -> MutationEnvelope:
        return await self._mutate("PATCH", f"/organizations/{organization_id}/status")

    async def create_notice(self, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("POST", "/notices", dict(payload))

    async def edit_notice(self, notice_id: str, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("PATCH", f"/notices/{notice_id}", dict(payload))

    async def delete_notice(self, notice_id: str) -> MutationEnvelope:
        return await self._mutate("DELETE", f"/notices/{notice_id}")

    async def create_project(self, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("POST", "/projects", dict(payload))

    async def update_project(self, project_id: str, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("PUT", f"/projects/{project_id}", dict(payload))

    async def delete_project(self, project_id: str) -> MutationEnvelope:
        return await self._mutate("DELETE", f"/projects/{project_id}")

    async def update_project_management_step(self, project_id: str, management_step: str) -> MutationEnvelope:
        return await self._mutate(
            "PATCH",
            f"/projects/{project_id}/management-step",
            {"managementStep": management_step},
        )

    async def create_progress_step(self, project_id: str, payload: Mapping[str, Any]) -> MutationEnvelope:
        return await self._mutate("POST", f"/projects/{project_id}/progress", dict(payload))

    async def update_progress_step(
        self, project_id: str, step_id: str, payload: Mapping[str, Any]
    ) -> MutationEnvelope:
        return await self._mutate("PUT", f"/projects/{project_id}/progress/{step_id}", dict(payload))

    async def delete_progress_step(self, project_id: str, step_id: str) -> MutationEnvelope:
        return await self._mutate("DELETE", f"/projects/{project_id}/progress/{step_id}")

    async def update_progress_step_schedule(
        self, project_id: str, step_id: str, schedule: Mapping[str, str]
    ) -> MutationEnvelope:
        body = {"startAt": schedule.get("startAt"), "deadlineAt": schedule.get("deadlineAt")}
        return await self._mutate("PATCH", f"/projects/{project_id}/progress/{step_id}/schedule", body)

    async def update_progress_step_order(
        self, project_id: str, orders: Sequence[Mapping[str, Any]]
    ) -> MutationEnvelope:
        return await self._mutate("PUT", f"/projects/{project_id}/progress/order", [dict(item) for item in orders])

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


_client: AdminApiClient | None = None


def configure_api_client(client: AdminApiClient | None) -> None:
    """Install the API client used by the HTTP routes."""

    global _client
    _client = client


def get_api_client() -> AdminApiClient:
    """Return the configured client, building one from the environment if needed."""

    global _client
    if _client is None:
        _client = AdminApiClient.from_settings()
    return _client


__all__ = ["AdminApiClient", "configure_api_client", "get_api_client"]
