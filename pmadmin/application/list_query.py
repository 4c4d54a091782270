"""Generic engine behind every paginated board."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import BaseModel

from pmadmin.core.errors import resolve_error_message
from pmadmin.core.schema import ListEnvelope
from pmadmin.domain import QueryState
from pmadmin.infrastructure.notifications import (
    NotificationSink,
    failure_notification,
    get_notification_sink,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIST_FALLBACK_MESSAGE = "An error occurred while loading data."

FetchFunction = Callable[..., Awaitable[Any]]


class ListQuery(Generic[T]):
    """Fetches one collection out of a list envelope and tracks its state.

    Every invocation receives an increasing request id; only the completion
    of the most recent request is applied, so a slow earlier response can
    never overwrite a newer one. Stale ``data`` and ``pagination`` stay
    visible while a request is in flight and survive failed requests.
    """

    def __init__(
        self,
        fetch: FetchFunction,
        collection_key: str,
        *,
        sink: NotificationSink | None = None,
        item_model: type[BaseModel] | None = None,
        fallback_message: str = LIST_FALLBACK_MESSAGE,
    ) -> None:
        self._fetch = fetch
        self._collection_key = collection_key
        self._sink = sink
        self._item_model = item_model
        self._fallback_message = fallback_message
        self._state: QueryState[T] = QueryState()
        self._params: tuple[Any, ...] | None = None
        self._latest_request = 0
        self._closed = False

    @property
    def collection_key(self) -> str:
        return self._collection_key

    @property
    def params(self) -> tuple[Any, ...] | None:
        return self._params

    @property
    def state(self) -> QueryState[T]:
        data = list(self._state.data) if self._state.data is not None else None
        return replace(self._state, data=data)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Detach the engine; completions that arrive later are dropped."""

        self._closed = True

    async def set_params(self, *params: Any) -> QueryState[T]:
        """Fetch only when ``params`` differ by value from the last ones used."""

        if self._params is not None and tuple(params) == self._params:
            return self.state
        return await self.load(*params)

    async def refetch(self) -> QueryState[T]:
        return await self.load(*(self._params or ()))

    async def load(self, *params: Any) -> QueryState[T]:
        self._params = tuple(params)
        self._latest_request += 1
        request_id = self._latest_request
        self._state.loading = True

        try:
            envelope = await self._fetch(*params)
            if not isinstance(envelope, ListEnvelope):
                envelope = ListEnvelope.model_validate(envelope)
            items = self._parse_items(envelope.collection(self._collection_key))
            pagination = envelope.pagination
        except Exception as exc:
            if not self._is_current(request_id):
                logger.debug("Dropping stale failure for %s request %s", self._collection_key, request_id)
                return self.state
            message = resolve_error_message(exc, self._fallback_message)
            logger.warning("Fetching %s failed: %s", self._collection_key, message)
            self._state.error = message
            self._state.loading = False
            self._notify(message)
            return self.state

        if not self._is_current(request_id):
            logger.debug("Dropping stale result for %s request %s", self._collection_key, request_id)
            return self.state

        self._state.data = items
        self._state.pagination = pagination
        self._state.error = None
        self._state.loading = False
        return self.state

    def _is_current(self, request_id: int) -> bool:
        return not self._closed and request_id == self._latest_request

    def _parse_items(self, items: list[Any]) -> list[T]:
        if self._item_model is None:
            return items
        return [self._item_model.model_validate(item) for item in items]

    def _notify(self, message: str) -> None:
        sink = self._sink or get_notification_sink()
        sink.show(failure_notification(message))
