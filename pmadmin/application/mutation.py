"""Generic create/update/delete command."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pmadmin.core.errors import resolve_error_message
from pmadmin.domain import MutationState
from pmadmin.infrastructure.notifications import (
    NotificationSink,
    failure_notification,
    get_notification_sink,
    success_notification,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

MUTATION_FALLBACK_MESSAGE = "An error occurred while processing the request."


def _response_message(response: Any) -> str | None:
    if isinstance(response, dict):
        message = response.get("message")
    else:
        message = getattr(response, "message", None)
    return message if isinstance(message, str) and message else None


class MutationCommand(Generic[R]):
    """Runs a mutation and reports the outcome through the notification sink.

    ``invoke`` never raises: a failure is recorded in :attr:`state` and the
    call returns ``None``, which callers must keep apart from an empty but
    valid response.
    """

    def __init__(
        self,
        mutate: Callable[..., Awaitable[R]],
        *,
        sink: NotificationSink | None = None,
        fallback_message: str = MUTATION_FALLBACK_MESSAGE,
    ) -> None:
        self._mutate = mutate
        self._sink = sink
        self._fallback_message = fallback_message
        self._state = MutationState()

    @property
    def state(self) -> MutationState:
        return replace(self._state)

    async def invoke(self, *args: Any, **kwargs: Any) -> R | None:
        self._state.loading = True
        try:
            response = await self._mutate(*args, **kwargs)
        except Exception as exc:
            message = resolve_error_message(exc, self._fallback_message)
            logger.error("Mutation request failed: %s", message, exc_info=exc)
            self._state.error = message
            self._show(failure_notification(message))
            return None
        finally:
            self._state.loading = False

        self._state.error = None
        message = _response_message(response)
        if message:
            self._show(success_notification(message))
        return response

    def _show(self, notification) -> None:
        (self._sink or get_notification_sink()).show(notification)


async def invoke_and_refetch(command: MutationCommand[R], query, *args: Any, **kwargs: Any) -> R | None:
    """Run ``command`` and refresh ``query`` when it produced a response."""

    result = await command.invoke(*args, **kwargs)
    if result is not None:
        await query.refetch()
    return result
