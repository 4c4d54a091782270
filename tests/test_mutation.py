from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from pmadmin.application.list_query import ListQuery
from pmadmin.application.mutation import MUTATION_FALLBACK_MESSAGE, MutationCommand, invoke_and_refetch
from pmadmin.core.errors import ServerError, TransportError
from pmadmin.core.schema import ListEnvelope, MutationEnvelope
from pmadmin.infrastructure.notifications import (
    CollectingNotificationSink,
    configure_notification_sink,
    reset_notification_sink,
)


@pytest.fixture()
def sink():
    collecting = CollectingNotificationSink()
    configure_notification_sink(collecting)
    yield collecting
    reset_notification_sink()


def _failing(exc: Exception):
    async def mutate(*args, **kwargs):
        raise exc

    return mutate


def test_success_returns_response_and_shows_message(sink):
    calls = []

    async def mutate(notice_id, payload):
        calls.append((notice_id, payload))
        return MutationEnvelope(data={"id": notice_id}, message="Notice updated")

    command = MutationCommand(mutate)
    response = asyncio.run(command.invoke("7", {"title": "Hello"}))

    assert calls == [("7", {"title": "Hello"})]
    assert response.data == {"id": "7"}
    assert command.state.loading is False
    assert command.state.error is None

    [notification] = sink.notifications
    assert notification.title == "Request succeeded"
    assert notification.description == "Notice updated"
    assert notification.type == "success"
    assert notification.duration == 3000
    assert notification.error is None


def test_success_without_message_is_silent(sink):
    async def mutate():
        return MutationEnvelope()

    command = MutationCommand(mutate)
    response = asyncio.run(command.invoke())

    assert response is not None
    assert response == MutationEnvelope(data=None, message=None)
    assert sink.notifications == []


def test_dict_responses_are_supported(sink):
    async def mutate():
        return {"data": None, "message": "Deleted"}

    response = asyncio.run(MutationCommand(mutate).invoke())

    assert response == {"data": None, "message": "Deleted"}
    assert sink.notifications[0].description == "Deleted"


def test_failure_returns_none_and_records_server_message(sink):
    command = MutationCommand(_failing(ServerError("Email already registered", status_code=409)))

    response = asyncio.run(command.invoke({"email": "a@b.c"}))

    assert response is None
    assert command.state.error == "Email already registered"
    assert command.state.loading is False

    [notification] = sink.notifications
    assert notification.title == "Request failed"
    assert notification.type == "error"
    assert notification.description == "Email already registered"
    assert notification.error == "Email already registered"


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (TransportError("All connection attempts failed"), "All connection attempts failed"),
        (ServerError(None, status_code=500), "Request failed with status 500"),
        (ValueError(), MUTATION_FALLBACK_MESSAGE),
    ],
)
def test_failure_message_precedence(sink, exc, expected):
    command = MutationCommand(_failing(exc))

    assert asyncio.run(command.invoke()) is None
    assert command.state.error == expected


def test_loading_is_true_while_request_runs(sink):
    observed = {}
    command: MutationCommand

    async def mutate():
        observed["loading"] = command.state.loading
        return MutationEnvelope()

    command = MutationCommand(mutate)
    asyncio.run(command.invoke())

    assert observed["loading"] is True
    assert command.state.loading is False


def test_error_is_cleared_by_next_success(sink):
    outcomes = [TransportError("offline"), MutationEnvelope(message="Saved")]

    async def mutate():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    command = MutationCommand(mutate)

    async def scenario():
        first = await command.invoke()
        failed_error = command.state.error
        second = await command.invoke()
        return first, failed_error, second

    first, failed_error, second = asyncio.run(scenario())

    assert first is None
    assert failed_error == "offline"
    assert second.message == "Saved"
    assert command.state.error is None
    assert [item.type for item in sink.notifications] == ["error", "success"]


def test_explicit_sink_takes_precedence_over_global(sink):
    local = CollectingNotificationSink()
    command = MutationCommand(_failing(TransportError("offline")), sink=local)

    asyncio.run(command.invoke())

    assert len(local.notifications) == 1
    assert sink.notifications == []


def test_invoke_and_refetch_only_refreshes_after_success(sink):
    fetches = []

    async def fetch(*params):
        fetches.append(params)
        return ListEnvelope(data={"dtoList": [], "meta": None})

    query = ListQuery(fetch, "dtoList")
    ok = MutationCommand(lambda organization_id: _done(organization_id))
    failing = MutationCommand(_failing(ServerError("Organization has members", status_code=409)))

    async def scenario():
        await query.set_params("", "", "", 1, 10)
        first = await invoke_and_refetch(ok, query, "3")
        second = await invoke_and_refetch(failing, query, "4")
        return first, second

    first, second = asyncio.run(scenario())

    assert first.data == {"id": "3", "status": "INACTIVE"}
    assert second is None
    assert fetches == [("", "", "", 1, 10), ("", "", "", 1, 10)]


async def _done(organization_id):
    return MutationEnvelope(data={"id": organization_id, "status": "INACTIVE"}, message="Status changed")
