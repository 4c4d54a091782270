from __future__ import annotations

import asyncio
import sys
from functools import partial
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import httpx
import pytest

from pmadmin.application.links import MISSING_LINK_MESSAGE, LinkListEditor
from pmadmin.domain import Link
from pmadmin.infrastructure.link_probe import build_probe_url, check_url_exists, normalize_url
from pmadmin.infrastructure.notifications import CollectingNotificationSink


class RecordingTransport:
    def __init__(self, status_code: int = 200, error: Exception | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return httpx.Response(self._status_code)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def test_normalize_url_adds_https_only_without_scheme():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("http://example.com/a") == "http://example.com/a"
    assert normalize_url("https://example.com") == "https://example.com"


def test_probe_issues_head_request_to_normalized_url():
    transport = RecordingTransport(200)

    exists = asyncio.run(check_url_exists("example.com", client=transport.client()))

    assert exists is True
    [request] = transport.requests
    assert request.method == "HEAD"
    assert request.url.scheme == "https"
    assert request.url.host == "example.com"


@pytest.mark.parametrize("status_code", [401, 403, 405, 501])
def test_opaque_results_count_as_existing(status_code):
    transport = RecordingTransport(status_code)

    assert asyncio.run(check_url_exists("https://intranet.example.com", client=transport.client())) is True


@pytest.mark.parametrize("status_code", [404, 410, 500])
def test_missing_resources_do_not_exist(status_code):
    transport = RecordingTransport(status_code)

    assert asyncio.run(check_url_exists("example.com/gone", client=transport.client())) is False


def test_transport_failure_means_missing():
    transport = RecordingTransport(error=httpx.ConnectError("name resolution failed"))

    assert asyncio.run(check_url_exists("no-such-host.invalid", client=transport.client())) is False
    assert len(transport.requests) == 1


@pytest.mark.parametrize("url", ["", "https://", "http://"])
def test_malformed_urls_are_rejected_without_network(url):
    transport = RecordingTransport(200)

    assert build_probe_url(url) is None
    assert asyncio.run(check_url_exists(url, client=transport.client())) is False
    assert transport.requests == []


def test_supplied_client_is_left_open():
    transport = RecordingTransport(200)
    client = transport.client()

    asyncio.run(check_url_exists("example.com", client=client))

    assert not client.is_closed


class FakeProbe:
    def __init__(self, result: bool) -> None:
        self.result = result
        self.calls: list[str] = []

    async def __call__(self, url: str) -> bool:
        self.calls.append(url)
        return self.result


def test_link_editor_scenario():
    probe = FakeProbe(True)
    sink = CollectingNotificationSink()
    editor = LinkListEditor(probe=probe, sink=sink)

    editor.new_name = ""
    editor.new_url = "x.com"
    rejected = asyncio.run(editor.add_link())

    assert rejected is None
    assert editor.links == []
    assert probe.calls == []
    assert sink.notifications[0].description == MISSING_LINK_MESSAGE
    assert sink.notifications[0].type == "error"

    editor.new_name = "Site"
    added = asyncio.run(editor.add_link())

    assert added == Link(name="Site", url="x.com")
    assert editor.links == [Link(name="Site", url="x.com")]
    assert editor.new_url == ""
    assert editor.new_name == ""
    assert probe.calls == ["x.com"]
    assert editor.checking is False


def test_link_editor_rejects_unreachable_link():
    sink = CollectingNotificationSink()
    editor = LinkListEditor([Link("Docs", "docs.example.com")], probe=FakeProbe(False), sink=sink)
    editor.new_name = "Broken"
    editor.new_url = "broken.example.com"

    assert asyncio.run(editor.add_link()) is None

    assert editor.links == [Link("Docs", "docs.example.com")]
    assert editor.new_url == "broken.example.com"
    assert editor.new_name == "Broken"
    [notification] = sink.notifications
    assert notification.title == "Request failed"
    assert notification.description == "The URL does not exist."


def test_link_editor_marks_checking_during_probe():
    observed = {}
    editor: LinkListEditor

    async def probe(url: str) -> bool:
        observed["checking"] = editor.checking
        return True

    editor = LinkListEditor(probe=probe, sink=CollectingNotificationSink())
    editor.new_name = "Site"
    editor.new_url = "x.com"
    asyncio.run(editor.add_link())

    assert observed["checking"] is True
    assert editor.checking is False


def test_remove_link_drops_only_that_index():
    first = Link("First", "a.com")
    second = Link("Second", "b.com")
    editor = LinkListEditor([first, second], probe=FakeProbe(True), sink=CollectingNotificationSink())

    editor.remove_link(0)

    assert editor.links == [second]


def test_link_editor_with_http_probe():
    transport = RecordingTransport(405)
    editor = LinkListEditor(
        probe=partial(check_url_exists, client=transport.client()),
        sink=CollectingNotificationSink(),
    )
    editor.new_name = "Tracker"
    editor.new_url = "tracker.example.com"

    asyncio.run(editor.add_link())

    assert editor.links == [Link("Tracker", "tracker.example.com")]
    assert transport.requests[0].url.host == "tracker.example.com"
