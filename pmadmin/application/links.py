"""Editable list of named links attached to a project form."""
from __future__ import annotations

from typing import Awaitable, Callable, Iterable

from pmadmin.core.errors import UnreachableResourceError, ValidationError
from pmadmin.domain import Link
from pmadmin.infrastructure.link_probe import check_url_exists
from pmadmin.infrastructure.notifications import (
    NotificationSink,
    failure_notification,
    get_notification_sink,
)

MISSING_LINK_MESSAGE = "Enter both a link and a name."


class LinkListEditor:
    """Holds the links of a form plus the two pending input fields."""

    def __init__(
        self,
        links: Iterable[Link] = (),
        *,
        probe: Callable[[str], Awaitable[bool]] = check_url_exists,
        sink: NotificationSink | None = None,
    ) -> None:
        self.links: list[Link] = list(links)
        self.new_url = ""
        self.new_name = ""
        self.checking = False
        self._probe = probe
        self._sink = sink

    async def _validated_link(self) -> Link:
        if not self.new_url or not self.new_name:
            raise ValidationError(MISSING_LINK_MESSAGE)

        self.checking = True
        try:
            exists = await self._probe(self.new_url)
        finally:
            self.checking = False
        if not exists:
            raise UnreachableResourceError(self.new_url)
        return Link(name=self.new_name, url=self.new_url)

    async def add_link(self) -> Link | None:
        """Append the pending link if both fields are set and it is reachable.

        On rejection the list and the input fields are left untouched and a
        failure notification is emitted.
        """

        try:
            link = await self._validated_link()
        except (ValidationError, UnreachableResourceError) as exc:
            (self._sink or get_notification_sink()).show(failure_notification(str(exc)))
            return None

        self.links.append(link)
        self.new_url = ""
        self.new_name = ""
        return link

    def remove_link(self, index: int) -> None:
        self.links = [link for position, link in enumerate(self.links) if position != index]
