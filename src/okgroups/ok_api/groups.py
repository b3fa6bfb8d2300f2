"""Group API wrappers for the OK REST gateway.

Provides :class:`GroupAPI` (sync) and :class:`AsyncGroupAPI` (async) thin
wrappers around ``group.getUserGroupsV2``.  Both build the parameter set
and delegate signing and HTTP concerns to the underlying transport.

Parameter values are forwarded as given (``count=-1`` or
``direction="wrong"`` are sent unchanged) so that the gateway's own
validation can be exercised.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Mapping
from enum import Enum

from okgroups.models import GroupRecord, GroupsResult, PagingDirection

from .transport import AsyncOkTransport, OkTransport


def _text(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class _GroupParams:
    """Parameter-set construction shared by the sync and async wrappers."""

    def __init__(self, transport: OkTransport | AsyncOkTransport) -> None:
        self._transport = transport
        self._config = transport.config

    def base_params(self) -> dict[str, str]:
        """Return a fresh parameter set with the required parameters."""
        params = {
            "application_key": self._config.application_key,
            "method": self._config.method,
            "uid": self._config.uid,
        }
        if self._config.session_key:
            params["session_key"] = self._config.session_key
        return params

    def build_params(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
        anchor: str | None = None,
        direction: PagingDirection | str | None = None,
    ) -> dict[str, str]:
        """Return the parameter set for one ``getUserGroupsV2`` call.

        Parameters
        ----------
        uid:
            User whose groups to list.  Defaults to ``config.uid``.
        count:
            Page size.  The gateway accepts ``1..100``.
        anchor:
            Paging cursor from a previous :class:`GroupsResult`.
        direction:
            Paging direction relative to *anchor*.
        """
        params = self.base_params()
        if uid is not None:
            params["uid"] = uid
        if count is not None:
            params["count"] = _text(count)
        if anchor is not None:
            params["anchor"] = anchor
        if direction is not None:
            params["direction"] = _text(direction)
        return params


class GroupAPI(_GroupParams):
    """Synchronous wrapper for ``group.getUserGroupsV2``.

    Parameters
    ----------
    transport:
        A configured :class:`OkTransport` instance.
    """

    def __init__(self, transport: OkTransport) -> None:
        super().__init__(transport)

    def fetch(
        self,
        params: Mapping[str, str],
        *,
        sig: str | None = None,
    ) -> GroupsResult:
        """Send an already-built parameter set and decode the result.

        *sig* overrides the computed signature.
        """
        status_code, body = self._transport.call(params, sig=sig)
        return GroupsResult.from_json(status_code, body)

    def get_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
        anchor: str | None = None,
        direction: PagingDirection | str | None = None,
    ) -> GroupsResult:
        """List the groups of a user, one page.

        Application errors are reported on :attr:`GroupsResult.error`; call
        :meth:`GroupsResult.raise_for_error` to turn them into exceptions.
        """
        return self.fetch(
            self.build_params(uid, count=count, anchor=anchor, direction=direction)
        )

    def iter_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
    ) -> Iterator[GroupRecord]:
        """Iterate over every group of a user, following paging anchors.

        Raises :class:`~okgroups.errors.OkApiError` if any page reports an
        application error.
        """
        anchor: str | None = None
        seen: set[str] = set()
        while True:
            direction = PagingDirection.FORWARD if anchor is not None else None
            result = self.get_user_groups(
                uid, count=count, anchor=anchor, direction=direction,
            ).raise_for_error()
            yield from result.groups

            if not result.groups or result.anchor is None or result.anchor in seen:
                break
            seen.add(result.anchor)
            anchor = result.anchor


class AsyncGroupAPI(_GroupParams):
    """Asynchronous wrapper for ``group.getUserGroupsV2``.

    Mirrors :class:`GroupAPI` but all methods are coroutines.
    """

    def __init__(self, transport: AsyncOkTransport) -> None:
        super().__init__(transport)

    async def fetch(
        self,
        params: Mapping[str, str],
        *,
        sig: str | None = None,
    ) -> GroupsResult:
        """Send an already-built parameter set (async).

        See :meth:`GroupAPI.fetch`.
        """
        status_code, body = await self._transport.call(params, sig=sig)
        return GroupsResult.from_json(status_code, body)

    async def get_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
        anchor: str | None = None,
        direction: PagingDirection | str | None = None,
    ) -> GroupsResult:
        """List the groups of a user, one page (async)."""
        return await self.fetch(
            self.build_params(uid, count=count, anchor=anchor, direction=direction)
        )

    async def iter_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
    ) -> AsyncIterator[GroupRecord]:
        """Async equivalent of :meth:`GroupAPI.iter_user_groups`."""
        anchor: str | None = None
        seen: set[str] = set()
        while True:
            direction = PagingDirection.FORWARD if anchor is not None else None
            result = await self.get_user_groups(
                uid, count=count, anchor=anchor, direction=direction,
            )
            result.raise_for_error()
            for group in result.groups:
                yield group

            if not result.groups or result.anchor is None or result.anchor in seen:
                break
            seen.add(result.anchor)
            anchor = result.anchor
