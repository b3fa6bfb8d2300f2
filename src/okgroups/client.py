"""Synchronous okgroups client.

Usage::

    from okgroups import OkClient, OkConfig

    config = OkConfig(application_key="...", secret_key="...", uid="...")
    with OkClient(config) as client:
        result = client.get_user_groups(count=10)
        for group in result.raise_for_error().groups:
            print(group.group_id, group.role)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from okgroups.config import OkConfig
from okgroups.models import GroupRecord, GroupsResult, PagingDirection
from okgroups.ok_api.groups import GroupAPI
from okgroups.ok_api.transport import OkTransport


class OkClient:
    """Synchronous client for the OK REST gateway.

    Parameters
    ----------
    config:
        Client configuration.  When omitted, an :class:`OkConfig` is built
        from ``**kwargs``.
    """

    def __init__(self, config: OkConfig | None = None, **kwargs: Any) -> None:
        self._config = config if config is not None else OkConfig(**kwargs)
        self._transport = OkTransport(self._config)
        self._groups = GroupAPI(self._transport)

    @property
    def config(self) -> OkConfig:
        return self._config

    @property
    def groups(self) -> GroupAPI:
        return self._groups

    def get_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
        anchor: str | None = None,
        direction: PagingDirection | str | None = None,
    ) -> GroupsResult:
        """List one page of a user's groups.  See :meth:`GroupAPI.get_user_groups`."""
        return self._groups.get_user_groups(
            uid, count=count, anchor=anchor, direction=direction,
        )

    def iter_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
    ) -> Iterator[GroupRecord]:
        """Iterate over all of a user's groups across pages."""
        return self._groups.iter_user_groups(uid, count=count)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> OkClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
