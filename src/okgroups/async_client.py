"""Asynchronous okgroups client.

:class:`AsyncOkClient` mirrors :class:`OkClient` but every I/O method is a
coroutine.  Because configuration is an explicit value, several clients
with different credentials can run concurrently.

Usage::

    import asyncio
    from okgroups import AsyncOkClient, OkConfig

    async def main():
        async with AsyncOkClient(OkConfig.from_env()) as client:
            result = await client.get_user_groups(count=5)
            print(len(result.groups))

    asyncio.run(main())
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from okgroups.config import OkConfig
from okgroups.models import GroupRecord, GroupsResult, PagingDirection
from okgroups.ok_api.groups import AsyncGroupAPI
from okgroups.ok_api.transport import AsyncOkTransport


class AsyncOkClient:
    """Asynchronous client for the OK REST gateway.

    Parameters
    ----------
    config:
        Client configuration.  When omitted, an :class:`OkConfig` is built
        from ``**kwargs``.
    """

    def __init__(self, config: OkConfig | None = None, **kwargs: Any) -> None:
        self._config = config if config is not None else OkConfig(**kwargs)
        self._transport = AsyncOkTransport(self._config)
        self._groups = AsyncGroupAPI(self._transport)

    @property
    def config(self) -> OkConfig:
        return self._config

    @property
    def groups(self) -> AsyncGroupAPI:
        return self._groups

    async def get_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
        anchor: str | None = None,
        direction: PagingDirection | str | None = None,
    ) -> GroupsResult:
        return await self._groups.get_user_groups(
            uid, count=count, anchor=anchor, direction=direction,
        )

    def iter_user_groups(
        self,
        uid: str | None = None,
        *,
        count: int | str | None = None,
    ) -> AsyncIterator[GroupRecord]:
        return self._groups.iter_user_groups(uid, count=count)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncOkClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
