"""okgroups — signed client and probe harness for the OK REST gateway.

Public re-exports
-----------------

* **Clients:** :class:`OkClient`, :class:`AsyncOkClient`
* **Configuration:** :class:`OkConfig`
* **Signing:** :func:`sign`, :func:`canonicalize`, :func:`signed`
* **Errors:** Every :class:`OkError` subclass and :class:`ErrorCode`
* **Models:** Records, enums and result types

Usage::

    from okgroups import OkClient, OkConfig

    with OkClient(OkConfig(application_key="...", secret_key="...", uid="...")) as client:
        result = client.get_user_groups(count=5)
"""

from __future__ import annotations

from okgroups.async_client import AsyncOkClient

# ── Clients ────────────────────────────────────────────────────────────
from okgroups.client import OkClient

# ── Configuration ───────────────────────────────────────────────────────
from okgroups.config import DEFAULT_BASE_URL, GET_USER_GROUPS_METHOD, OkConfig

# ── Errors ──────────────────────────────────────────────────────────────
from okgroups.errors import (
    ErrorCode,
    OkApiError,
    OkConfigError,
    OkDecodeError,
    OkError,
    OkHttpError,
    OkNetworkError,
    ProbeAssertionError,
)

# ── Models ──────────────────────────────────────────────────────────────
from okgroups.models import (
    ApiError,
    GroupRecord,
    GroupRole,
    GroupsResult,
    PagingDirection,
)

# ── Signing ─────────────────────────────────────────────────────────────
from okgroups.signing import canonicalize, sign, signed

__all__ = [
    # Clients
    "OkClient",
    "AsyncOkClient",
    # Configuration
    "OkConfig",
    "DEFAULT_BASE_URL",
    "GET_USER_GROUPS_METHOD",
    # Signing
    "sign",
    "signed",
    "canonicalize",
    # Errors
    "OkError",
    "ErrorCode",
    "OkConfigError",
    "OkNetworkError",
    "OkHttpError",
    "OkDecodeError",
    "OkApiError",
    "ProbeAssertionError",
    # Models
    "GroupRecord",
    "GroupRole",
    "PagingDirection",
    "ApiError",
    "GroupsResult",
]
