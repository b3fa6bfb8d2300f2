"""SDK configuration for okgroups.

:class:`OkConfig` captures every knob exposed by the SDK.  Instances are
passed explicitly to :class:`OkClient`, :class:`AsyncOkClient` and
:class:`~okgroups.probe.ApiProbe`; nothing is read from module-level state,
so independent configurations can be used side by side.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

from okgroups.errors import OkConfigError

DEFAULT_BASE_URL = "https://api.ok.ru/fb.do"
"""REST gateway endpoint; every API method is a GET against this URL."""

GET_USER_GROUPS_METHOD = "group.getUserGroupsV2"

_MASKED_FIELDS = frozenset({"secret_key", "session_key"})


def _mask(value: str | None) -> str | None:
    if value is None:
        return None
    return f"...{value[-4:]}" if len(value) >= 8 else "****"


@dataclass
class OkConfig:
    """Complete configuration for an okgroups client.

    Parameters
    ----------
    application_key:
        Public application key issued by the platform.
    secret_key:
        Shared application secret appended to the canonical parameter
        string before hashing.  Never logged.
    uid:
        Identifier of the user whose groups are requested.
    base_url:
        Gateway URL.  Override for proxy or testing environments.
    method:
        API method name sent in the ``method`` parameter.
    session_key:
        Optional session key; when set it is sent and signed with every
        request.  Never logged.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~okgroups.observability.MetricsHook` backend.
    debug_dump_payload:
        Write a redacted dump of every request/response to *stderr*.
    """

    # ── Credentials ─────────────────────────────────────────────────────
    application_key: str = ""

    secret_key: str = ""

    uid: str = ""

    session_key: str | None = None

    # ── Endpoint ────────────────────────────────────────────────────────
    base_url: str = DEFAULT_BASE_URL

    method: str = GET_USER_GROUPS_METHOD

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise OkConfigError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}",
                context={"field": "base_url", "value": self.base_url},
            )
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise OkConfigError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS or target localhost for testing.",
                context={"field": "base_url", "value": self.base_url},
            )
        if not self.method:
            raise OkConfigError(
                "method must not be empty",
                context={"field": "method", "value": self.method},
            )
        if self.timeout_seconds <= 0:
            raise OkConfigError(
                f"timeout_seconds must be > 0, got {self.timeout_seconds}",
                context={"field": "timeout_seconds", "value": self.timeout_seconds},
            )

    @classmethod
    def from_env(cls, prefix: str = "OK_", **overrides: Any) -> OkConfig:
        """Build a config from ``<prefix>APPLICATION_KEY``, ``<prefix>SECRET_KEY``,
        ``<prefix>UID`` and the optional ``<prefix>BASE_URL`` /
        ``<prefix>SESSION_KEY`` environment variables.

        Keyword *overrides* win over the environment.
        """
        values: dict[str, Any] = {
            "application_key": os.environ.get(f"{prefix}APPLICATION_KEY", ""),
            "secret_key": os.environ.get(f"{prefix}SECRET_KEY", ""),
            "uid": os.environ.get(f"{prefix}UID", ""),
        }
        base_url = os.environ.get(f"{prefix}BASE_URL")
        if base_url:
            values["base_url"] = base_url
        session_key = os.environ.get(f"{prefix}SESSION_KEY")
        if session_key:
            values["session_key"] = session_key
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """Mask secrets to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name in _MASKED_FIELDS:
                parts.append(f"{f.name}={_mask(val)!r}")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"OkConfig({', '.join(parts)})"
