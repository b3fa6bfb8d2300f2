"""Public data models for the okgroups SDK.

Records returned by the gateway are deserialised into frozen dataclasses.
Closed enumerations (:class:`GroupRole`) are validated at deserialisation
time: an unknown tag raises :class:`~okgroups.errors.OkDecodeError` instead
of being carried along as free text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from okgroups.errors import OkApiError, OkDecodeError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class GroupRole(str, Enum):
    """Role of a user inside a group."""

    ADMIN = "ADMIN"
    ANALYST = "ANALYST"
    EDITOR = "EDITOR"
    MODERATOR = "MODERATOR"
    SUPER_MODERATOR = "SUPER_MODERATOR"
    MEMBER = "MEMBER"

    @classmethod
    def parse(cls, value: Any) -> GroupRole:
        """Return the member for *value*, raising on an unknown tag."""
        try:
            return cls(value)
        except ValueError as exc:
            raise OkDecodeError(
                f"Unknown group role {value!r}",
                context={"field": "role", "value": value},
                cause=exc,
            ) from exc


class PagingDirection(str, Enum):
    """Values accepted by the ``direction`` paging parameter."""

    AROUND = "AROUND"
    """Return items on both sides of the anchor."""

    FORWARD = "FORWARD"
    """Return items after the anchor."""

    BACKWARD = "BACKWARD"
    """Return items before the anchor."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_text(data: dict, key: str) -> str:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise OkDecodeError(
            f"Group record field {key!r} must be text, got {value!r}",
            context={"field": key, "value": value},
        )
    return str(value)


def _optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise OkDecodeError(
            f"Group record field {key!r} must be text or null, got {value!r}",
            context={"field": key, "value": value},
        )
    return value


def _optional_int(data: dict, key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise OkDecodeError(
            f"Group record field {key!r} must be an integer, got {value!r}",
            context={"field": key, "value": value},
        )
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise OkDecodeError(
                f"Group record field {key!r} must be an integer, got {value!r}",
                context={"field": key, "value": value},
                cause=exc,
            ) from exc
    raise OkDecodeError(
        f"Group record field {key!r} must be an integer, got {value!r}",
        context={"field": key, "value": value},
    )


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GroupRecord:
    """One entry of a ``group.getUserGroupsV2`` response.

    Attributes
    ----------
    group_id:
        Group identifier (``groupId``).
    user_id:
        User identifier (``userId``).
    role:
        The user's role in the group.
    status:
        Membership status as reported by the gateway.
    block_reason:
        Why the user is blocked, if they are.
    unblock_date_ms:
        When a block expires, in epoch milliseconds.
    """

    group_id: str
    user_id: str
    role: GroupRole
    status: str
    block_reason: str | None = None
    unblock_date_ms: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> GroupRecord:
        if not isinstance(data, dict):
            raise OkDecodeError(
                f"Group record must be a JSON object, got {type(data).__name__}",
                context={"value": data},
            )
        return cls(
            group_id=_require_text(data, "groupId"),
            user_id=_require_text(data, "userId"),
            role=GroupRole.parse(data.get("role")),
            status=_require_text(data, "status"),
            block_reason=_optional_text(data, "block_reason"),
            unblock_date_ms=_optional_int(data, "unblock_date_ms"),
        )

    def to_json(self) -> dict[str, Any]:
        """Return the wire shape of this record."""
        return {
            "block_reason": self.block_reason,
            "groupId": self.group_id,
            "role": self.role.value,
            "status": self.status,
            "unblock_date_ms": self.unblock_date_ms,
            "userId": self.user_id,
        }


@dataclass(frozen=True)
class ApiError:
    """Application-level error payload (``error_code`` / ``error_msg``)."""

    error_code: int
    error_msg: str
    error_data: Any | None = None

    @classmethod
    def from_json(cls, data: dict) -> ApiError:
        code = data.get("error_code")
        try:
            error_code = int(code)
        except (TypeError, ValueError) as exc:
            raise OkDecodeError(
                f"error_code must be an integer, got {code!r}",
                context={"field": "error_code", "value": code},
                cause=exc,
            ) from exc
        return cls(
            error_code=error_code,
            error_msg=str(data.get("error_msg") or ""),
            error_data=data.get("error_data"),
        )


@dataclass
class GroupsResult:
    """Outcome of a single ``group.getUserGroupsV2`` call.

    Exactly one of ``groups`` (possibly empty) or ``error`` is meaningful:
    when the gateway reports an application error, ``error`` is set and
    ``groups`` is empty.

    Attributes
    ----------
    status_code:
        HTTP status of the response.  The gateway reports application
        errors with ``200``.
    groups:
        Deserialised group records.
    anchor:
        Paging cursor to pass back for the next page, if any.
    error:
        Application-level error, if the call failed.
    raw:
        The decoded JSON body.
    """

    status_code: int
    groups: list[GroupRecord] = field(default_factory=list)
    anchor: str | None = None
    error: ApiError | None = None
    raw: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_json(cls, status_code: int, body: dict) -> GroupsResult:
        if "error_code" in body:
            return cls(
                status_code=status_code,
                error=ApiError.from_json(body),
                raw=body,
            )
        raw_groups = body.get("groups") or []
        if not isinstance(raw_groups, list):
            raise OkDecodeError(
                "'groups' must be a JSON array",
                context={"field": "groups", "value": raw_groups},
            )
        anchor = body.get("anchor")
        return cls(
            status_code=status_code,
            groups=[GroupRecord.from_json(item) for item in raw_groups],
            anchor=str(anchor) if anchor is not None else None,
            raw=body,
        )

    def raise_for_error(self) -> GroupsResult:
        """Raise :class:`OkApiError` if the gateway reported an error.

        Returns ``self`` so calls can be chained.
        """
        if self.error is not None:
            raise OkApiError(
                f"API error {self.error.error_code}: {self.error.error_msg}",
                context={
                    "error_code": self.error.error_code,
                    "error_msg": self.error.error_msg,
                    "error_data": self.error.error_data,
                },
            )
        return self
