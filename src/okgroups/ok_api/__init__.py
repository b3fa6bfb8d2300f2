"""okgroups.ok_api -- gateway transport and method wrappers.

This sub-package provides:

* :mod:`.transport` -- signed GET transport (sync and async).
* :mod:`.groups` -- ``group.getUserGroupsV2`` wrappers.
"""

from __future__ import annotations

from .groups import AsyncGroupAPI, GroupAPI
from .transport import AsyncOkTransport, OkTransport

__all__ = [
    "AsyncGroupAPI",
    "AsyncOkTransport",
    "GroupAPI",
    "OkTransport",
]
