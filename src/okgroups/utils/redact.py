"""Secret redaction for safe logging.

Before any request parameters or response bodies are written to logs or
debug dumps the :func:`redact` function must be applied.  It enforces the
following rules:

* Values under **sensitive keys** (``secret_key``, ``session_key``,
  ``sig`` and anything containing ``secret``/``token``/``password``) are
  replaced with a masked placeholder showing at most the last four
  characters.
* Every occurrence of an explicitly supplied **secret string** is scrubbed
  from all string values, including URLs whose query string carries it.
* The full secret is never present in the output.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

# Substrings: if any of these appear in a key name (case-insensitive), the
# value is redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "secret",
    "session",
    "token",
    "password",
    "signature",
})

# Keys redacted only on an exact (case-insensitive) match; ``sig`` as a
# substring would also hit unrelated keys.
_SENSITIVE_EXACT_KEYS: frozenset[str] = frozenset({"sig"})


def _placeholder(value: str) -> str:
    if len(value) >= 8:
        return f"<redacted:...{value[-4:]}>"
    return "<redacted>"


def _scrub(value: str, secrets: tuple[str, ...]) -> str:
    for secret in secrets:
        if secret and secret in value:
            value = value.replace(secret, _placeholder(secret))
    return value


def _is_sensitive(key: Any) -> bool:
    if not isinstance(key, str):
        return False
    key_lower = key.lower()
    if key_lower in _SENSITIVE_EXACT_KEYS:
        return True
    return any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS)


def _redact_value(value: Any, secrets: tuple[str, ...]) -> Any:
    """Redact a single value (recursive for dicts / lists)."""
    if isinstance(value, dict):
        return _redact_dict(value, secrets)
    if isinstance(value, list):
        return [_redact_value(item, secrets) for item in value]
    if isinstance(value, str):
        return _scrub(value, secrets)
    return value


def _redact_dict(d: dict, secrets: tuple[str, ...]) -> dict:
    """Recursively redact a dictionary."""
    result: dict = {}
    for key, value in d.items():
        if _is_sensitive(key):
            result[key] = _placeholder(value) if isinstance(value, str) else "<redacted>"
        else:
            result[key] = _redact_value(value, secrets)
    return result


def redact(payload: dict, secrets: Iterable[str | None] = ()) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (typically query parameters or a debug
        dump of a request/response pair).
    secrets:
        Exact strings (shared secret, session key) to scrub wherever they
        appear.  ``None`` and empty entries are ignored.

    Returns
    -------
    dict
        A new dictionary with all sensitive data removed.  The original
        *payload* is never mutated.

    Examples
    --------
    >>> redact({"uid": "42", "sig": "0123456789abcdef"})
    {'uid': '42', 'sig': '<redacted:...cdef>'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, tuple(s for s in secrets if s))
