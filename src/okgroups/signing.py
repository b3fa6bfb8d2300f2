"""Request signing for the OK REST gateway.

A request is authenticated by a ``sig`` query parameter computed as::

    md5( k1=v1 k2=v2 ... kn=vn secret )

where the ``ki=vi`` pairs are sorted by key and joined with no separator.
Sorting normalises insertion order, so the result depends only on the
*set* of parameters and the secret.

Python compares ``str`` by code point, which for UTF-8 encoded text is
the same order as a byte-wise comparison of the encoded keys.
"""

from __future__ import annotations

from collections.abc import Mapping

from okgroups.utils.hashing import md5_hash

SIG_PARAM = "sig"


def canonicalize(params: Mapping[str, str]) -> str:
    """Return the canonical ``key=value`` concatenation of *params*.

    >>> canonicalize({"uid": "1", "count": "5"})
    'count=5uid=1'
    """
    return "".join(f"{key}={params[key]}" for key in sorted(params))


def sign(params: Mapping[str, str], secret: str) -> str:
    """Compute the request signature for *params* with *secret*.

    Parameters
    ----------
    params:
        Flat mapping of parameter names to values.  May be empty.  Must
        not contain ``sig`` itself.
    secret:
        Shared application secret appended after the canonical string.

    Returns
    -------
    str
        A 32-character lowercase hexadecimal MD5 digest.
    """
    return md5_hash(canonicalize(params) + secret)


def signed(params: Mapping[str, str], secret: str) -> dict[str, str]:
    """Return a copy of *params* with the ``sig`` parameter attached.

    Any ``sig`` already present in *params* is excluded from the signed
    content and replaced.
    """
    unsigned = {k: v for k, v in params.items() if k != SIG_PARAM}
    return {**unsigned, SIG_PARAM: sign(unsigned, secret)}
