"""MD5 helper used for request signatures.

The gateway authenticates requests with an MD5 digest over the canonical
parameter string; this is a protocol requirement, not a security choice.
"""

from __future__ import annotations

import hashlib


def md5_hash(data: str) -> str:
    """Return the hex-encoded MD5 digest of *data*.

    The string is encoded as UTF-8 before hashing.

    Parameters
    ----------
    data:
        Arbitrary string to hash.

    Returns
    -------
    str
        A 32-character lowercase hexadecimal string.

    Examples
    --------
    >>> md5_hash("hello")
    '5d41402abc4b2a76b9719d911017c592'
    """
    return hashlib.md5(data.encode("utf-8")).hexdigest()
