"""Standalone digest program.

Prints the MD5 digest of a fixed canonical parameter string, the same
value :func:`okgroups.signing.sign` yields for :data:`REFERENCE_PARAMS`
with an empty secret.  Useful for checking a signer implementation by
hand.
"""

from __future__ import annotations

import sys

from okgroups.signing import canonicalize
from okgroups.utils.hashing import md5_hash

REFERENCE_PARAMS: dict[str, str] = {
    "application_key": "CQIKOELGDIHBABABA",
    "count": "5",
    "method": "group.getUserGroupsV2",
    "session_key": "12",
    "uid": "573382458991123",
}

REFERENCE_INPUT = canonicalize(REFERENCE_PARAMS)


def main() -> int:
    print(f"MD5 hash of input: {md5_hash(REFERENCE_INPUT)}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
