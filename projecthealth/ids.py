"""Deterministic identifiers for issues and pattern matches.

Every id is ``<prefix>-<digest>`` where ``digest`` is the first 12 hex
characters of the SHA-256 of the UTF-8 encoded parts joined with ``"\\n"``.
Identical findings therefore keep the same id across scans and across
machines, which is what decision tracking relies on.
"""

from __future__ import annotations

import hashlib

_DIGEST_LENGTH = 12


def digest(*parts: str) -> str:
    payload = "\n".join(parts).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()[:_DIGEST_LENGTH]


def stable_id(prefix: str, *parts: str) -> str:
    """Return ``prefix`` joined with the digest of ``parts``."""
    return f"{prefix}-{digest(*parts)}"


__all__ = ["digest", "stable_id"]
