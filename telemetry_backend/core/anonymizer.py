"""
Peer id anonymization.

Protocol stats carry the reporting node's peer id; only its SHA-256 digest is
ever stored.
"""

from __future__ import annotations

import hashlib


def anonymize(peer_id: str) -> str:
    """Return the 64-char lowercase hex SHA-256 digest of peer_id (UTF-8)."""
    return hashlib.sha256(peer_id.encode("utf-8")).hexdigest()
