"""
Core Utilities.

Shared utility functions used across the backend.
"""

import hashlib
import ipaddress
import json
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from starlette.requests import Request


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and assumed
    to be UTC, which keeps database storage consistent.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _in_networks(
    address: str,
    networks: list[ipaddress.IPv4Network | ipaddress.IPv6Network],
) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return any(ip in network for network in networks)


def get_client_ip(request: Request, trusted_proxies: Iterable[Any] = ()) -> str:
    """
    Client address for logging, auditing and throttling.

    X-Forwarded-For is only honoured when the direct peer is one of
    trusted_proxies (addresses or CIDR networks). The chain is then walked
    from the right and the first hop that is not a trusted proxy wins.
    """
    peer = request.client.host if request.client else "unknown"
    networks = [ipaddress.ip_network(str(entry), strict=False) for entry in trusted_proxies]
    if not networks or not _in_networks(peer, networks):
        return peer

    forwarded = request.headers.get("x-forwarded-for", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    for hop in reversed(hops):
        if not _in_networks(hop, networks):
            return hop
    return hops[0] if hops else peer


def to_json(value: Any, limit: int | None = None) -> str:
    """Serialize for storage; falls back to str() for unknown types."""
    text = json.dumps(value, ensure_ascii=False, default=str)
    if limit is not None and len(text) > limit:
        return text[:limit]
    return text


def digest(value: str) -> str:
    """Short stable fingerprint of a string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:32]
