from __future__ import annotations

import ipaddress
import secrets
from functools import lru_cache

from fastapi import Request

ADMIN_TOKEN_HEADER = "X-Admin-Token"

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def is_valid_admin_token(*, expected_token: str, received_token: str | None) -> bool:
    if not expected_token or not received_token:
        return False
    return secrets.compare_digest(expected_token, received_token)


@lru_cache(maxsize=32)
def parse_networks(raw_networks: str) -> tuple[IPNetwork, ...]:
    """Parses a comma separated list of IPs and CIDRs, skipping malformed entries."""
    networks: list[IPNetwork] = []
    for entry in (item.strip() for item in raw_networks.split(",")):
        if not entry:
            continue
        try:
            networks.append(ipaddress.ip_network(entry, strict=False))
        except ValueError:
            continue
    return tuple(networks)


def _parse_ip(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def is_client_ip_allowed(*, client_ip: str | None, allowlist: str) -> bool:
    parsed_ip = _parse_ip(client_ip)
    if parsed_ip is None:
        return False
    address = ipaddress.ip_address(parsed_ip)
    return any(address in network for network in parse_networks(allowlist))


def extract_client_ip(request: Request, *, trusted_proxies: str = "") -> str | None:
    peer_ip = _parse_ip(request.client.host if request.client is not None else None)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if not forwarded_for:
        return peer_ip
    if not is_client_ip_allowed(client_ip=peer_ip, allowlist=trusted_proxies):
        return peer_ip
    return _parse_ip(forwarded_for.split(",", maxsplit=1)[0])


def is_admin_request_allowed(
    request: Request,
    *,
    expected_token: str,
    allowlist: str,
    trusted_proxies: str = "",
) -> tuple[bool, str | None]:
    """Returns ``(allowed, reason)``; ``reason`` is set when the request is rejected."""
    client_ip = extract_client_ip(request, trusted_proxies=trusted_proxies)
    if not is_client_ip_allowed(client_ip=client_ip, allowlist=allowlist):
        return False, "ip_not_allowed"
    if not is_valid_admin_token(
        expected_token=expected_token,
        received_token=request.headers.get(ADMIN_TOKEN_HEADER),
    ):
        return False, "invalid_credentials"
    return True, None
