from __future__ import annotations

from types import SimpleNamespace

from jackpot.services.admin_auth import (
    extract_client_ip,
    is_admin_request_allowed,
    is_client_ip_allowed,
    is_valid_admin_token,
    parse_networks,
)


def _request(*, host: str, headers: dict[str, str] | None = None) -> SimpleNamespace:
    return SimpleNamespace(headers=headers or {}, client=SimpleNamespace(host=host))


def test_is_valid_admin_token_requires_exact_match() -> None:
    assert is_valid_admin_token(expected_token="secret", received_token="secret") is True
    assert is_valid_admin_token(expected_token="secret", received_token="wrong") is False
    assert is_valid_admin_token(expected_token="secret", received_token=None) is False


def test_is_valid_admin_token_rejects_empty_expected_token() -> None:
    assert is_valid_admin_token(expected_token="", received_token="") is False


def test_parse_networks_skips_malformed_entries() -> None:
    networks = parse_networks("127.0.0.1, not-a-network,,10.0.0.0/8")
    assert [str(network) for network in networks] == ["127.0.0.1/32", "10.0.0.0/8"]


def test_is_client_ip_allowed_supports_exact_ip_and_cidr() -> None:
    allowlist = "127.0.0.1,10.0.0.0/8"
    assert is_client_ip_allowed(client_ip="127.0.0.1", allowlist=allowlist) is True
    assert is_client_ip_allowed(client_ip="10.12.33.1", allowlist=allowlist) is True
    assert is_client_ip_allowed(client_ip="192.168.1.5", allowlist=allowlist) is False
    assert is_client_ip_allowed(client_ip="testclient", allowlist=allowlist) is False


def test_extract_client_ip_uses_forwarded_header_only_for_trusted_proxy() -> None:
    request = _request(host="127.0.0.1", headers={"X-Forwarded-For": "10.1.1.8, 127.0.0.1"})
    assert extract_client_ip(request, trusted_proxies="127.0.0.1/32") == "10.1.1.8"


def test_extract_client_ip_ignores_forwarded_header_for_untrusted_proxy() -> None:
    request = _request(host="198.51.100.10", headers={"X-Forwarded-For": "10.1.1.8"})
    assert extract_client_ip(request, trusted_proxies="127.0.0.1/32") == "198.51.100.10"


def test_extract_client_ip_supports_ipv6() -> None:
    request = _request(host="::1")
    assert extract_client_ip(request) == "::1"


def test_is_admin_request_allowed_accepts_token_from_allowlisted_ip() -> None:
    request = _request(host="127.0.0.1", headers={"X-Admin-Token": "secret"})
    assert is_admin_request_allowed(
        request,
        expected_token="secret",
        allowlist="127.0.0.1/32",
    ) == (True, None)


def test_is_admin_request_allowed_rejects_unknown_ip_before_token() -> None:
    request = _request(host="192.168.1.5", headers={"X-Admin-Token": "secret"})
    assert is_admin_request_allowed(
        request,
        expected_token="secret",
        allowlist="127.0.0.1/32",
    ) == (False, "ip_not_allowed")


def test_is_admin_request_allowed_rejects_wrong_token() -> None:
    request = _request(host="127.0.0.1", headers={"X-Admin-Token": "guess"})
    assert is_admin_request_allowed(
        request,
        expected_token="secret",
        allowlist="127.0.0.1/32",
    ) == (False, "invalid_credentials")
