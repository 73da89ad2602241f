"""Tests for anonymous listener identity derivation."""

from __future__ import annotations

import hashlib
import re

import pytest
from starlette.requests import Request

from radio_ratings.core.settings import Settings
from radio_ratings.services.identity import (
    UNKNOWN_CLIENT_ADDRESS,
    client_user_id,
    derive_user_id,
    resolve_client_address,
)

HEX16 = re.compile(r"^[0-9a-f]{16}$")


def make_request(
    headers: dict[str, str] | None = None,
    client: tuple[str, int] | None = None,
) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "client": client,
    }
    return Request(scope)


class TestResolveClientAddress:
    def test_forwarded_header_wins(self) -> None:
        request = make_request({"X-Forwarded-For": "192.168.1.100"}, ("10.0.0.1", 5000))
        assert resolve_client_address(request) == "192.168.1.100"

    def test_forwarded_chain_used_verbatim(self) -> None:
        request = make_request({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"}, ("10.0.0.1", 5000))
        assert resolve_client_address(request) == "203.0.113.7, 10.0.0.2"

    def test_peer_address_when_header_absent(self) -> None:
        request = make_request(client=("10.0.0.1", 5000))
        assert resolve_client_address(request) == "10.0.0.1"

    def test_empty_header_falls_through_to_peer(self) -> None:
        request = make_request({"X-Forwarded-For": ""}, ("10.0.0.1", 5000))
        assert resolve_client_address(request) == "10.0.0.1"

    def test_fallback_when_nothing_known(self) -> None:
        request = make_request()
        assert resolve_client_address(request) == UNKNOWN_CLIENT_ADDRESS == "0.0.0.0"

    def test_ipv6_forwarded_address(self) -> None:
        address = "2001:0db8:85a3:0000:0000:8a2e:0370:7334"
        request = make_request({"X-Forwarded-For": address})
        assert resolve_client_address(request) == address

    def test_custom_header_and_fallback(self) -> None:
        request = make_request({"X-Real-IP": "198.51.100.4", "X-Forwarded-For": "1.1.1.1"})
        assert resolve_client_address(request, header_name="x-real-ip") == "198.51.100.4"
        assert resolve_client_address(make_request(), fallback="unknown") == "unknown"


class TestDeriveUserId:
    def test_matches_truncated_sha256(self) -> None:
        assert derive_user_id("abc") == "ba7816bf8f01cfea"
        assert derive_user_id("") == "e3b0c44298fc1c14"

    def test_is_deterministic(self) -> None:
        assert derive_user_id("192.168.1.100") == derive_user_id("192.168.1.100")

    @pytest.mark.parametrize(
        "address",
        ["", "0.0.0.0", "127.0.0.1", "::1", "203.0.113.7, 10.0.0.2", "ünïcødé", "x" * 4096],
    )
    def test_format_is_sixteen_lowercase_hex(self, address: str) -> None:
        assert HEX16.match(derive_user_id(address))

    def test_distinct_addresses_get_distinct_ids(self) -> None:
        addresses = [f"10.{a}.{b}.{c}" for a in range(4) for b in range(16) for c in range(32)]
        ids = {derive_user_id(address) for address in addresses}
        assert len(ids) == len(addresses)

    def test_uses_utf8_bytes(self) -> None:
        address = "café"
        expected = hashlib.sha256(address.encode("utf-8")).hexdigest()[:16]
        assert derive_user_id(address) == expected


def test_client_user_id_uses_settings() -> None:
    settings = Settings(FORWARDED_FOR_HEADER="x-client-ip", FALLBACK_CLIENT_ADDRESS="nowhere")
    request = make_request({"X-Client-IP": "5.6.7.8", "X-Forwarded-For": "1.2.3.4"})
    assert client_user_id(request, settings) == derive_user_id("5.6.7.8")
    assert client_user_id(make_request(), settings) == derive_user_id("nowhere")
