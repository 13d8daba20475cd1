"""Unit Tests for core utilities."""

from datetime import datetime
from ipaddress import IPv4Network

from admin_shell.core.utils import digest, get_client_ip, to_json, utc_now


def test_utc_now_is_naive():
    now = utc_now()
    assert isinstance(now, datetime)
    assert now.tzinfo is None


class TestGetClientIp:
    def test_forwarded_header_ignored_without_trusted_proxies(self, make_context):
        context = make_context(
            headers={"X-Forwarded-For": "203.0.113.9"},
            client=("192.0.2.5", 1234),
        )
        assert get_client_ip(context.request) == "192.0.2.5"

    def test_forwarded_header_ignored_from_untrusted_peer(self, make_context):
        context = make_context(
            headers={"X-Forwarded-For": "203.0.113.9"},
            client=("192.0.2.5", 1234),
        )
        assert get_client_ip(context.request, ["10.0.0.0/8"]) == "192.0.2.5"

    def test_trusted_proxy_chain_walked_from_the_right(self, make_context):
        context = make_context(
            headers={"X-Forwarded-For": "198.51.100.7, 203.0.113.9, 10.0.0.3"},
            client=("10.0.0.2", 1234),
        )
        assert get_client_ip(context.request, ["10.0.0.0/8"]) == "203.0.113.9"

    def test_trusted_proxy_without_header_uses_peer(self, make_context):
        context = make_context(client=("10.0.0.2", 1234))
        assert get_client_ip(context.request, [IPv4Network("10.0.0.2/32")]) == "10.0.0.2"

    def test_falls_back_to_peer_address(self, make_context):
        context = make_context(client=("192.0.2.5", 1234))
        assert get_client_ip(context.request) == "192.0.2.5"


class TestToJson:
    def test_serializes_unknown_types_with_str(self):
        assert to_json({"at": datetime(2024, 1, 2)}) == '{"at": "2024-01-02 00:00:00"}'

    def test_keeps_unicode(self):
        assert to_json({"name": "管理员"}) == '{"name": "管理员"}'

    def test_truncates_to_limit(self):
        assert len(to_json("x" * 100, limit=10)) == 10


class TestDigest:
    def test_stable_and_short(self):
        assert digest("payload") == digest("payload")
        assert len(digest("payload")) == 32

    def test_differs_per_input(self):
        assert digest("a") != digest("b")
