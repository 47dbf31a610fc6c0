"""Tests for Node value object."""

import pytest
from shipyard.domain.value_objects.node import Node


class TestNode:
    def test_default_values(self):
        node = Node(host="example.com")
        assert node.user == "root"
        assert node.port == 22
        assert node.name == ""

    def test_custom_values(self):
        node = Node(host="10.0.0.1", user="deploy", port=2222, name="web1")
        assert node.host == "10.0.0.1"
        assert node.user == "deploy"
        assert node.port == 2222
        assert node.name == "web1"

    def test_str(self):
        node = Node(host="web1.example.com", user="admin", port=22)
        assert str(node) == "admin@web1.example.com:22"

    def test_display_name_prefers_name(self):
        assert Node(host="10.0.0.1", name="web1").display_name == "web1"
        assert Node(host="10.0.0.1").display_name == "10.0.0.1"

    def test_frozen(self):
        node = Node(host="example.com")
        with pytest.raises(AttributeError):
            node.host = "other.com"

    def test_equality(self):
        a = Node(host="example.com", user="root", port=22)
        b = Node(host="example.com", user="root", port=22)
        assert a == b

    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1", "::1"])
    def test_local_hosts(self, host):
        assert Node(host=host).is_local is True

    def test_remote_host_is_not_local(self):
        assert Node(host="web1.example.com").is_local is False

    def test_loopback_range_is_local(self):
        assert Node(host="127.0.1.1").is_local is True


class TestNodeValidation:
    def test_empty_host_rejected(self):
        with pytest.raises(ValueError, match="Invalid hostname"):
            Node(host="")

    def test_empty_user_rejected(self):
        with pytest.raises(ValueError, match="user cannot be empty"):
            Node(host="example.com", user="")

    def test_port_too_low(self):
        with pytest.raises(ValueError, match="Port must be"):
            Node(host="example.com", port=0)

    def test_port_too_high(self):
        with pytest.raises(ValueError, match="Port must be"):
            Node(host="example.com", port=70000)

    def test_invalid_ipv4_octet(self):
        with pytest.raises(ValueError, match="Invalid hostname"):
            Node(host="10.0.0.256")

    def test_valid_ipv6(self):
        node = Node(host="::1")
        assert node.host == "::1"


class TestNodeParse:
    def test_simple_host(self):
        node = Node.parse("example.com")
        assert node.host == "example.com"
        assert node.user == "root"
        assert node.port == 22

    def test_user_at_host_port(self):
        node = Node.parse("admin@web1.example.com:2222")
        assert node.user == "admin"
        assert node.host == "web1.example.com"
        assert node.port == 2222

    def test_name_passed_through(self):
        node = Node.parse("deploy@10.0.0.1", name="web1")
        assert node.name == "web1"
        assert node.user == "deploy"

    def test_ipv6_bracket(self):
        node = Node.parse("root@[::1]:2222")
        assert node.host == "::1"
        assert node.port == 2222

    def test_unterminated_bracket(self):
        with pytest.raises(ValueError, match="Invalid connection string"):
            Node.parse("[::1")

    def test_non_numeric_port(self):
        with pytest.raises(ValueError, match="Invalid connection string"):
            Node.parse("deploy@web1.example.com:ssh")

    def test_whitespace_trimmed(self):
        node = Node.parse("  example.com  ")
        assert node.host == "example.com"
