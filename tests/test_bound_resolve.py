import json
from unittest.mock import patch

from wb.bound_resolver import bound_resolve
from wb.bound_resolver.bind_to_device import InterfaceBindToDeviceProvider
from wb.bound_resolver.errors import QueryReadError


def test_resolve_with_command_line_options(tmp_path, capsys):
    with patch.object(bound_resolve, "lookup_ip", return_value=["10.0.0.1"]) as lookup_mock:
        res = bound_resolve.main(
            [
                "-c",
                str(tmp_path / "missing.conf"),
                "--iface",
                "wwan0",
                "--dns-server",
                "8.8.8.8",
                "--timeout",
                "3",
                "example.com",
            ]
        )
    assert res == 0
    assert json.loads(capsys.readouterr().out) == {"example.com": ["10.0.0.1"]}
    assert len(lookup_mock.mock_calls) == 1
    host, dial_config = lookup_mock.mock_calls[0].args
    assert host == "example.com"
    assert isinstance(dial_config.bind_to_device_provider, InterfaceBindToDeviceProvider)
    assert dial_config.bind_to_device_provider.iface == "wwan0"
    assert dial_config.bind_to_device_dns_server == "8.8.8.8"
    assert dial_config.connect_timeout.total_seconds() == 3


def test_command_line_overrides_config(tmp_path, capsys):
    path = tmp_path / "wb-bound-resolver.conf"
    path.write_text(json.dumps({"bind_to_device": "eth0", "dns_server": "1.1.1.1"}), encoding="utf-8")
    with patch.object(bound_resolve, "lookup_ip", return_value=[]) as lookup_mock:
        res = bound_resolve.main(["-c", str(path), "--dns-server", "9.9.9.9", "example.com"])
    assert res == 0
    assert json.loads(capsys.readouterr().out) == {"example.com": []}
    dial_config = lookup_mock.mock_calls[0].args[1]
    assert dial_config.bind_to_device_provider.iface == "eth0"
    assert dial_config.bind_to_device_dns_server == "9.9.9.9"


def test_failed_host_is_omitted(tmp_path, capsys):
    def lookup_side_effect_fn(host, _config):
        if host == "bad.example":
            raise QueryReadError(host, "timed out")
        return ["10.0.0.1"]

    with patch.object(bound_resolve, "lookup_ip", side_effect=lookup_side_effect_fn) as lookup_mock:
        res = bound_resolve.main(["-c", str(tmp_path / "missing.conf"), "bad.example", "good.example"])
    assert res == bound_resolve.EXIT_RESOLVE_FAILED
    assert json.loads(capsys.readouterr().out) == {"good.example": ["10.0.0.1"]}
    assert [mock_call.args[0] for mock_call in lookup_mock.mock_calls] == ["bad.example", "good.example"]


def test_not_configured(tmp_path):
    with patch.object(bound_resolve, "lookup_ip") as lookup_mock:
        res = bound_resolve.main(["-c", str(tmp_path / "missing.conf"), "--iface", "eth0", "example.com"])
    assert res == bound_resolve.EXIT_NOT_CONFIGURED
    assert [] == lookup_mock.mock_calls


def test_bad_config_json(tmp_path):
    path = tmp_path / "wb-bound-resolver.conf"
    path.write_text("{not json", encoding="utf-8")
    with patch.object(bound_resolve, "lookup_ip") as lookup_mock:
        res = bound_resolve.main(["-c", str(path), "example.com"])
    assert res == bound_resolve.EXIT_NOT_CONFIGURED
    assert [] == lookup_mock.mock_calls


def test_resolve_hosts():
    with patch.object(bound_resolve, "lookup_ip", side_effect=[["10.0.0.1"], ["10.0.0.2", "10.0.0.3"]]):
        res, ok = bound_resolve.resolve_hosts(["a.example", "b.example"], None)
    assert ok is True
    assert res == {"a.example": ["10.0.0.1"], "b.example": ["10.0.0.2", "10.0.0.3"]}
