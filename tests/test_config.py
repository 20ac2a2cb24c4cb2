"""Tests for the configuration module."""

import json
import logging
import os
import tempfile

import pytest
import yaml

from varanus.config import (
    AgentConfig,
    ConfigError,
    load_config,
    split_address,
)


def _write(data, suffix=".yaml", dump=yaml.dump):
    with tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False) as fh:
        dump(data, fh)
        return fh.name


def test_load_config_from_yaml():
    """Loading from a YAML file populates values and keeps interval defaults."""
    path = _write({
        "collector_address": "collector.local:9000",
        "log_level": 2,
        "network_adapter": "wlan0",
        "auth_key": "secret",
        "intervals": {"disk_seconds": 120},
    })
    try:
        cfg = load_config(path)
        assert isinstance(cfg, AgentConfig)
        assert cfg.collector_address == "collector.local:9000"
        assert cfg.log_level == 2
        assert cfg.network_adapter == "wlan0"
        assert cfg.auth_key == "secret"
        assert cfg.intervals.disk_seconds == 120.0
        assert cfg.intervals.load_seconds == 1.0
        assert cfg.intervals.report_warmup_seconds == 5.0
    finally:
        os.unlink(path)


def test_load_config_from_json_with_camel_case_keys():
    """A config.json with camelCase keys is accepted."""
    path = _write({
        "configVersion": 1,
        "collectorAddress": "10.0.0.5:7000",
        "logLevel": 0,
        "networkAdapterName": "enp3s0",
        "authKey": "abc123",
    }, suffix=".json", dump=json.dump)
    try:
        cfg = load_config(path)
        assert cfg.config_version == 1
        assert cfg.collector_address == "10.0.0.5:7000"
        assert cfg.log_level == 0
        assert cfg.network_adapter == "enp3s0"
        assert cfg.auth_key == "abc123"
    finally:
        os.unlink(path)


def test_missing_file_is_an_error():
    with pytest.raises(ConfigError):
        load_config("/tmp/nonexistent_varanus.yaml")


def test_invalid_yaml_is_an_error():
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        fh.write("collector_address: [unclosed\n")
        path = fh.name
    try:
        with pytest.raises(ConfigError):
            load_config(path)
    finally:
        os.unlink(path)


def test_non_mapping_is_an_error():
    path = _write(["not", "a", "mapping"])
    try:
        with pytest.raises(ConfigError):
            load_config(path)
    finally:
        os.unlink(path)


@pytest.mark.parametrize("data", [
    {"collector_address": "no-port"},
    {"collector_address": "host:notaport"},
    {"collector_address": "host:9000", "log_level": 7},
    {"collector_address": "host:9000", "intervals": {"report_seconds": 0}},
    {"collector_address": "host:9000", "log_level": "loud"},
])
def test_validation_errors(data):
    path = _write(data)
    try:
        with pytest.raises(ConfigError):
            load_config(path)
    finally:
        os.unlink(path)


def test_newer_config_version_warns(caplog):
    caplog.set_level(logging.WARNING)
    path = _write({"collector_address": "host:9000", "config_version": 99})
    try:
        cfg = load_config(path)
        assert cfg.config_version == 99
        assert "newer than supported" in caplog.text
    finally:
        os.unlink(path)


def test_env_override():
    """Environment variables override file values."""
    path = _write({"collector_address": "file-host:9000", "auth_key": "from-file"})
    try:
        os.environ["VARANUS_COLLECTOR_ADDRESS"] = "env-host:9100"
        os.environ["VARANUS_AUTH_KEY"] = "from-env"
        os.environ["VARANUS_LOG_LEVEL"] = "3"
        cfg = load_config(path)
        assert cfg.collector_address == "env-host:9100"
        assert cfg.auth_key == "from-env"
        assert cfg.log_level == 3
    finally:
        os.environ.pop("VARANUS_COLLECTOR_ADDRESS", None)
        os.environ.pop("VARANUS_AUTH_KEY", None)
        os.environ.pop("VARANUS_LOG_LEVEL", None)
        os.unlink(path)


def test_split_address():
    assert split_address("127.0.0.1:9000") == ("127.0.0.1", 9000)
    assert split_address("[::1]:9000") == ("::1", 9000)
    with pytest.raises(ValueError):
        split_address(":9000")
    with pytest.raises(ValueError):
        split_address("host:70000")
