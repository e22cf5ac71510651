"""
Tests for chainlaunch/config.py and chainlaunch/account.py
"""

import pytest

from chainlaunch.account import StaticAccount
from chainlaunch.config import (
    DEFAULT_GENESIS_TIMEOUT,
    MAX_GENESIS_SIZE,
    SPN_ADDRESS_PREFIX,
    LaunchConfig,
)


class TestLaunchConfig:
    """Tests for LaunchConfig."""

    def test_defaults(self):
        config = LaunchConfig()
        assert config.address_prefix == SPN_ADDRESS_PREFIX
        assert config.request_timeout is None
        assert config.genesis_timeout == DEFAULT_GENESIS_TIMEOUT
        assert config.max_genesis_size == MAX_GENESIS_SIZE

    def test_from_empty_env(self):
        assert LaunchConfig.from_env({}) == LaunchConfig()

    def test_from_env(self):
        config = LaunchConfig.from_env({
            "CHAINLAUNCH_ADDRESS_PREFIX": "cosmos",
            "CHAINLAUNCH_REQUEST_TIMEOUT": "12.5",
            "CHAINLAUNCH_GENESIS_TIMEOUT": "60",
            "CHAINLAUNCH_MAX_GENESIS_SIZE": "1024",
        })
        assert config.address_prefix == "cosmos"
        assert config.request_timeout == 12.5
        assert config.genesis_timeout == 60.0
        assert config.max_genesis_size == 1024

    @pytest.mark.parametrize("name,value", [
        ("CHAINLAUNCH_REQUEST_TIMEOUT", "soon"),
        ("CHAINLAUNCH_REQUEST_TIMEOUT", "-1"),
        ("CHAINLAUNCH_GENESIS_TIMEOUT", "0"),
        ("CHAINLAUNCH_MAX_GENESIS_SIZE", "big"),
        ("CHAINLAUNCH_MAX_GENESIS_SIZE", "-10"),
    ])
    def test_invalid_values_keep_defaults(self, name, value):
        assert LaunchConfig.from_env({name: value}) == LaunchConfig()

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("CHAINLAUNCH_REQUEST_TIMEOUT", "3")
        assert LaunchConfig.from_env().request_timeout == 3.0

    def test_to_dict(self):
        data = LaunchConfig(request_timeout=5.0).to_dict()
        assert data["request_timeout"] == 5.0
        assert data["address_prefix"] == SPN_ADDRESS_PREFIX


class TestStaticAccount:
    """Tests for StaticAccount."""

    def test_for_spn(self):
        account = StaticAccount.for_spn("alice", "spn1abc")
        assert account.name == "alice"
        assert account.address(SPN_ADDRESS_PREFIX) == "spn1abc"

    def test_unknown_prefix(self):
        account = StaticAccount.for_spn("alice", "spn1abc")
        with pytest.raises(KeyError, match="cosmos"):
            account.address("cosmos")
