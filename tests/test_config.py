# tests/test_config.py
import pytest
from pydantic import ValidationError

from gaia_hedera_agent.config import load_settings
from gaia_hedera_agent.errors import ConfigError


def test_settings_from_env_with_defaults(env):
    s = load_settings()
    assert s.gaia_node_url == "http://localhost:8080/v1"
    assert s.gaia_api_key.get_secret_value() == "gaia-test-key"
    assert s.gaia_model_name == "llama"
    assert s.account_id == "0.0.1234"
    assert s.temperature == 0.0
    assert s.hedera_network == "testnet"
    assert s.key_type == "ecdsa"
    assert s.agent_profile == "tool-calling"
    assert s.memory_window == 0
    assert s.preflight is False


def test_secrets_do_not_leak_into_repr(env):
    s = load_settings()
    assert "gaia-test-key" not in repr(s)
    assert "11" * 32 not in repr(s)


def test_missing_private_key_is_a_config_error(env):
    env.delenv("PRIVATE_KEY")
    with pytest.raises(ConfigError) as ei:
        load_settings()
    assert "private_key" in str(ei.value).lower()


def test_blank_private_key_is_a_config_error(env):
    env.setenv("PRIVATE_KEY", "   ")
    with pytest.raises(ConfigError):
        load_settings()


def test_malformed_account_id_is_rejected(env):
    env.setenv("ACCOUNT_ID", "1234")
    with pytest.raises(ConfigError) as ei:
        load_settings()
    assert "account" in str(ei.value).lower()


def test_endpoint_must_be_http_and_loses_trailing_slash(env):
    env.setenv("GAIA_NODE_URL", "https://llama8b.gaia.domains/v1/")
    assert load_settings().gaia_node_url == "https://llama8b.gaia.domains/v1"

    env.setenv("GAIA_NODE_URL", "llama8b.gaia.domains")
    with pytest.raises(ConfigError):
        load_settings()


def test_bools_and_choices_tolerate_inline_comments(env):
    env.setenv("AGENT_VERBOSE", "yes   # chatty")
    env.setenv("HEDERA_NETWORK", "MAINNET # careful")
    env.setenv("HEDERA_KEY_TYPE", "ED25519")
    s = load_settings()
    assert s.agent_verbose is True
    assert s.hedera_network == "mainnet"
    assert s.key_type == "ed25519"


def test_unknown_network_is_rejected(env):
    env.setenv("HEDERA_NETWORK", "devnet")
    with pytest.raises(ConfigError):
        load_settings()


def test_overrides_win_and_none_is_ignored(env):
    env.setenv("AGENT_PROFILE", "nft")
    assert load_settings(agent_profile=None).agent_profile == "nft"
    assert load_settings(agent_profile="return-bytes").agent_profile == "return-bytes"


def test_settings_are_immutable(env):
    s = load_settings()
    with pytest.raises(ValidationError):
        s.agent_profile = "nft"
