# tests/test_cli.py
import json

import pytest
from typer.testing import CliRunner

from conftest import FakeAgent, Transcript, turn
from gaia_hedera_agent import cli
from gaia_hedera_agent.errors import ConfigError
from gaia_hedera_agent.llm import PreflightResult
from gaia_hedera_agent.session import Session

runner = CliRunner()


@pytest.fixture(autouse=True)
def _keep_root_logging(monkeypatch):
    # chat() reconfigures the root logger; keep pytest's capture handlers intact.
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)


def test_profiles_lists_builtins_as_json():
    result = runner.invoke(cli.app, ["profiles"])
    assert result.exit_code == 0, result.output
    data = {p["id"]: p for p in json.loads(result.output)}
    assert {"tool_calling", "nft", "return_bytes"} <= set(data)
    assert data["return_bytes"]["mode"] == "return_bytes"
    assert data["nft"]["source"] == "builtin"


def test_chat_without_configuration_fails_fast(clean_env):
    result = runner.invoke(cli.app, ["chat"])
    assert result.exit_code == 1
    assert "Fatal error during CLI bootstrap" in result.output


def test_chat_with_unknown_profile_fails_fast(env):
    result = runner.invoke(cli.app, ["chat", "--profile", "nope"])
    assert result.exit_code == 1
    assert "Unknown agent profile" in result.output


def test_chat_runs_session_until_exit(env, monkeypatch):
    agent = FakeAgent(turn("Hello! How can I help with Hedera today?"))
    transcript = Transcript("hi", "exit")
    built = {}

    def fake_bootstrap(settings):
        built["profile"] = settings.agent_profile
        return Session(
            agent,
            banner="Hedera Agent CLI",
            read_line=transcript.read,
            echo=transcript.out,
            echo_err=transcript.err,
            indicator=transcript.indicator,
        )

    monkeypatch.setattr(cli, "bootstrap", fake_bootstrap)
    result = runner.invoke(cli.app, ["chat", "-p", "return-bytes"])

    assert result.exit_code == 0, result.output
    assert built["profile"] == "return-bytes"
    assert agent.calls == ["hi"]
    assert transcript.printed()[-1] == "Goodbye!"


def test_env_file_is_loaded_without_overriding_real_env(clean_env, tmp_path, monkeypatch):
    (tmp_path / "agent.env").write_text(
        "GAIA_NODE_URL=http://gaia.local/v1\n"
        "GAIA_API_KEY=from-file\n"
        "GAIA_MODEL_NAME=llama\n"
        "ACCOUNT_ID=0.0.42\n"
        "PRIVATE_KEY=0x" + "22" * 32 + "\n"
        "GAIA_PREFLIGHT=false\n"
    )
    clean_env.setenv("ACCOUNT_ID", "0.0.7")
    for key in ("GAIA_NODE_URL", "GAIA_API_KEY", "GAIA_MODEL_NAME", "PRIVATE_KEY", "GAIA_PREFLIGHT"):
        # Registers "unset" as the value to restore, undoing what load_dotenv writes.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)

    settings = cli._load(tmp_path / "agent.env")
    assert settings.account_id == "0.0.7"
    assert settings.gaia_node_url == "http://gaia.local/v1"


def test_check_reports_invalid_configuration(clean_env):
    result = runner.invoke(cli.app, ["check"])
    assert result.exit_code == 1
    assert "[FAIL] configuration:" in result.output
    assert "[SKIP] model endpoint: configuration invalid" in result.output
    assert "0/4 checks passed" in result.output


def test_check_passes_with_stubbed_operator_and_endpoint(env, monkeypatch):
    monkeypatch.setattr(cli, "parse_operator", lambda settings: None)
    monkeypatch.setattr(cli, "preflight", lambda settings: PreflightResult(True, "reachable"))
    result = runner.invoke(cli.app, ["check"])
    assert result.exit_code == 0, result.output
    assert "[PASS] profile: tool_calling" in result.output
    assert "4/4 checks passed" in result.output


def test_check_counts_only_passing_rows(env, monkeypatch):
    monkeypatch.setattr(cli, "parse_operator", lambda settings: None)
    monkeypatch.setattr(cli, "preflight", lambda settings: PreflightResult(False, "HTTP 401"))
    result = runner.invoke(cli.app, ["check"])
    assert result.exit_code == 1
    assert "[FAIL] model endpoint: HTTP 401" in result.output
    assert "3/4 checks passed" in result.output


def test_bad_credentials_fail_before_the_endpoint_is_probed(env, monkeypatch):
    probed = []

    def bad_bootstrap(settings):
        raise ConfigError("PRIVATE_KEY could not be parsed as a ECDSA key (ValueError)")

    monkeypatch.setattr(cli, "bootstrap", bad_bootstrap)
    monkeypatch.setattr(cli, "warn_if_unreachable", probed.append)
    result = runner.invoke(cli.app, ["chat"])
    assert result.exit_code == 1
    assert "PRIVATE_KEY could not be parsed" in result.output
    assert probed == []
